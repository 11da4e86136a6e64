"""Global exception handlers: the single place where failures become error envelopes.

Every handler funnels into classify(); the resulting Fault decides status,
message and errors. Persistence and unclassified faults are logged with their
traceback whether or not DEBUG echoes the detail to the client.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.core.errors import ApiError, FaultKind, classify
from app.core.responses import error_response

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(ApiError, handle_exception)
    app.add_exception_handler(RequestValidationError, handle_exception)
    app.add_exception_handler(StarletteHTTPException, handle_exception)
    app.add_exception_handler(SQLAlchemyError, handle_exception)
    # Exception is served by Starlette's ServerErrorMiddleware (re-raised after responding).
    app.add_exception_handler(Exception, handle_exception)


async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
    """Classify exc and render it as the error envelope."""
    fault = classify(exc, debug=get_settings().DEBUG)
    if fault.logged:
        logger.error(
            "Unhandled %s on %s %s: %s",
            fault.kind.value,
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
            extra={"fault_kind": fault.kind.value, "path": request.url.path},
        )
    else:
        logger.info(
            "Request failed: %s",
            fault.message,
            extra={
                "fault_kind": fault.kind.value,
                "status_code": fault.status_code,
                "path": request.url.path,
            },
        )
    headers = None
    if fault.kind is FaultKind.UNAUTHENTICATED:
        headers = {"WWW-Authenticate": "Bearer"}
    elif fault.kind is FaultKind.METHOD_NOT_ALLOWED and isinstance(exc, StarletteHTTPException):
        headers = exc.headers
    return error_response(fault.message, fault.status_code, fault.errors, headers)
