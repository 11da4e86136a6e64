"""Uniform JSON envelopes: success, error and paginated."""

from typing import TYPE_CHECKING, Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

if TYPE_CHECKING:
    from app.services.pagination import Page


def _has_payload(data: Any) -> bool:
    # Empty lists are real (empty) collections; None and {} mean "no payload".
    if data is None:
        return False
    if isinstance(data, dict) and not data:
        return False
    return True


def success_body(data: Any = None, message: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"status": "success"}
    if message:
        body["message"] = message
    if _has_payload(data):
        body["data"] = jsonable_encoder(data)
    return body


def error_body(message: str, errors: dict[str, Any] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"status": "error", "message": message}
    if errors:
        body["errors"] = jsonable_encoder(errors)
    return body


def paginated_body(page: "Page", message: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {
        "status": "success",
        "data": jsonable_encoder(page.items),
        "pagination": {
            "total": page.total,
            "per_page": page.per_page,
            "current_page": page.current_page,
            "last_page": page.last_page,
            "from": page.first_item,
            "to": page.last_item,
        },
    }
    if message:
        body["message"] = message
    return body


def success_response(
    data: Any = None,
    message: str | None = None,
    status_code: int = 200,
) -> JSONResponse:
    """Return {"status": "success", "message"?, "data"?} with the given status code."""
    return JSONResponse(success_body(data, message), status_code=status_code)


def error_response(
    message: str,
    status_code: int,
    errors: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Return {"status": "error", "message", "errors"?}. Only the error handlers call this."""
    return JSONResponse(error_body(message, errors), status_code=status_code, headers=headers)


def paginated_response(page: "Page", message: str | None = None) -> JSONResponse:
    """Return the success envelope plus a pagination block for one page of results."""
    return JSONResponse(paginated_body(page, message))
