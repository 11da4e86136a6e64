"""Fault taxonomy and the classifier that maps any exception to (status, message, errors).

Controllers and dependencies raise ApiError tagged with a FaultKind; everything
else (framework, validation, database, unexpected) is recognised here. The
exception handlers in app.api.error_handlers call classify() exactly once per
failed request, so status codes and messages are decided in one place.
"""

import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any

from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException


class FaultKind(str, Enum):
    """Every way a request can fail, as surfaced to clients."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHORIZATION_DENIED = "authorization_denied"
    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    REFERENTIAL_INTEGRITY_VIOLATION = "referential_integrity_violation"
    PERSISTENCE_ERROR = "persistence_error"
    UNCLASSIFIED = "unclassified"


FAULT_STATUS: dict[FaultKind, int] = {
    FaultKind.UNAUTHENTICATED: 401,
    FaultKind.AUTHORIZATION_DENIED: 403,
    FaultKind.VALIDATION_FAILED: 422,
    FaultKind.NOT_FOUND: 404,
    FaultKind.METHOD_NOT_ALLOWED: 405,
    FaultKind.REFERENTIAL_INTEGRITY_VIOLATION: 409,
    FaultKind.PERSISTENCE_ERROR: 500,
    FaultKind.UNCLASSIFIED: 500,
}

UNAUTHENTICATED_MESSAGE = "Unauthenticated. Please login to continue."
FORBIDDEN_MESSAGE = "You are not authorized to perform this action."
VALIDATION_MESSAGE = "Validation failed."
ROUTE_NOT_FOUND_MESSAGE = "The requested resource was not found."
METHOD_NOT_ALLOWED_MESSAGE = "The specified method for the request is invalid."
CONFLICT_MESSAGE = "Cannot delete resource because it is related to other resources."
DATABASE_ERROR_MESSAGE = "Database error occurred. Please try again later."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."

DEFAULT_MESSAGES: dict[FaultKind, str] = {
    FaultKind.UNAUTHENTICATED: UNAUTHENTICATED_MESSAGE,
    FaultKind.AUTHORIZATION_DENIED: FORBIDDEN_MESSAGE,
    FaultKind.VALIDATION_FAILED: VALIDATION_MESSAGE,
    FaultKind.NOT_FOUND: ROUTE_NOT_FOUND_MESSAGE,
    FaultKind.METHOD_NOT_ALLOWED: METHOD_NOT_ALLOWED_MESSAGE,
    FaultKind.REFERENTIAL_INTEGRITY_VIOLATION: CONFLICT_MESSAGE,
    FaultKind.PERSISTENCE_ERROR: DATABASE_ERROR_MESSAGE,
    FaultKind.UNCLASSIFIED: UNEXPECTED_ERROR_MESSAGE,
}

# Postgres SQLSTATE for foreign_key_violation.
PG_FOREIGN_KEY_VIOLATION = "23503"

# Location prefixes FastAPI/pydantic put before the field name.
_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})

FieldErrors = dict[str, list[str]]


class ApiError(Exception):
    """Raised by controllers and dependencies; carries its FaultKind explicitly."""

    def __init__(
        self,
        kind: FaultKind,
        message: str | None = None,
        errors: FieldErrors | None = None,
    ) -> None:
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        self.errors = errors
        super().__init__(self.message)

    @classmethod
    def unauthenticated(cls) -> "ApiError":
        return cls(FaultKind.UNAUTHENTICATED)

    @classmethod
    def forbidden(cls, message: str) -> "ApiError":
        return cls(FaultKind.AUTHORIZATION_DENIED, message)

    @classmethod
    def not_found(cls, resource: str) -> "ApiError":
        return cls(
            FaultKind.NOT_FOUND,
            f"No {resource} found with the specified identifier.",
        )

    @classmethod
    def validation(cls, errors: FieldErrors) -> "ApiError":
        return cls(FaultKind.VALIDATION_FAILED, errors=errors)


@dataclass(frozen=True)
class Fault:
    """Classified outcome of a failed request."""

    kind: FaultKind
    status_code: int
    message: str
    errors: dict[str, Any] | None = None

    @property
    def logged(self) -> bool:
        """Persistence and unclassified faults are always logged with their traceback."""
        return self.kind in (FaultKind.PERSISTENCE_ERROR, FaultKind.UNCLASSIFIED)


def field_errors(errors: list[dict[str, Any]] | Any) -> FieldErrors:
    """Turn pydantic error dicts into {field: [messages]}, keyed by field name."""
    result: FieldErrors = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field = ".".join(loc) if loc else "body"
        result.setdefault(field, []).append(err.get("msg", "Invalid value."))
    return result


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    """
    True when a DELETE was refused because other rows still reference the target.

    Foreign key failures on INSERT/UPDATE (a missing parent) are not included.
    """
    if not str(exc.statement or "").lstrip().upper().startswith("DELETE"):
        return False
    orig = exc.orig
    if getattr(orig, "pgcode", None) == PG_FOREIGN_KEY_VIOLATION:
        return True
    return "foreign key" in str(orig).lower()


def _debug_detail(exc: BaseException) -> dict[str, Any]:
    frames = traceback.extract_tb(exc.__traceback__)
    last = frames[-1] if frames else None
    return {
        "exception": type(exc).__name__,
        "file": last.filename if last else None,
        "line": last.lineno if last else None,
        "trace": traceback.format_tb(exc.__traceback__),
    }


def _fault(kind: FaultKind, message: str | None = None, errors: dict[str, Any] | None = None) -> Fault:
    return Fault(kind, FAULT_STATUS[kind], message or DEFAULT_MESSAGES[kind], errors)


def classify(exc: BaseException, debug: bool = False) -> Fault:
    """
    Map an exception to a Fault. First match wins:

    ApiError (explicit kind) -> request validation -> framework HTTP
    errors (401/403/404/405, other statuses pass through) -> foreign key
    IntegrityError (409) -> other SQLAlchemyError (500, detail suppressed)
    -> anything else (500; message and traceback only when debug).
    """
    if isinstance(exc, ApiError):
        return _fault(exc.kind, exc.message, exc.errors)

    if isinstance(exc, RequestValidationError):
        return _fault(FaultKind.VALIDATION_FAILED, errors=field_errors(exc.errors()))

    if isinstance(exc, StarletteHTTPException):
        if exc.status_code == 401:
            return _fault(FaultKind.UNAUTHENTICATED)
        if exc.status_code == 403:
            return _fault(FaultKind.AUTHORIZATION_DENIED)
        if exc.status_code == 404:
            return _fault(FaultKind.NOT_FOUND)
        if exc.status_code == 405:
            return _fault(FaultKind.METHOD_NOT_ALLOWED)
        return Fault(FaultKind.UNCLASSIFIED, exc.status_code, str(exc.detail))

    if isinstance(exc, IntegrityError) and is_foreign_key_violation(exc):
        return _fault(FaultKind.REFERENTIAL_INTEGRITY_VIOLATION)

    if isinstance(exc, SQLAlchemyError):
        return _fault(FaultKind.PERSISTENCE_ERROR)

    if debug:
        return _fault(
            FaultKind.UNCLASSIFIED,
            str(exc) or type(exc).__name__,
            _debug_detail(exc),
        )
    return _fault(FaultKind.UNCLASSIFIED)
