"""Core configuration, database session, error taxonomy and response envelopes."""

from app.core.config import get_settings, settings
from app.core.database import get_db
from app.core.errors import ApiError, FaultKind, classify
from app.core.responses import error_response, paginated_response, success_response

__all__ = [
    "ApiError",
    "FaultKind",
    "classify",
    "error_response",
    "get_db",
    "get_settings",
    "paginated_response",
    "settings",
    "success_response",
]
