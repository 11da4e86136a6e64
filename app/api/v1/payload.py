"""Read JSON, urlencoded or multipart request bodies into typed payloads plus uploaded files."""

import json
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any, Generic, TypeVar

from fastapi import Request, UploadFile
from pydantic import BaseModel, ValidationError

from app.core.config import Settings
from app.core.errors import ApiError, field_errors

T = TypeVar("T", bound=BaseModel)

ALLOWED_IMAGE_EXTENSIONS = frozenset({".jpeg", ".png", ".jpg", ".gif"})
ALLOWED_IMAGE_MIME_TYPES = frozenset({"image/jpeg", "image/png", "image/gif"})
FORM_CONTENT_TYPES = frozenset({"multipart/form-data", "application/x-www-form-urlencoded"})


@dataclass
class Payload(Generic[T]):
    """Validated body fields plus any uploaded files, keyed by form field name."""

    body: T
    files: dict[str, UploadFile]

    @property
    def fields(self) -> dict[str, Any]:
        """Fields the client actually sent with a non-null value."""
        return self.body.model_dump(exclude_unset=True, exclude_none=True)


@dataclass
class ImageUpload:
    filename: str
    content: bytes


def _is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


async def _read_raw(request: Request) -> tuple[dict[str, Any], dict[str, UploadFile]]:
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        data: dict[str, Any] = {}
        files: dict[str, UploadFile] = {}
        for key, value in form.multi_items():
            if _is_upload_file(value):
                # Browsers send an empty part for an untouched file input.
                if getattr(value, "filename", None):
                    files[key] = value
            else:
                data[key] = value
        return data, files

    raw = await request.body()
    if not raw.strip():
        return {}, {}
    try:
        body = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ApiError.validation({"body": [f"Invalid JSON: {e!s}"]}) from e
    if not isinstance(body, dict):
        raise ApiError.validation({"body": ["Request body must be a JSON object."]})
    return body, {}


async def read_payload(request: Request, schema: type[T]) -> Payload[T]:
    """
    Parse the request body and validate it against schema.

    Accepts application/json and form bodies (urlencoded or multipart); a
    missing body is treated as {}. Raises a validation ApiError with a
    per-field message map on failure.
    """
    data, files = await _read_raw(request)
    try:
        body = schema.model_validate(data)
    except ValidationError as e:
        raise ApiError.validation(field_errors(e.errors())) from e
    return Payload(body=body, files=files)


async def read_image(
    payload: Payload[Any],
    field: str,
    settings: Settings,
) -> ImageUpload | None:
    """
    Return the uploaded image for field, or None if absent.

    Extension must be jpeg/png/jpg/gif, content type an image of those kinds,
    and size at most MAX_UPLOAD_KB kilobytes.
    """
    upload = payload.files.get(field)
    if upload is None:
        return None
    filename = upload.filename or ""
    extension = PurePosixPath(filename).suffix.lower()
    content_type = (upload.content_type or "").split(";")[0].strip().lower()
    if extension not in ALLOWED_IMAGE_EXTENSIONS or content_type not in ALLOWED_IMAGE_MIME_TYPES:
        raise ApiError.validation(
            {field: [f"The {field} must be a file of type: jpeg, png, jpg, gif."]}
        )
    content = await upload.read()
    if len(content) > settings.MAX_UPLOAD_KB * 1024:
        raise ApiError.validation(
            {field: [f"The {field} must not be greater than {settings.MAX_UPLOAD_KB} kilobytes."]}
        )
    return ImageUpload(filename=filename, content=content)
