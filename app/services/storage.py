"""Local public-disk storage for uploaded images (avatars, post images)."""

import logging
import uuid
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


def _disk_path(settings: "Settings", relative: str) -> Path:
    root = Path(settings.STORAGE_ROOT).resolve()
    target = (root / relative).resolve()
    if not target.is_relative_to(root):
        raise ValueError(f"Storage path escapes STORAGE_ROOT: {relative!r}")
    return target


def store_file(content: bytes, filename: str, folder: str, settings: "Settings") -> str:
    """
    Write content under STORAGE_ROOT/<folder>/<random>.<ext> and return its public URL.

    The original filename only contributes its extension.
    """
    suffix = PurePosixPath(filename).suffix.lower()
    relative = f"{folder}/{uuid.uuid4().hex}{suffix}"
    path = _disk_path(settings, relative)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return f"{settings.STORAGE_URL_PREFIX}/{relative}"


def delete_file(url: str | None, settings: "Settings") -> bool:
    """
    Delete a previously stored file given its public URL. Returns True if a file was removed.

    Failures are logged, not raised: a leftover file is tolerated.
    """
    if not url:
        return False
    prefix = f"{settings.STORAGE_URL_PREFIX}/"
    if not url.startswith(prefix):
        logger.warning("Not a stored file URL; skipping delete", extra={"url": url})
        return False
    try:
        path = _disk_path(settings, url[len(prefix):])
        path.unlink()
        return True
    except FileNotFoundError:
        logger.warning("Stored file already missing", extra={"url": url})
        return False
    except (OSError, ValueError) as e:
        logger.warning("Failed to delete stored file: %s", e, extra={"url": url})
        return False
