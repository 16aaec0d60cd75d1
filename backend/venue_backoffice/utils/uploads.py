"""
Helpers for files stored under the local upload directory
"""
import logging
import os
from typing import Optional

from venue_backoffice.config import settings

logger = logging.getLogger(__name__)


def resolve_upload_path(url_path: str) -> Optional[str]:
    """
    Map a stored ``/uploads/...`` path to a file inside UPLOAD_DIR.

    Returns None for remote URLs and for paths that would escape the upload
    directory.
    """
    if not url_path or url_path.startswith(("http://", "https://")):
        return None

    relative = url_path.lstrip("/")
    if relative.startswith("uploads/"):
        relative = relative[len("uploads/"):]

    root = os.path.realpath(settings.UPLOAD_DIR)
    candidate = os.path.realpath(os.path.join(root, relative))
    if os.path.commonpath([root, candidate]) != root:
        return None
    return candidate


def staff_image_path(value: Optional[str], prefix: Optional[str] = None) -> Optional[str]:
    """Stored path for a staff image; bare file names are placed under ``prefix`` (STAFF_IMAGE_URL_PREFIX by default)"""
    if not value:
        return None
    if value.startswith(("/", "http://", "https://")):
        return value
    prefix = prefix or settings.STAFF_IMAGE_URL_PREFIX
    return prefix.rstrip("/") + "/" + value


def remove_upload(url_path: Optional[str]) -> bool:
    """Delete a previously uploaded file. Failures are logged, never raised."""
    if not url_path:
        return False
    path = resolve_upload_path(url_path)
    if path is None:
        return False
    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    except OSError as exc:
        logger.warning("Could not remove upload %s: %s", url_path, exc)
        return False
    logger.info("Removed replaced upload %s", url_path)
    return True
