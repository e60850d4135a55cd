"""
Storage of images uploaded alongside articles.

An upload is accepted only if it declares an image/* content type and fits
under the size ceiling. The stored file gets a unique name and the caller
receives the public path (/images/<name>) to record in the article.
"""
import logging
import os
import secrets
import time
from typing import Optional

from src.errors import ImageUploadError
from src.file_utils import atomic_write_bytes

logger = logging.getLogger(__name__)

IMAGES_URL_PREFIX = "/images/"
DEFAULT_MAX_IMAGE_SIZE = 5 * 1024 * 1024


def unique_image_name(filename: str) -> str:
    """Build a collision-resistant file name that keeps the original extension."""
    _, ext = os.path.splitext(os.path.basename(filename or ""))
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext.lower()}"


def store_uploaded_image(
    images_dir: str,
    filename: str,
    content_type: Optional[str],
    data: bytes,
    max_bytes: int = DEFAULT_MAX_IMAGE_SIZE,
) -> str:
    """
    Validate and save an uploaded image.

    Args:
        images_dir: Directory to write the image into (created if missing)
        filename: Original client-side file name (only its extension is kept)
        content_type: Declared MIME type of the upload
        data: Raw file contents
        max_bytes: Size ceiling in bytes

    Returns:
        Public path of the stored image, e.g. /images/1700000000000-42.png

    Raises:
        ImageUploadError: If the upload is empty, not an image, or too large.
    """
    if not content_type or not content_type.lower().startswith("image/"):
        raise ImageUploadError("Only image files can be uploaded")
    if not data:
        raise ImageUploadError("Uploaded image is empty")
    if len(data) > max_bytes:
        raise ImageUploadError(f"Image exceeds the {max_bytes} byte limit")

    os.makedirs(images_dir, exist_ok=True)
    name = unique_image_name(filename)
    atomic_write_bytes(os.path.join(images_dir, name), data)
    logger.info("Stored uploaded image %s (%d bytes)", name, len(data))
    return IMAGES_URL_PREFIX + name


def resolve_image_path(uploaded_path: Optional[str], existing_image: Optional[str]) -> str:
    """Pick the image to record: a fresh upload wins over the existing value."""
    return uploaded_path or existing_image or ""
