"""Upload handling for wish photos, validated with Pillow."""

import logging
import re
import time
from io import BytesIO
from pathlib import Path
from typing import Optional, Tuple

from fastapi import UploadFile
from nanoid import generate
from PIL import Image, UnidentifiedImageError

from wishcard.config import settings

logger = logging.getLogger(__name__)

UPLOAD_FIELD = "photo"

_WHITESPACE = re.compile(r"\s+")
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_SUFFIX_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def validate_image(file: UploadFile) -> Tuple[bool, str]:
    """Validate an uploaded image file.

    Args:
        file: FastAPI UploadFile object

    Returns:
        Tuple of (is_valid, error_message)
    """
    # Check content type
    content_type = file.content_type or ""
    if not content_type.startswith("image/"):
        return False, "Only image files allowed"

    # Check file size
    file_size = 0
    content = file.file.read(1024)
    file_size += len(content)
    while content:
        if file_size > settings.MAX_FILE_SIZE:
            file.file.seek(0)
            return False, f"File too large: maximum size is {settings.MAX_FILE_SIZE // 1024 // 1024}MB"
        content = file.file.read(1024)
        file_size += len(content)

    # Check that the bytes really are an image
    file.file.seek(0)
    try:
        with Image.open(BytesIO(file.file.read())) as img:
            img.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError):
        file.file.seek(0)
        return False, "Only image files allowed"

    # Reset file position
    file.file.seek(0)
    return True, ""


def safe_filename(original: Optional[str]) -> str:
    """Reduce an uploaded file name to a safe base name."""
    name = Path((original or "").replace("\\", "/")).name
    name = _WHITESPACE.sub("_", name.strip())
    name = _UNSAFE_CHARS.sub("_", name).lstrip(".")
    return name or "image"


def stored_filename(original: Optional[str]) -> str:
    """Build a timestamp-prefixed, collision-resistant name for an upload."""
    millis = int(time.time() * 1000)
    return f"{millis}-{generate(_SUFFIX_ALPHABET, 6)}_{safe_filename(original)}"


def save_image(file: UploadFile) -> str:
    """Write an already validated upload into the upload directory.

    Args:
        file: FastAPI UploadFile object

    Returns:
        The stored file name

    Raises:
        ValueError: If the file cannot be written
    """
    upload_dir = settings.upload_path
    upload_dir.mkdir(parents=True, exist_ok=True)

    filename = stored_filename(file.filename)
    output_path = upload_dir / filename
    try:
        file.file.seek(0)
        output_path.write_bytes(file.file.read())
    except OSError as e:
        raise ValueError(f"Failed to save image: {e}")

    logger.debug(f"Stored upload {filename}")
    return filename


def delete_image(filename: str) -> bool:
    """Delete an image file.

    Args:
        filename: Stored file name of the image

    Returns:
        True if deleted successfully, False otherwise
    """
    full_path = get_image_path(filename)
    if full_path is None:
        return False
    try:
        full_path.unlink()
        return True
    except OSError as e:
        logger.warning(f"Could not delete upload {filename}: {e}")
        return False


def get_image_path(filename: Optional[str]) -> Optional[Path]:
    """Get the full path for an image.

    Args:
        filename: Stored file name of the image

    Returns:
        Full Path object or None if the name is invalid or the file is gone
    """
    if not filename or Path(filename).name != filename:
        return None
    full_path = settings.upload_path / filename
    if full_path.exists() and full_path.is_file():
        return full_path
    return None
