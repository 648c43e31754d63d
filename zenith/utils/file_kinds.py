"""
File type checks applied before anything enters the edit model.
"""
import mimetypes
import os
from typing import Optional

from zenith import config
from zenith.core.errors import InvalidFileKind, InvalidImageKind


def guess_mime_type(path: str) -> Optional[str]:
    mime_type, _ = mimetypes.guess_type(path)
    return mime_type


def require_pdf(path: str) -> None:
    """Raise InvalidFileKind unless ``path`` names a PDF file."""
    if guess_mime_type(path) != config.PDF_MIME_TYPE:
        raise InvalidFileKind(f"{os.path.basename(path)} is not a PDF file")


def require_image(path: str) -> None:
    """Raise InvalidImageKind unless ``path`` names a PNG or JPEG file."""
    if guess_mime_type(path) not in config.IMAGE_MIME_TYPES:
        raise InvalidImageKind(f"{os.path.basename(path)} is not a PNG or JPEG image")


def export_file_name(original_path: str) -> str:
    """Default name of an exported copy: ``edited-<original name>``."""
    return f"{config.EXPORT_PREFIX}{os.path.basename(original_path)}"
