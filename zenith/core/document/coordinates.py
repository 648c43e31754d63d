"""
Conversion from viewer space to PDF page space.

Edits are stored with a top-left origin and y growing downwards, as the
viewer draws them. PDF page space has its origin at the bottom-left with y
growing upwards. Each edit kind has exactly one conversion here.
"""
from typing import Tuple

from zenith import config
from zenith.core.edits.models import ImageEdit, TextEdit


def text_baseline(edit: TextEdit, page_height: float) -> Tuple[float, float]:
    """
    Start of the text baseline in page space.

    The baseline sits ``BASELINE_FACTOR * font_size`` below the top of the
    text box, which approximates cap-height alignment for the built-in font.
    """
    y = page_height - edit.y - edit.font_size * config.BASELINE_FACTOR
    return edit.x, y


def image_origin(edit: ImageEdit, page_height: float) -> Tuple[float, float]:
    """Lower-left corner of the image in page space."""
    return edit.x, page_height - edit.y - edit.height


def to_top_down(y: float, page_height: float) -> float:
    """Flip a page-space y back to a top-left origin, as PyMuPDF expects."""
    return page_height - y
