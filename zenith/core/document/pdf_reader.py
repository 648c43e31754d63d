"""
PDF document reading and rendering functionality.
"""
import logging
from typing import Optional, Tuple

import fitz  # PyMuPDF
from PyQt5.QtGui import QImage

from zenith import config
from zenith.core.errors import DocumentLoadFailure

logger = logging.getLogger(__name__)


class PDFDocumentReader:
    """Handles PDF document loading and page rendering."""

    def __init__(self):
        self.doc: Optional[fitz.Document] = None
        self.total_pages: int = 0

    def load_bytes(self, data: bytes) -> int:
        """
        Load a PDF document from memory.

        The previous document stays open if loading fails.

        Args:
            data: Raw PDF bytes

        Returns:
            Number of pages

        Raises:
            DocumentLoadFailure: If the bytes are not a readable PDF
        """
        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise DocumentLoadFailure(f"Error loading PDF: {e}") from e

        if doc.page_count == 0:
            doc.close()
            raise DocumentLoadFailure("PDF has no pages")

        self.close_document()
        self.doc = doc
        self.total_pages = doc.page_count
        logger.info("Loaded PDF with %d pages", self.total_pages)
        return self.total_pages

    def close_document(self) -> None:
        """Close the current PDF document."""
        if self.doc:
            self.doc.close()
            self.doc = None
        self.total_pages = 0

    def _load_page(self, page_number: int) -> fitz.Page:
        if not self.doc or not 1 <= page_number <= self.total_pages:
            raise IndexError(f"Page {page_number} is not in the document")
        return self.doc.load_page(page_number - 1)

    def get_page_size(self, page_number: int) -> Tuple[float, float]:
        """
        Get the size of a page in points.

        Args:
            page_number: 1-based page number

        Returns:
            Tuple of (width, height) in points
        """
        rect = self._load_page(page_number).rect
        return rect.width, rect.height

    def render_image(self, page_number: int, zoom: float) -> QImage:
        """
        Render a page at a scale.

        The image is the page's native size times ``zoom``; callers render
        again whenever the zoom changes.

        Args:
            page_number: 1-based page number
            zoom: Scale factor

        Returns:
            Rendered page image
        """
        page = self._load_page(page_number)
        pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
        img = QImage(pix.samples, pix.width, pix.height, pix.stride, QImage.Format_RGB888)
        # QImage does not own pix.samples
        return img.copy()

    def render_thumbnail(self, page_number: int) -> QImage:
        return self.render_image(page_number, config.THUMBNAIL_SCALE)

    def is_loaded(self) -> bool:
        """Check if a document is currently loaded."""
        return self.doc is not None

    def get_page_count(self) -> int:
        """Get the total number of pages."""
        return self.total_pages
