import logging
from typing import Sequence

import fitz  # PyMuPDF
from PyQt5.QtCore import QObject, pyqtSignal

from zenith import config
from zenith.core.document.coordinates import image_origin, text_baseline, to_top_down
from zenith.core.edits import Edit, ImageEdit, PageEditMap, TextEdit
from zenith.core.edits.models import read_image_size
from zenith.core.errors import DocumentLoadFailure, ExportFailure

logger = logging.getLogger(__name__)

BLACK = (0, 0, 0)


class PDFExporter(QObject):
    """Composites page edits onto a reordered copy of a PDF document."""

    # Signal for progress updates
    progress_signal = pyqtSignal(int, int)  # current, total

    def __init__(self):
        super().__init__()

    def export_with_edits(self, source_bytes: bytes, edits: PageEditMap,
                          page_order: Sequence[int]) -> bytes:
        """
        Build a new PDF from the source pages and the current edits.

        Args:
            source_bytes: Original document bytes, left untouched
            edits: Edits keyed by original page number
            page_order: Original page numbers in output order

        Returns:
            Bytes of the new document

        Raises:
            ExportFailure: If any step fails; nothing partial is returned
        """
        source = None
        output = None
        try:
            source = self._open_source(source_bytes)
            output = fitz.open()

            # Output page i is a copy of source page page_order[i]
            for page_number in page_order:
                if not 1 <= page_number <= source.page_count:
                    raise ExportFailure(
                        f"Page {page_number} is not in a {source.page_count}-page document"
                    )
                output.insert_pdf(source, from_page=page_number - 1, to_page=page_number - 1)

            order = list(page_order)
            edited_pages = edits.pages()
            total_pages = len(edited_pages)

            for current, original_page in enumerate(edited_pages):
                self.progress_signal.emit(current, total_pages)

                if original_page not in order:
                    logger.warning("Page %d is not in the page order, skipping its edits", original_page)
                    continue

                page = output[order.index(original_page)]
                for edit in edits.edits_for(original_page):
                    self._draw_edit(page, edit)

            self.progress_signal.emit(total_pages, total_pages)

            data = output.tobytes(garbage=4, deflate=True)
            logger.info("Exported %d pages with %d edits", len(order), edits.edit_count())
            return data

        except ExportFailure:
            raise
        except Exception as e:
            raise ExportFailure(f"Failed to export PDF: {e}") from e
        finally:
            if output is not None:
                output.close()
            if source is not None:
                source.close()

    @staticmethod
    def _open_source(source_bytes: bytes) -> fitz.Document:
        try:
            return fitz.open(stream=source_bytes, filetype="pdf")
        except Exception as e:
            raise DocumentLoadFailure(f"Could not open source PDF: {e}") from e

    def _draw_edit(self, page: fitz.Page, edit: Edit):
        """Draw a single edit on an output page."""
        if isinstance(edit, TextEdit):
            self._draw_text(page, edit)
        elif isinstance(edit, ImageEdit):
            self._draw_image(page, edit)
        else:
            raise TypeError(f"Unsupported edit type: {type(edit).__name__}")

    @staticmethod
    def _draw_text(page: fitz.Page, edit: TextEdit):
        page_height = page.rect.height
        x, baseline = text_baseline(edit, page_height)
        page.insert_text(
            fitz.Point(x, to_top_down(baseline, page_height)),
            edit.text,
            fontname=config.EXPORT_FONT,
            fontsize=edit.font_size,
            color=BLACK,
        )

    @staticmethod
    def _draw_image(page: fitz.Page, edit: ImageEdit):
        # Fails with InvalidImageKind before anything is drawn
        read_image_size(edit.src)

        page_height = page.rect.height
        x, bottom = image_origin(edit, page_height)
        top = to_top_down(bottom + edit.height, page_height)
        rect = fitz.Rect(x, top, x + edit.width, top + edit.height)
        page.insert_image(rect, stream=edit.src, keep_proportion=False)
