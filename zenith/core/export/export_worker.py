# zenith/core/export/export_worker.py

import logging
import os
import shutil
import tempfile
from typing import Sequence

from PyQt5.QtCore import QThread, pyqtSignal

from zenith.core.document.pdf_exporter import PDFExporter
from zenith.core.edits import PageEditMap
from zenith.core.errors import ExportFailure

logger = logging.getLogger(__name__)


class ExportWorker(QThread):
    """Worker thread for exporting the edited PDF without freezing the UI."""

    # Signals
    finished = pyqtSignal(bool, str)  # success, message
    progress = pyqtSignal(str)  # status message
    page_progress = pyqtSignal(int, int)  # current, total pages

    def __init__(self, source_bytes: bytes, output_pdf: str, edits: PageEditMap,
                 page_order: Sequence[int]):
        super().__init__()
        self.source_bytes = source_bytes
        self.output_pdf = output_pdf
        self.edits = edits
        self.page_order = tuple(page_order)
        self.temp_path = None
        self.exporter = PDFExporter()

    def run(self):
        """Execute the export in a background thread."""
        self.exporter.progress_signal.connect(self._on_page_progress)
        try:
            self.progress.emit("Exporting edits...")
            data = self.exporter.export_with_edits(self.source_bytes, self.edits, self.page_order)

            self.progress.emit("Finalizing...")
            # Write next to the target, then move into place in one step
            output_dir = os.path.dirname(os.path.abspath(self.output_pdf))
            temp_fd, self.temp_path = tempfile.mkstemp(suffix='.pdf', dir=output_dir)
            with os.fdopen(temp_fd, 'wb') as f:
                f.write(data)
            shutil.move(self.temp_path, self.output_pdf)
            self.temp_path = None

            self.finished.emit(True, f"Exported PDF to {os.path.basename(self.output_pdf)}")

        except (ExportFailure, OSError) as e:
            logger.exception("Failed to export PDF")
            self._remove_temp_file()
            self.finished.emit(False, f"An error occurred while exporting the PDF: {e}")

    def _remove_temp_file(self):
        if self.temp_path and os.path.exists(self.temp_path):
            os.remove(self.temp_path)
        self.temp_path = None

    def _on_page_progress(self, current, total):
        """Handle page-level progress updates."""
        self.page_progress.emit(current, total)
