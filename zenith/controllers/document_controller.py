"""
Controller for the loaded document: opening, page order, recovery and export.
"""
import logging
import os
from typing import Optional

from PyQt5.QtCore import QObject, pyqtSignal
from PyQt5.QtWidgets import QMessageBox, QWidget

from zenith.core.document import PDFDocumentReader
from zenith.core.edits import EditPersistence, EditSession
from zenith.core.errors import DocumentLoadFailure, InvalidFileKind
from zenith.core.export import ExportWorker
from zenith.utils.file_kinds import export_file_name, require_pdf

logger = logging.getLogger(__name__)


class DocumentController(QObject):
    """Loads documents into the session and runs exports."""

    # Signals
    document_loaded = pyqtSignal(int)  # page count
    page_order_changed = pyqtSignal()
    edits_restored = pyqtSignal()
    export_state_changed = pyqtSignal(bool)  # processing
    export_finished = pyqtSignal(bool, str)  # success, message

    def __init__(self, reader: PDFDocumentReader, session: EditSession,
                 persistence: Optional[EditPersistence] = None,
                 parent: QWidget = None):
        super().__init__()
        self.reader = reader
        self.session = session
        self.persistence = persistence or EditPersistence()
        self.parent_widget = parent

        self.file_path: Optional[str] = None
        self.document_bytes: Optional[bytes] = None

        # Export worker (created when needed)
        self.export_worker: Optional[ExportWorker] = None

    def is_loaded(self) -> bool:
        return self.document_bytes is not None

    def is_exporting(self) -> bool:
        return self.export_worker is not None

    def open_file(self, file_path: str) -> bool:
        """
        Load a PDF file and start a fresh edit session for it.

        Rejected or unreadable files leave the current document untouched.

        Returns:
            True if the document was loaded
        """
        try:
            require_pdf(file_path)
        except InvalidFileKind as e:
            logger.warning("%s", e)
            QMessageBox.warning(self.parent_widget, "Invalid File", "Please select a valid PDF file.")
            return False

        try:
            with open(file_path, 'rb') as f:
                data = f.read()
            page_count = self.reader.load_bytes(data)
        except (OSError, DocumentLoadFailure) as e:
            logger.error("Could not load %s: %s", file_path, e)
            QMessageBox.critical(self.parent_widget, "Error", f"Error loading PDF: {e}")
            return False

        self.file_path = file_path
        self.document_bytes = data
        self.session.reset(page_count)
        logger.info("Opened %s", file_path)
        self.document_loaded.emit(page_count)

        self._offer_restore()
        return True

    def _offer_restore(self) -> None:
        """Ask whether to bring back autosaved edits for this document."""
        stored = self.persistence.load(self.document_bytes)
        if stored is None:
            return

        edits, page_order = stored
        if edits.is_empty() and page_order == self.session.page_order:
            return

        reply = QMessageBox.question(
            self.parent_widget,
            "Restore Edits",
            f"Restore {edits.edit_count()} edit(s) from your previous session?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.Yes
        )
        if reply == QMessageBox.Yes:
            self.session.restore(edits, page_order)
            self.edits_restored.emit()
            self.page_order_changed.emit()
        else:
            self.persistence.delete(self.document_bytes)

    def autosave(self) -> None:
        """Save the current edits and page order for crash recovery."""
        if not self.is_loaded():
            return
        self.persistence.save(
            self.document_bytes,
            os.path.basename(self.file_path),
            self.session.edits,
            self.session.page_order,
        )

    def move_page(self, from_index: Optional[int], to_index: Optional[int]) -> bool:
        """Move a page in the display/export order."""
        if self.session.reorder_pages(from_index, to_index):
            self.page_order_changed.emit()
            self.autosave()
            return True
        return False

    def default_export_path(self) -> str:
        directory = os.path.dirname(self.file_path or "")
        return os.path.join(directory, export_file_name(self.file_path or "document.pdf"))

    def export(self, output_path: str) -> bool:
        """
        Start exporting the current edits to ``output_path``.

        Only one export runs at a time.

        Returns:
            True if an export was started
        """
        if not self.is_loaded():
            QMessageBox.warning(self.parent_widget, "No PDF", "No PDF document is currently loaded.")
            return False

        if self.is_exporting():
            logger.info("Export already in progress")
            return False

        self.export_worker = ExportWorker(
            self.document_bytes,
            output_path,
            self.session.edits,
            self.session.page_order,
        )
        self.export_worker.finished.connect(self._on_export_finished)

        self.export_state_changed.emit(True)
        self.export_worker.start()
        return True

    def _on_export_finished(self, success: bool, message: str) -> None:
        worker = self.export_worker
        self.export_worker = None
        if worker is not None:
            worker.wait()
            worker.deleteLater()

        self.export_state_changed.emit(False)

        if success:
            # Another document may have been opened since the export started
            self.persistence.delete(worker.source_bytes if worker is not None else self.document_bytes)
            logger.info(message)
        else:
            QMessageBox.critical(
                self.parent_widget,
                "Export Failed",
                "An error occurred while exporting the PDF."
            )

        self.export_finished.emit(success, message)
