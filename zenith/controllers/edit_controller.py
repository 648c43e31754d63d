"""
Controller for managing edit operations.
"""
import logging
from typing import Any, Mapping, Optional

from PyQt5.QtCore import QObject, pyqtSignal
from PyQt5.QtWidgets import QMessageBox, QWidget

from zenith.core.edits import EditSession, TextEdit
from zenith.core.errors import InvalidImageKind
from zenith.utils.file_kinds import require_image

logger = logging.getLogger(__name__)


class EditController(QObject):
    """Handles all edit-related operations and user interactions."""

    # Signals
    edits_changed = pyqtSignal()  # Emitted when the current snapshot changes
    selection_changed = pyqtSignal(object)  # Selected edit id or None

    def __init__(self, session: EditSession, parent: QWidget = None):
        super().__init__()
        self.session = session
        self.parent_widget = parent

    def add_text(self, page: int, x: float, y: float) -> str:
        """
        Add a default text edit where the user double-clicked.

        Returns:
            Id of the new edit
        """
        edit = self.session.add_text(page, x, y)
        self.edits_changed.emit()
        self.selection_changed.emit(edit.id)
        return edit.id

    def insert_image(self, page: int, image_path: str) -> bool:
        """
        Insert a PNG or JPEG file as an image edit.

        Args:
            page: Page receiving the image
            image_path: Path to the image file

        Returns:
            True if the image was added
        """
        try:
            require_image(image_path)
            with open(image_path, 'rb') as f:
                data = f.read()
            edit = self.session.add_image(page, data)
        except (InvalidImageKind, OSError) as e:
            logger.warning("Rejected image %s: %s", image_path, e)
            QMessageBox.warning(
                self.parent_widget,
                "Invalid Image",
                "Please select a valid PNG or JPG file."
            )
            return False

        self.edits_changed.emit()
        self.selection_changed.emit(edit.id)
        return True

    def update_edit(self, page: int, edit_id: str, patch: Mapping[str, Any]) -> bool:
        """Apply a geometry or content patch to an edit."""
        try:
            changed = self.session.update_edit(page, edit_id, patch)
        except ValueError as e:
            logger.warning("Rejected patch for edit %s: %s", edit_id, e)
            return False

        if changed:
            self.edits_changed.emit()
            return True
        return False

    def set_text(self, page: int, edit_id: str, text: str) -> bool:
        return self.update_edit(page, edit_id, {"text": text})

    def set_font_size(self, page: int, font_size: float) -> bool:
        """Change the font size of the selected text edit."""
        edit = self.session.selected_edit(page)
        if not isinstance(edit, TextEdit):
            return False
        return self.update_edit(page, edit.id, {"font_size": font_size})

    def delete_selected(self, page: int) -> bool:
        """
        Delete the selected edit on a page.

        Returns:
            True if an edit was deleted
        """
        edit_id = self.session.selected_edit_id
        if edit_id is None:
            return False

        if self.session.delete_edit(page, edit_id):
            self.edits_changed.emit()
            self.selection_changed.emit(None)
            return True
        return False

    def select(self, edit_id: Optional[str]) -> None:
        if edit_id != self.session.selected_edit_id:
            self.session.select(edit_id)
            self.selection_changed.emit(edit_id)

    def undo(self) -> bool:
        """
        Undo last edit action.

        Returns:
            True if undo was successful
        """
        if self.session.undo():
            self.edits_changed.emit()
            self.selection_changed.emit(None)
            return True
        return False

    def redo(self) -> bool:
        """
        Redo last undone edit action.

        Returns:
            True if redo was successful
        """
        if self.session.redo():
            self.edits_changed.emit()
            self.selection_changed.emit(None)
            return True
        return False
