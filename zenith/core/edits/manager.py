"""
Edit session that coordinates all edit operations.
"""
import logging
from typing import Any, Mapping, Optional, Sequence, Tuple

from zenith.core.page_order import PageOrder, initial_page_order, is_permutation, reorder
from .history import EditHistory
from .models import Edit, EditIdGenerator, create_text_edit, image_edit_from_bytes
from .page_edits import PageEditMap

logger = logging.getLogger(__name__)


class EditSession:
    """
    Owns the edit history, the page order and the selection of one document.

    Every state-changing action builds a new PageEditMap and pushes it onto
    the history; the current snapshot is never modified in place.
    """

    def __init__(self, page_count: int = 0):
        self.ids = EditIdGenerator()
        self.history = EditHistory()
        self.page_order: PageOrder = initial_page_order(page_count)
        self.page_count = page_count

        # For tracking the selected edit
        self.selected_edit_id: Optional[str] = None

    def reset(self, page_count: int) -> None:
        """Start over for a freshly loaded document."""
        self.history = EditHistory()
        self.page_order = initial_page_order(page_count)
        self.page_count = page_count
        self.selected_edit_id = None

    @property
    def edits(self) -> PageEditMap:
        """The current snapshot."""
        return self.history.current

    def edits_for_page(self, page: int) -> Tuple[Edit, ...]:
        return self.edits.edits_for(page)

    def has_edits(self) -> bool:
        return not self.edits.is_empty()

    def _push(self, new_map: PageEditMap) -> None:
        self.history = self.history.push(new_map)
        logger.debug("History at %d/%d", self.history.cursor, len(self.history) - 1)

    # Edit actions

    def add_edit(self, page: int, edit: Edit) -> Edit:
        """
        Add an edit to a page and select it.

        Args:
            page: 1-based original page number
            edit: Edit to add

        Returns:
            The added edit
        """
        self._push(self.edits.with_added_edit(page, edit))
        self.selected_edit_id = edit.id
        logger.debug("Added %s edit %s on page %d", edit.kind.value, edit.id, page)
        return edit

    def add_text(self, page: int, x: float, y: float) -> Edit:
        """Add a default text edit at a page position."""
        return self.add_edit(page, create_text_edit(self.ids, x, y))

    def add_image(self, page: int, data: bytes) -> Edit:
        """
        Add an image edit from raw PNG/JPEG bytes.

        Raises:
            InvalidImageKind: If the image cannot be decoded; nothing changes
        """
        return self.add_edit(page, image_edit_from_bytes(self.ids, data))

    def update_edit(self, page: int, edit_id: str, patch: Mapping[str, Any]) -> bool:
        """
        Merge a patch into an edit.

        Returns:
            True if the edit changed and a snapshot was pushed
        """
        current = self.edits
        updated = current.with_updated_edit(page, edit_id, patch)
        if updated == current:
            return False

        self._push(updated)
        return True

    def delete_edit(self, page: int, edit_id: str) -> bool:
        """
        Remove an edit from a page.

        Returns:
            True if the edit was found and removed
        """
        current = self.edits
        updated = current.with_removed_edit(page, edit_id)
        if updated is current:
            return False

        self._push(updated)
        if self.selected_edit_id == edit_id:
            self.selected_edit_id = None
        logger.debug("Deleted edit %s on page %d", edit_id, page)
        return True

    def restore(self, edits: PageEditMap, page_order: Optional[Sequence[int]] = None) -> None:
        """
        Bring back edits from a previous session as one undoable snapshot.
        """
        if page_order is not None:
            if is_permutation(page_order, self.page_count):
                self.page_order = tuple(page_order)
            else:
                logger.warning("Ignoring stored page order that does not match %d pages", self.page_count)

        if edits != self.edits:
            self._push(edits)
        self.selected_edit_id = None

    # History

    def undo(self) -> bool:
        """
        Perform undo operation.

        Returns:
            True if undo was successful
        """
        if not self.history.can_undo():
            return False

        self.history = self.history.undo()
        self.selected_edit_id = None
        return True

    def redo(self) -> bool:
        """
        Perform redo operation.

        Returns:
            True if redo was successful
        """
        if not self.history.can_redo():
            return False

        self.history = self.history.redo()
        self.selected_edit_id = None
        return True

    def can_undo(self) -> bool:
        """Check if undo is available."""
        return self.history.can_undo()

    def can_redo(self) -> bool:
        """Check if redo is available."""
        return self.history.can_redo()

    # Page order

    def reorder_pages(self, from_index: Optional[int], to_index: Optional[int]) -> bool:
        """
        Move a page within the page order.

        Returns:
            True if the order changed
        """
        new_order = reorder(self.page_order, from_index, to_index)
        if new_order == self.page_order:
            return False

        self.page_order = new_order
        logger.debug("Page order is now %s", new_order)
        return True

    # Selection

    def select(self, edit_id: Optional[str]) -> None:
        self.selected_edit_id = edit_id

    def selected_edit(self, page: int) -> Optional[Edit]:
        if self.selected_edit_id is None:
            return None
        return self.edits.find_edit(page, self.selected_edit_id)
