"""
Undo/Redo history over page edit snapshots.
"""
from dataclasses import dataclass, field
from typing import Tuple

from .page_edits import EMPTY_EDIT_MAP, PageEditMap


@dataclass(frozen=True)
class EditHistory:
    """
    Linear history of PageEditMap snapshots with a cursor.

    Snapshot 0 is always the empty map loaded with the document. All
    operations return a new history; snapshots themselves are immutable.
    """

    snapshots: Tuple[PageEditMap, ...] = field(default=(EMPTY_EDIT_MAP,))
    cursor: int = 0

    def __post_init__(self):
        if not self.snapshots or not self.snapshots[0].is_empty():
            raise ValueError("History must start with the empty edit map")
        if not 0 <= self.cursor < len(self.snapshots):
            raise ValueError(f"Cursor {self.cursor} outside history of {len(self.snapshots)}")

    @property
    def current(self) -> PageEditMap:
        """Snapshot at the cursor."""
        return self.snapshots[self.cursor]

    def can_undo(self) -> bool:
        return self.cursor > 0

    def can_redo(self) -> bool:
        return self.cursor < len(self.snapshots) - 1

    def push(self, new_map: PageEditMap) -> "EditHistory":
        """
        Append a snapshot after the cursor.

        Snapshots after the cursor (the redo branch) are discarded first.
        """
        kept = self.snapshots[:self.cursor + 1]
        return EditHistory(kept + (new_map,), len(kept))

    def undo(self) -> "EditHistory":
        if not self.can_undo():
            return self
        return EditHistory(self.snapshots, self.cursor - 1)

    def redo(self) -> "EditHistory":
        if not self.can_redo():
            return self
        return EditHistory(self.snapshots, self.cursor + 1)

    def __len__(self):
        return len(self.snapshots)
