"""
Per-page collection of edits at one point in history.
"""
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .models import Edit, edit_from_dict, edit_to_dict


class PageEditMap:
    """
    Immutable mapping from 1-based page number to that page's edits.

    Edits are kept in creation order, which is also their z-order (latest
    on top). Every ``with_*`` method returns a new map and shares the
    untouched pages with the old one. A page without edits has no key.
    """

    __slots__ = ("_pages",)

    def __init__(self, pages: Optional[Mapping[int, Tuple[Edit, ...]]] = None):
        cleaned = {
            int(page): tuple(edits)
            for page, edits in (pages or {}).items()
            if edits
        }
        self._pages = MappingProxyType(cleaned)

    # Queries

    def edits_for(self, page: int) -> Tuple[Edit, ...]:
        return self._pages.get(page, ())

    def find_edit(self, page: int, edit_id: str) -> Optional[Edit]:
        for edit in self.edits_for(page):
            if edit.id == edit_id:
                return edit
        return None

    def pages(self) -> List[int]:
        """Page numbers that carry edits, ascending."""
        return sorted(self._pages)

    def items(self) -> Iterator[Tuple[int, Tuple[Edit, ...]]]:
        for page in self.pages():
            yield page, self._pages[page]

    def edit_count(self) -> int:
        return sum(len(edits) for edits in self._pages.values())

    def is_empty(self) -> bool:
        return not self._pages

    # Transformations

    def with_added_edit(self, page: int, edit: Edit) -> "PageEditMap":
        pages = dict(self._pages)
        pages[page] = self.edits_for(page) + (edit,)
        return PageEditMap(pages)

    def with_updated_edit(self, page: int, edit_id: str,
                          patch: Mapping[str, Any]) -> "PageEditMap":
        """
        Merge ``patch`` into the edit ``edit_id`` on ``page``.

        Returns this same map when no edit matches or the patch changes
        nothing.
        """
        edits = self.edits_for(page)
        updated = []
        changed = False
        for edit in edits:
            if edit.id == edit_id:
                new_edit = edit.merged(patch)
                changed = new_edit is not edit
                updated.append(new_edit)
            else:
                updated.append(edit)

        if not changed:
            return self

        pages = dict(self._pages)
        pages[page] = tuple(updated)
        return PageEditMap(pages)

    def with_removed_edit(self, page: int, edit_id: str) -> "PageEditMap":
        edits = self.edits_for(page)
        remaining = tuple(edit for edit in edits if edit.id != edit_id)
        if len(remaining) == len(edits):
            return self

        pages = dict(self._pages)
        pages[page] = remaining
        return PageEditMap(pages)

    # Serialization

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        """JSON-ready form; keys are page numbers as strings."""
        return {
            str(page): [edit_to_dict(edit) for edit in edits]
            for page, edits in self.items()
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "PageEditMap":
        return PageEditMap({
            int(page): tuple(edit_from_dict(item) for item in items)
            for page, items in data.items()
        })

    def __eq__(self, other):
        if not isinstance(other, PageEditMap):
            return NotImplemented
        # Frozen dataclass equality compares the same fields to_dict() emits
        return dict(self._pages) == dict(other._pages)

    def __hash__(self):
        return hash(tuple(self.items()))

    def __repr__(self):
        counts = {page: len(edits) for page, edits in self.items()}
        return f"PageEditMap({counts})"


EMPTY_EDIT_MAP = PageEditMap()
