"""
Display and export order of the original pages.
"""
import logging
from typing import Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

PageOrder = Tuple[int, ...]


def initial_page_order(page_count: int) -> PageOrder:
    """Original order: (1, 2, ..., page_count)."""
    return tuple(range(1, page_count + 1))


def reorder(order: Sequence[int], from_index: Optional[int],
            to_index: Optional[int]) -> PageOrder:
    """
    Move the page at ``from_index`` to ``to_index`` (both 0-based).

    The other pages keep their relative order. Out-of-range indices or a
    missing drag source leave the order unchanged.
    """
    order = tuple(order)
    if from_index is None or to_index is None:
        return order
    if not (0 <= from_index < len(order) and 0 <= to_index < len(order)):
        logger.debug("Ignoring reorder %s -> %s for %d pages", from_index, to_index, len(order))
        return order
    if from_index == to_index:
        return order

    pages = list(order)
    page = pages.pop(from_index)
    pages.insert(to_index, page)
    return tuple(pages)


def is_permutation(order: Sequence[int], page_count: int) -> bool:
    """True if ``order`` holds every page 1..page_count exactly once."""
    return sorted(order) == list(range(1, page_count + 1))
