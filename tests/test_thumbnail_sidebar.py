"""
Tests for the page thumbnail sidebar.
"""
import pytest
from PyQt5.QtGui import QImage

from zenith.ui.widgets import ThumbnailSidebar


def thumbnail(page_number):
    image = QImage(20, 30, QImage.Format_RGB888)
    image.fill(page_number)
    return image


@pytest.fixture
def sidebar(qtbot):
    widget = ThumbnailSidebar()
    qtbot.addWidget(widget)
    widget.set_pages((3, 1, 2), 1, thumbnail)
    return widget


def test_lists_pages_in_order(sidebar):
    assert sidebar.page_order() == (3, 1, 2)
    assert sidebar.currentRow() == 1


def test_rebuild_highlights_current_page(sidebar):
    sidebar.set_pages((1, 2, 3), 1, thumbnail)

    assert sidebar.page_order() == (1, 2, 3)
    assert sidebar.currentRow() == 0


def test_click_reports_original_page(qtbot, sidebar):
    with qtbot.waitSignal(sidebar.page_selected) as blocker:
        sidebar.itemClicked.emit(sidebar.item(0))

    assert blocker.args == [3]
