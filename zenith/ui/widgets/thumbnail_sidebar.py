"""
Sidebar listing page thumbnails in page order, reorderable by drag and drop.
"""
from typing import Callable, Sequence

from PyQt5.QtCore import QSize, Qt, QTimer, pyqtSignal
from PyQt5.QtGui import QIcon, QImage, QPixmap
from PyQt5.QtWidgets import QAbstractItemView, QListView, QListWidget, QListWidgetItem

PAGE_ROLE = Qt.UserRole


class ThumbnailSidebar(QListWidget):
    """Page thumbnails; dropping a thumbnail onto another moves it there."""

    page_selected = pyqtSignal(int)  # original page number
    page_moved = pyqtSignal(int, int)  # from index, to index

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("ThumbnailSidebar")
        self.setFixedWidth(160)
        self.setViewMode(QListView.IconMode)
        self.setFlow(QListView.TopToBottom)
        self.setWrapping(False)
        self.setMovement(QListView.Snap)
        self.setIconSize(QSize(120, 160))
        self.setSpacing(4)
        self.setDragDropMode(QAbstractItemView.InternalMove)
        self.setDefaultDropAction(Qt.MoveAction)
        self.setSelectionMode(QAbstractItemView.SingleSelection)

        self.itemClicked.connect(self._on_item_clicked)

    def set_pages(self, page_order: Sequence[int], current_page: int,
                  render_thumbnail: Callable[[int], QImage]):
        """
        Rebuild the list for a page order.

        Args:
            page_order: Original page numbers in display order
            current_page: Page to highlight
            render_thumbnail: Returns the thumbnail image of a page
        """
        self.clear()
        for page_number in page_order:
            item = QListWidgetItem(QIcon(QPixmap.fromImage(render_thumbnail(page_number))), str(page_number))
            item.setData(PAGE_ROLE, page_number)
            item.setTextAlignment(Qt.AlignHCenter)
            self.addItem(item)
        self.set_current_page(current_page)

    def set_current_page(self, page_number: int):
        for row in range(self.count()):
            item = self.item(row)
            if item.data(PAGE_ROLE) == page_number:
                self.setCurrentItem(item)
                return

    def page_order(self):
        return tuple(self.item(row).data(PAGE_ROLE) for row in range(self.count()))

    def _on_item_clicked(self, item: QListWidgetItem):
        self.page_selected.emit(item.data(PAGE_ROLE))

    def dropEvent(self, event):  # type: ignore[override]
        """Report the move instead of letting the view rearrange items itself."""
        from_index = self.currentRow()
        target = self.indexAt(event.pos())
        to_index = target.row() if target.isValid() else self.count() - 1

        event.setDropAction(Qt.IgnoreAction)
        event.ignore()

        if from_index >= 0:
            # The list is rebuilt from the new order, after the drop finishes
            QTimer.singleShot(0, lambda: self.page_moved.emit(from_index, to_index))
