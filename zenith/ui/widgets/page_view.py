"""
Page widget showing one rendered page with its edits on top.
"""
import logging
from typing import Dict, Optional, Sequence, Tuple

from PyQt5.QtCore import QPointF, QRectF, Qt, pyqtSignal
from PyQt5.QtGui import QBrush, QColor, QFont, QImage, QMouseEvent, QPainter, QPen, QPixmap
from PyQt5.QtWidgets import QLabel

from zenith import config
from zenith.core.edits import Edit, ImageEdit, TextEdit

logger = logging.getLogger(__name__)

HANDLE_SIZE = 10.0

# Handle name -> position on the edit rect as fractions of width/height
RESIZE_HANDLES = {
    "top-left": (0.0, 0.0),
    "top": (0.5, 0.0),
    "top-right": (1.0, 0.0),
    "right": (1.0, 0.5),
    "bottom-right": (1.0, 1.0),
    "bottom": (0.5, 1.0),
    "bottom-left": (0.0, 1.0),
    "left": (0.0, 0.5),
}

HANDLE_CURSORS = {
    "top-left": Qt.SizeFDiagCursor,
    "bottom-right": Qt.SizeFDiagCursor,
    "top-right": Qt.SizeBDiagCursor,
    "bottom-left": Qt.SizeBDiagCursor,
    "top": Qt.SizeVerCursor,
    "bottom": Qt.SizeVerCursor,
    "left": Qt.SizeHorCursor,
    "right": Qt.SizeHorCursor,
}


def resized_geometry(handle: str, start: Tuple[float, float, float, float],
                     dx: float, dy: float) -> Tuple[float, float, float, float]:
    """
    New (x, y, width, height) after dragging a resize handle by (dx, dy).

    Left and top handles move the origin along with the edge.
    """
    x, y, width, height = start
    if "right" in handle:
        width = width + dx
    if "left" in handle:
        width = width - dx
        x = x + dx
    if "bottom" in handle:
        height = height + dy
    if "top" in handle:
        height = height - dy
        y = y + dy
    return x, y, width, height


class PageView(QLabel):
    """
    Renders a page and lets the user select, move and resize its edits.

    All coordinates sent out are in unscaled page points.
    """

    # Signals
    add_text_requested = pyqtSignal(int, float, float)  # page, x, y
    edit_update_requested = pyqtSignal(int, str, dict)  # page, edit id, patch
    edit_text_requested = pyqtSignal(int, str)  # page, edit id
    selection_requested = pyqtSignal(object)  # edit id or None

    def __init__(self, parent=None):
        super().__init__(parent)
        self.page_number = 0
        self.zoom = config.DEFAULT_ZOOM
        self.edits: Tuple[Edit, ...] = ()
        self.selected_edit_id: Optional[str] = None
        self.selection_color = QColor("#3b82f6")

        # Interaction state
        self._drag_offset: Optional[QPointF] = None
        self._resize_handle: Optional[str] = None
        self._resize_origin: Optional[QPointF] = None
        self._resize_start: Optional[Tuple[float, float, float, float]] = None
        self._active_edit_id: Optional[str] = None

        self._image_cache: Dict[str, Tuple[bytes, QImage]] = {}

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)

    def set_page(self, page_number: int, image: QImage, zoom: float):
        """Show a freshly rendered page."""
        if page_number != self.page_number:
            self._image_cache.clear()
        self.page_number = page_number
        self.zoom = zoom
        pixmap = QPixmap.fromImage(image)
        self.setPixmap(pixmap)
        self.setFixedSize(pixmap.size())
        self.update()

    def set_edits(self, edits: Sequence[Edit], selected_edit_id: Optional[str]):
        """Set edits to display on this page."""
        self.edits = tuple(edits)
        self.selected_edit_id = selected_edit_id
        self.update()

    def set_selection_color(self, color: str):
        self.selection_color = QColor(color)
        self.update()

    # Coordinates

    def _to_page_coords(self, pos) -> Tuple[float, float]:
        """Convert widget coordinates to page points."""
        return pos.x() / self.zoom, pos.y() / self.zoom

    def _screen_rect(self, edit: Edit) -> QRectF:
        return QRectF(
            edit.x * self.zoom,
            edit.y * self.zoom,
            edit.width * self.zoom,
            edit.height * self.zoom,
        )

    def _handle_rects(self, edit: Edit) -> Dict[str, QRectF]:
        rect = self._screen_rect(edit)
        half = HANDLE_SIZE / 2
        return {
            name: QRectF(
                rect.left() + fx * rect.width() - half,
                rect.top() + fy * rect.height() - half,
                HANDLE_SIZE,
                HANDLE_SIZE,
            )
            for name, (fx, fy) in RESIZE_HANDLES.items()
        }

    def _selected_edit(self) -> Optional[Edit]:
        for edit in self.edits:
            if edit.id == self.selected_edit_id:
                return edit
        return None

    def _edit_at(self, pos) -> Optional[Edit]:
        # Topmost first
        for edit in reversed(self.edits):
            if self._screen_rect(edit).contains(QPointF(pos)):
                return edit
        return None

    def _handle_at(self, pos) -> Optional[str]:
        edit = self._selected_edit()
        if edit is None:
            return None
        for name, rect in self._handle_rects(edit).items():
            if rect.contains(QPointF(pos)):
                return name
        return None

    # Mouse event handlers

    def mousePressEvent(self, event: QMouseEvent):
        self.setFocus()

        if event.button() != Qt.LeftButton:
            return super().mousePressEvent(event)

        pos = event.pos()
        handle = self._handle_at(pos)
        if handle is not None:
            edit = self._selected_edit()
            self._resize_handle = handle
            self._resize_origin = QPointF(pos)
            self._resize_start = (edit.x, edit.y, edit.width, edit.height)
            self._active_edit_id = edit.id
            return

        edit = self._edit_at(pos)
        if edit is None:
            # Clicked on empty area
            self.selection_requested.emit(None)
            return

        self.selection_requested.emit(edit.id)
        page_x, page_y = self._to_page_coords(pos)
        self._drag_offset = QPointF(page_x - edit.x, page_y - edit.y)
        self._active_edit_id = edit.id

    def mouseMoveEvent(self, event: QMouseEvent):
        pos = event.pos()

        if self._active_edit_id and (event.buttons() & Qt.LeftButton):
            if self._resize_handle is not None:
                self._continue_resize(pos)
            elif self._drag_offset is not None:
                self._continue_drag(pos)
            return

        # Hover cursor
        handle = self._handle_at(pos)
        if handle is not None:
            self.setCursor(HANDLE_CURSORS[handle])
        elif self._edit_at(pos) is not None:
            self.setCursor(Qt.OpenHandCursor)
        else:
            self.setCursor(Qt.IBeamCursor)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return super().mouseReleaseEvent(event)
        self._finish_interaction()

    def mouseDoubleClickEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return super().mouseDoubleClickEvent(event)

        self._finish_interaction()
        edit = self._edit_at(event.pos())
        if edit is None:
            page_x, page_y = self._to_page_coords(event.pos())
            self.add_text_requested.emit(self.page_number, page_x, page_y)
        elif isinstance(edit, TextEdit):
            self.edit_text_requested.emit(self.page_number, edit.id)

    def _continue_drag(self, pos):
        page_x, page_y = self._to_page_coords(pos)
        patch = {
            "x": page_x - self._drag_offset.x(),
            "y": page_y - self._drag_offset.y(),
        }
        self.edit_update_requested.emit(self.page_number, self._active_edit_id, patch)

    def _continue_resize(self, pos):
        dx = (pos.x() - self._resize_origin.x()) / self.zoom
        dy = (pos.y() - self._resize_origin.y()) / self.zoom
        x, y, width, height = resized_geometry(self._resize_handle, self._resize_start, dx, dy)

        # Ignore moves that would collapse the box
        if width > config.MIN_EDIT_SIZE and height > config.MIN_EDIT_SIZE:
            patch = {"x": x, "y": y, "width": width, "height": height}
            self.edit_update_requested.emit(self.page_number, self._active_edit_id, patch)

    def _finish_interaction(self):
        self._drag_offset = None
        self._resize_handle = None
        self._resize_origin = None
        self._resize_start = None
        self._active_edit_id = None

    # Paint methods

    def paintEvent(self, event):
        super().paintEvent(event)

        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        try:
            self._paint_edits(painter)
        finally:
            painter.end()

    def _paint_edits(self, painter: QPainter):
        """Paint edits in z-order, then the selection frame."""
        for edit in self.edits:
            if isinstance(edit, TextEdit):
                self._paint_text(painter, edit)
            elif isinstance(edit, ImageEdit):
                self._paint_image(painter, edit)
            else:
                raise TypeError(f"Unsupported edit type: {type(edit).__name__}")

        selected = self._selected_edit()
        if selected is not None:
            self._paint_selection(painter, selected)

    def _paint_text(self, painter: QPainter, edit: TextEdit):
        font = QFont(edit.font_family)
        font.setPixelSize(max(1, round(edit.font_size * self.zoom)))
        painter.setFont(font)
        painter.setPen(QPen(Qt.black))
        painter.drawText(self._screen_rect(edit), Qt.AlignLeft | Qt.AlignTop | Qt.TextWordWrap, edit.text)

    def _paint_image(self, painter: QPainter, edit: ImageEdit):
        cached = self._image_cache.get(edit.id)
        if cached is None or cached[0] is not edit.src:
            image = QImage.fromData(edit.src)
            self._image_cache[edit.id] = (edit.src, image)
        else:
            image = cached[1]

        if image.isNull():
            logger.warning("Could not display image edit %s", edit.id)
            return
        painter.drawImage(self._screen_rect(edit), image)

    def _paint_selection(self, painter: QPainter, edit: Edit):
        painter.setBrush(Qt.NoBrush)
        painter.setPen(QPen(self.selection_color, 2))
        painter.drawRect(self._screen_rect(edit))

        painter.setBrush(QBrush(self.selection_color))
        painter.setPen(QPen(Qt.white, 1))
        for rect in self._handle_rects(edit).values():
            painter.drawEllipse(rect)
