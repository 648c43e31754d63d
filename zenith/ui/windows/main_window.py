"""
Main application window for Zenith PDF Editor.
"""

import logging
import os
from typing import Optional

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import (
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QSizePolicy,
    QSpacerItem,
    QSpinBox,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from zenith import config
from zenith.controllers import DocumentController, EditController
from zenith.core.document import PDFDocumentReader
from zenith.core.edits import EditPersistence, EditSession, TextEdit
from zenith.styles import ThemeManager
from zenith.ui.widgets import PageView, ThumbnailSidebar

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window."""

    # Signals
    theme_changed = pyqtSignal(bool)

    def __init__(self, file_path: Optional[str] = None,
                 persistence: Optional[EditPersistence] = None):
        super().__init__()

        # Initialize core components
        self.pdf_reader = PDFDocumentReader()
        self.session = EditSession()

        # View state
        self.dark_mode = False
        self.zoom = config.DEFAULT_ZOOM
        self.current_page = 1

        # Initialize controllers
        self.document_controller = DocumentController(
            self.pdf_reader, self.session, persistence, parent=self
        )
        self.edit_controller = EditController(self.session, parent=self)

        # Setup UI
        self._setup_window()
        self._setup_ui()
        self._setup_connections()

        # Apply initial theme
        self._apply_theme()
        self._update_action_states()

        # Load file if provided
        if file_path and os.path.exists(file_path):
            self.load_pdf(file_path)

    def _setup_window(self):
        """Setup main window properties."""
        self.setWindowTitle(config.APP_TITLE)
        self.setMinimumSize(800, 600)

    def _setup_ui(self):
        """Setup the user interface."""
        self._create_toolbar()

        self.sidebar = ThumbnailSidebar()
        self.sidebar.hide()

        self.page_view = PageView()
        self.page_view.hide()

        self.empty_label = QLabel("Open a PDF to start editing.\nYour files are processed locally.")
        self.empty_label.setObjectName("EmptyStateLabel")
        self.empty_label.setAlignment(Qt.AlignCenter)

        page_container = QWidget()
        container_layout = QVBoxLayout(page_container)
        container_layout.setContentsMargins(24, 24, 24, 24)
        container_layout.addWidget(self.page_view, 0, Qt.AlignHCenter | Qt.AlignTop)
        container_layout.addWidget(self.empty_label, 1)

        self.scroll_area = QScrollArea()
        self.scroll_area.setObjectName("PageScrollArea")
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setWidget(page_container)

        body = QHBoxLayout()
        body.setContentsMargins(0, 0, 0, 0)
        body.setSpacing(0)
        body.addWidget(self.sidebar)
        body.addWidget(self.scroll_area, 1)

        main_layout = QVBoxLayout()
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)
        main_layout.addWidget(self.top_frame)
        main_layout.addLayout(body, 1)

        central = QWidget()
        central.setLayout(main_layout)
        self.setCentralWidget(central)

    def _create_toolbar(self):
        """Create the top toolbar."""
        self.top_frame = QFrame()
        self.top_frame.setObjectName("TopFrame")
        self.top_layout = QHBoxLayout(self.top_frame)
        self.top_layout.setContentsMargins(10, 8, 10, 8)
        self.top_layout.setSpacing(8)

        title = QLabel(config.APP_TITLE, self.top_frame)
        title.setObjectName("TitleLabel")
        self.top_layout.addWidget(title)

        self._add_toolbar_spacer(40, expanding=True)

        self.open_button = self._add_toolbar_button("Open", "Open PDF (Ctrl+O)", self.open_pdf)
        self._add_toolbar_separator()

        # Zoom controls
        self.zoom_out_button = self._add_toolbar_button("-", "Zoom Out", lambda: self.adjust_zoom(-config.ZOOM_STEP))
        self.zoom_label = QLabel(self._zoom_text(), self.top_frame)
        self.zoom_label.setObjectName("ZoomLabel")
        self.zoom_label.setFixedWidth(48)
        self.zoom_label.setAlignment(Qt.AlignCenter)
        self.top_layout.addWidget(self.zoom_label)
        self.zoom_in_button = self._add_toolbar_button("+", "Zoom In", lambda: self.adjust_zoom(config.ZOOM_STEP))

        self._add_toolbar_separator()

        # Edit tools
        self.image_button = self._add_toolbar_button("Image", "Insert PNG or JPG image", self.insert_image)
        self.font_size_spin = QSpinBox(self.top_frame)
        self.font_size_spin.setRange(4, 144)
        self.font_size_spin.setValue(config.DEFAULT_FONT_SIZE)
        self.font_size_spin.setToolTip("Font size of the selected text")
        self.top_layout.addWidget(self.font_size_spin)
        self.delete_button = self._add_toolbar_button("Delete", "Delete selected edit (Del)", self.delete_selected_edit)

        self._add_toolbar_separator()

        self.undo_button = self._add_toolbar_button("Undo", "Undo (Ctrl+Z)", self.undo_edit)
        self.redo_button = self._add_toolbar_button("Redo", "Redo (Ctrl+Y)", self.redo_edit)

        self._add_toolbar_separator()

        self.theme_button = self._add_toolbar_button("Dark", "Toggle Dark Mode", self.toggle_theme)

        self.export_button = QPushButton("Export PDF", self.top_frame)
        self.export_button.setObjectName("ExportButton")
        self.export_button.setToolTip("Export PDF (Ctrl+S)")
        self.export_button.clicked.connect(self.export_pdf)
        self.top_layout.addWidget(self.export_button)

    def _add_toolbar_button(self, text: str, tooltip: str, callback) -> QToolButton:
        """Add a button to the toolbar."""
        btn = QToolButton(self.top_frame)
        btn.setText(text)
        btn.setToolTip(tooltip)
        btn.clicked.connect(callback)
        self.top_layout.addWidget(btn)
        return btn

    def _add_toolbar_separator(self):
        """Add a separator to the toolbar."""
        separator = QFrame()
        separator.setFrameShape(QFrame.VLine)
        separator.setFrameShadow(QFrame.Sunken)
        self.top_layout.addWidget(separator)

    def _add_toolbar_spacer(self, width: int, expanding: bool = False):
        """Add a spacer to the toolbar."""
        policy = QSizePolicy.Expanding if expanding else QSizePolicy.Fixed
        self.top_layout.addSpacerItem(QSpacerItem(width, 20, policy, QSizePolicy.Minimum))

    def _setup_connections(self):
        """Wire widgets to controllers."""
        dc = self.document_controller
        dc.document_loaded.connect(self._on_document_loaded)
        dc.page_order_changed.connect(self._refresh_sidebar)
        dc.edits_restored.connect(self._refresh_edits)
        dc.export_state_changed.connect(self._on_export_state_changed)
        dc.export_finished.connect(self._on_export_finished)

        ec = self.edit_controller
        ec.edits_changed.connect(self._refresh_edits)
        ec.edits_changed.connect(dc.autosave)
        ec.selection_changed.connect(self._on_selection_changed)

        self.sidebar.page_selected.connect(self.go_to_page)
        self.sidebar.page_moved.connect(dc.move_page)

        self.page_view.add_text_requested.connect(ec.add_text)
        self.page_view.edit_update_requested.connect(ec.update_edit)
        self.page_view.edit_text_requested.connect(self._edit_text)
        self.page_view.selection_requested.connect(ec.select)

        self.font_size_spin.valueChanged.connect(
            lambda size: ec.set_font_size(self.current_page, size)
        )

    def _apply_theme(self):
        ThemeManager.apply_theme(self, self.dark_mode)
        self.page_view.set_selection_color(ThemeManager.get_theme(self.dark_mode).selection)

    # Document Management Methods

    def load_pdf(self, file_path: str) -> bool:
        """Load a PDF file."""
        return self.document_controller.open_file(file_path)

    def open_pdf(self):
        """Open a PDF file dialog."""
        if self.document_controller.is_exporting():
            return
        file_path, _ = QFileDialog.getOpenFileName(self, "Open PDF", "", "PDF Files (*.pdf)")
        if file_path:
            self.load_pdf(file_path)

    def _on_document_loaded(self, page_count: int):
        self.current_page = 1
        self.setWindowTitle(f"{config.APP_TITLE} - {os.path.basename(self.document_controller.file_path)}")
        self.empty_label.hide()
        self.page_view.show()
        self.sidebar.show()
        self._render_current_page()
        self._refresh_sidebar()
        self._update_action_states()

    def go_to_page(self, page_number: int):
        """Show an original page in the editor."""
        if page_number == self.current_page:
            return
        self.current_page = page_number
        self.edit_controller.select(None)
        self._render_current_page()

    def _render_current_page(self):
        if not self.pdf_reader.is_loaded():
            return
        image = self.pdf_reader.render_image(self.current_page, self.zoom)
        self.page_view.set_page(self.current_page, image, self.zoom)
        self._refresh_edits()

    def _refresh_edits(self):
        self.page_view.set_edits(
            self.session.edits_for_page(self.current_page),
            self.session.selected_edit_id,
        )
        self._sync_font_size()
        self._update_action_states()

    def _refresh_sidebar(self):
        if not self.pdf_reader.is_loaded():
            return
        self.sidebar.set_pages(
            self.session.page_order,
            self.current_page,
            self.pdf_reader.render_thumbnail,
        )

    # Zoom Methods

    def _zoom_text(self) -> str:
        return f"{round(self.zoom * 100)}%"

    def adjust_zoom(self, delta: float):
        """Adjust zoom level within the allowed range."""
        new_zoom = max(config.MIN_ZOOM, min(config.MAX_ZOOM, self.zoom + delta))
        if new_zoom == self.zoom:
            return
        self.zoom = new_zoom
        self.zoom_label.setText(self._zoom_text())
        self._render_current_page()

    # Theme Methods

    def toggle_theme(self):
        """Toggle between dark and light themes."""
        self.dark_mode = not self.dark_mode
        self.theme_button.setText("Light" if self.dark_mode else "Dark")
        self._apply_theme()
        self.theme_changed.emit(self.dark_mode)

    # Edit Methods

    def insert_image(self):
        """Pick an image file and add it to the current page."""
        if not self.document_controller.is_loaded():
            return
        image_path, _ = QFileDialog.getOpenFileName(
            self, "Insert Image", "", "Images (*.png *.jpg *.jpeg)"
        )
        if image_path:
            self.edit_controller.insert_image(self.current_page, image_path)

    def _edit_text(self, page: int, edit_id: str):
        edit = self.session.edits.find_edit(page, edit_id)
        if not isinstance(edit, TextEdit):
            return
        text, ok = QInputDialog.getMultiLineText(self, "Edit Text", "Text:", edit.text)
        if ok:
            self.edit_controller.set_text(page, edit_id, text)

    def delete_selected_edit(self):
        self.edit_controller.delete_selected(self.current_page)

    def undo_edit(self):
        self.edit_controller.undo()

    def redo_edit(self):
        self.edit_controller.redo()

    def _on_selection_changed(self, edit_id):
        self._refresh_edits()

    def _sync_font_size(self):
        edit = self.session.selected_edit(self.current_page)
        is_text = isinstance(edit, TextEdit)
        self.font_size_spin.setEnabled(is_text)
        if is_text:
            self.font_size_spin.blockSignals(True)
            self.font_size_spin.setValue(round(edit.font_size))
            self.font_size_spin.blockSignals(False)

    def _update_action_states(self):
        """Update toolbar button states."""
        loaded = self.document_controller.is_loaded()
        exporting = self.document_controller.is_exporting()
        self.open_button.setEnabled(not exporting)
        self.undo_button.setEnabled(self.session.can_undo())
        self.redo_button.setEnabled(self.session.can_redo())
        self.delete_button.setEnabled(self.session.selected_edit(self.current_page) is not None)
        self.image_button.setEnabled(loaded)
        self.export_button.setEnabled(loaded and not exporting)

    # Export Methods

    def export_pdf(self) -> bool:
        """Ask for a target file and export the edited PDF."""
        if not self.document_controller.is_loaded() or self.document_controller.is_exporting():
            return False

        output_path, _ = QFileDialog.getSaveFileName(
            self,
            "Export PDF",
            self.document_controller.default_export_path(),
            "PDF Files (*.pdf)",
        )
        if not output_path:
            return False
        return self.document_controller.export(output_path)

    def _on_export_state_changed(self, processing: bool):
        self.export_button.setText("Processing..." if processing else "Export PDF")
        self._update_action_states()

    def _on_export_finished(self, success: bool, message: str):
        if success:
            QMessageBox.information(self, "Success", message)

    # Event Handlers

    def keyPressEvent(self, event):  # type: ignore[override]
        """Handle keyboard shortcuts."""
        if event.modifiers() & Qt.ControlModifier:
            if event.key() == Qt.Key_Z:
                if event.modifiers() & Qt.ShiftModifier:
                    self.redo_edit()
                else:
                    self.undo_edit()
                event.accept()
                return
            elif event.key() == Qt.Key_Y:
                self.redo_edit()
                event.accept()
                return
            elif event.key() == Qt.Key_O:
                self.open_pdf()
                event.accept()
                return
            elif event.key() == Qt.Key_S:
                self.export_pdf()
                event.accept()
                return

        if event.key() in (Qt.Key_Delete, Qt.Key_Backspace):
            self.delete_selected_edit()
            event.accept()
            return

        super().keyPressEvent(event)

    def closeEvent(self, event):  # type: ignore[override]
        """Let a running export finish before closing."""
        worker = self.document_controller.export_worker
        if worker is not None:
            worker.wait()
        self.pdf_reader.close_document()
        event.accept()
