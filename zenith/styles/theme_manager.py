"""
Theme management and styling for the application.
"""
from PyQt5.QtWidgets import QWidget

from .models import ThemeColors


class ThemeManager:
    """Manages application themes and styling."""

    DARK_THEME = ThemeColors(
        bg_window="#111827",
        bg_panel="#1f2937",
        bg_canvas="#374151",
        text_primary="#f3f4f6",
        text_muted="#9ca3af",
        accent_primary="#4f46e5",
        accent_hover="#4338ca",
        accent_disabled="#a5b4fc",
        border="#4b5563",
        selection="#3b82f6",
    )

    LIGHT_THEME = ThemeColors(
        bg_window="#f3f4f6",
        bg_panel="#ffffff",
        bg_canvas="#e5e7eb",
        text_primary="#111827",
        text_muted="#6b7280",
        accent_primary="#4f46e5",
        accent_hover="#4338ca",
        accent_disabled="#a5b4fc",
        border="#d1d5db",
        selection="#3b82f6",
    )

    @classmethod
    def get_theme(cls, dark_mode: bool) -> ThemeColors:
        return cls.DARK_THEME if dark_mode else cls.LIGHT_THEME

    @classmethod
    def apply_theme(cls, widget: QWidget, dark_mode: bool) -> None:
        """
        Apply theme to a widget and its children.

        Args:
            widget: Widget to style
            dark_mode: Whether to use dark theme
        """
        widget.setStyleSheet(cls._generate_stylesheet(cls.get_theme(dark_mode)))

    @classmethod
    def _generate_stylesheet(cls, theme: ThemeColors) -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {theme.bg_window};
                color: {theme.text_primary};
            }}

            QFrame#TopFrame, QListWidget#ThumbnailSidebar {{
                background-color: {theme.bg_panel};
                border: none;
            }}

            QScrollArea#PageScrollArea, QScrollArea#PageScrollArea > QWidget > QWidget {{
                background-color: {theme.bg_canvas};
            }}

            QLabel#TitleLabel {{
                color: {theme.accent_primary};
                font-size: 16px;
                font-weight: bold;
            }}
            QLabel#EmptyStateLabel, QLabel#ZoomLabel {{
                color: {theme.text_muted};
            }}

            QToolButton {{
                background-color: transparent;
                color: {theme.text_primary};
                border: none;
                border-radius: 4px;
                padding: 6px;
            }}
            QToolButton:hover {{
                background-color: {theme.bg_canvas};
            }}
            QToolButton:disabled {{
                color: {theme.text_muted};
            }}

            QPushButton#ExportButton {{
                background-color: {theme.accent_primary};
                color: white;
                border: none;
                border-radius: 6px;
                padding: 8px 16px;
                font-weight: bold;
            }}
            QPushButton#ExportButton:hover {{
                background-color: {theme.accent_hover};
            }}
            QPushButton#ExportButton:disabled {{
                background-color: {theme.accent_disabled};
            }}

            QSpinBox {{
                background-color: {theme.bg_panel};
                border: 1px solid {theme.border};
                border-radius: 4px;
                padding: 2px 6px;
            }}

            QListWidget#ThumbnailSidebar::item {{
                border: 2px solid {theme.border};
                border-radius: 6px;
                margin: 4px;
            }}
            QListWidget#ThumbnailSidebar::item:selected {{
                border: 2px solid {theme.selection};
                background-color: transparent;
                color: {theme.text_primary};
            }}
        """
