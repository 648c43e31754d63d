from dataclasses import dataclass


@dataclass
class ThemeColors:
    """Color definitions for a theme."""
    # Background colors
    bg_window: str
    bg_panel: str
    bg_canvas: str

    # Text colors
    text_primary: str
    text_muted: str

    # Accent colors
    accent_primary: str
    accent_hover: str
    accent_disabled: str

    # Border colors
    border: str

    # Edit overlay
    selection: str
