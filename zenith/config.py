# zenith/config.py
"""Application defaults."""

APP_NAME = "ZenithPDF"
APP_TITLE = "Zenith PDF Editor"

# New text edits
DEFAULT_TEXT = "New Text"
DEFAULT_FONT_SIZE = 14
DEFAULT_FONT_FAMILY = "Helvetica"
DEFAULT_TEXT_WIDTH = 100
DEFAULT_TEXT_HEIGHT = 20

# New image edits are always dropped at a fixed offset
DEFAULT_IMAGE_WIDTH = 200
IMAGE_OFFSET = (50, 50)

# Baseline sits this fraction of the font size below the box top
BASELINE_FACTOR = 0.8

# Built-in PDF font used for every exported text edit
EXPORT_FONT = "helv"

# Viewer
DEFAULT_ZOOM = 1.5
MIN_ZOOM = 0.5
MAX_ZOOM = 3.0
ZOOM_STEP = 0.25
THUMBNAIL_SCALE = 0.2

# Interactive resize stops below this size, in page points
MIN_EDIT_SIZE = 10

PDF_MIME_TYPE = "application/pdf"
IMAGE_MIME_TYPES = ("image/png", "image/jpeg")
EXPORT_PREFIX = "edited-"
