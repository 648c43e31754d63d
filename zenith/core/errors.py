"""
Error kinds raised by the edit model and the document services.
"""


class ZenithError(Exception):
    """Base class for all application errors."""


class InvalidFileKind(ZenithError):
    """A selected file is not a PDF document."""


class InvalidImageKind(ZenithError):
    """An image payload is not a decodable PNG or JPEG."""


class DocumentLoadFailure(ZenithError):
    """Source bytes could not be opened as a PDF document."""


class ExportFailure(ZenithError):
    """Compositing the edited document failed."""
