"""
Core business logic for Zenith PDF Editor.
"""
from .edits import EditHistory, EditSession, ImageEdit, PageEditMap, TextEdit
from .errors import (
    DocumentLoadFailure,
    ExportFailure,
    InvalidFileKind,
    InvalidImageKind,
    ZenithError,
)
from .page_order import initial_page_order, reorder

__all__ = [
    'EditHistory',
    'EditSession',
    'ImageEdit',
    'PageEditMap',
    'TextEdit',
    'DocumentLoadFailure',
    'ExportFailure',
    'InvalidFileKind',
    'InvalidImageKind',
    'ZenithError',
    'initial_page_order',
    'reorder',
]
