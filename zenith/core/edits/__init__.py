"""
Edit model: edit values, per-page edit maps and their undo/redo history.
"""
from .models import (
    EditIdGenerator,
    EditKind,
    Edit,
    ImageEdit,
    ImageKind,
    TextEdit,
    create_image_edit,
    create_text_edit,
    detect_image_kind,
    image_edit_from_bytes,
)
from .page_edits import EMPTY_EDIT_MAP, PageEditMap
from .history import EditHistory
from .manager import EditSession
from .persistence import EditPersistence

__all__ = [
    'Edit',
    'EditIdGenerator',
    'EditKind',
    'ImageEdit',
    'ImageKind',
    'TextEdit',
    'create_image_edit',
    'create_text_edit',
    'detect_image_kind',
    'image_edit_from_bytes',
    'EMPTY_EDIT_MAP',
    'PageEditMap',
    'EditHistory',
    'EditSession',
    'EditPersistence',
]
