"""
Application controllers for managing interactions between UI and core logic.
"""
from .document_controller import DocumentController
from .edit_controller import EditController

__all__ = [
    'DocumentController',
    'EditController',
]
