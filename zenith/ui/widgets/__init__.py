"""
Custom widgets for page viewing and editing.
"""

from .page_view import PageView
from .thumbnail_sidebar import ThumbnailSidebar

__all__ = [
    "PageView",
    "ThumbnailSidebar",
]
