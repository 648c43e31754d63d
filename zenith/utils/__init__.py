"""
Utility functions and helpers.
"""
from .resource_loader import (
    get_app_data_dir,
    get_sessions_dir,
)
from .file_kinds import (
    export_file_name,
    guess_mime_type,
    require_image,
    require_pdf,
)

__all__ = [
    # Data locations
    'get_app_data_dir',
    'get_sessions_dir',

    # File checks
    'export_file_name',
    'guess_mime_type',
    'require_image',
    'require_pdf',
]
