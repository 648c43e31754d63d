"""
Locations for per-user application data.
"""
import os
import sys
from pathlib import Path

from zenith import config


def get_app_data_dir(app_name: str = config.APP_NAME) -> Path:
    """
    Get the application data directory for storing user data.

    Args:
        app_name: Name of the application

    Returns:
        Path to the app data directory
    """
    if os.name == 'nt':  # Windows
        base_dir = os.environ.get('APPDATA', os.path.expanduser('~'))
    elif sys.platform == 'darwin':  # macOS
        base_dir = os.path.expanduser('~/Library/Application Support')
    else:  # Linux and others
        base_dir = os.environ.get('XDG_DATA_HOME', os.path.expanduser('~/.local/share'))

    app_dir = Path(base_dir) / app_name
    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir

def get_sessions_dir() -> Path:
    """Directory holding autosaved edit sessions."""
    sessions_dir = get_app_data_dir() / "sessions"
    sessions_dir.mkdir(parents=True, exist_ok=True)
    return sessions_dir
