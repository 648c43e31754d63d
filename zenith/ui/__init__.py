"""
User interface components.
"""
from .windows.main_window import MainWindow

__all__ = ['MainWindow']
