"""
Application styling and themes.
"""
from .models import ThemeColors
from .theme_manager import ThemeManager

__all__ = ['ThemeColors', 'ThemeManager']
