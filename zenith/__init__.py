"""
Zenith PDF Editor: annotate PDF pages with text and images, reorder pages
and export a new document.
"""

__version__ = "0.1.0"
