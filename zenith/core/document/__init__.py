"""
PDF document reading, coordinate conversion and export.
"""
from .pdf_reader import PDFDocumentReader
from .pdf_exporter import PDFExporter

__all__ = ['PDFDocumentReader', 'PDFExporter']
