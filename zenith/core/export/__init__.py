"""
Background export of edited documents.
"""
from .export_worker import ExportWorker

__all__ = ['ExportWorker']
