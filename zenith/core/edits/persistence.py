"""
Autosave of edit sessions to JSON files.
"""
import hashlib
import json
import logging
import os
from pathlib import Path
from typing import Optional, Sequence, Tuple

from zenith.utils.resource_loader import get_sessions_dir
from .page_edits import PageEditMap

logger = logging.getLogger(__name__)


class EditPersistence:
    """Manages saving and loading edit sessions to/from disk."""

    def __init__(self, sessions_dir: Optional[Path] = None):
        self._sessions_dir = sessions_dir

    def get_sessions_dir(self) -> Path:
        if self._sessions_dir is None:
            self._sessions_dir = get_sessions_dir()
        return self._sessions_dir

    def get_json_path(self, document_bytes: bytes) -> Path:
        """
        Get the JSON file path for a document.

        Sessions are keyed by a hash of the document content so the same
        file is recognised wherever it is opened from.
        """
        content_hash = hashlib.md5(document_bytes).hexdigest()
        return self.get_sessions_dir() / f"{content_hash}.json"

    def save(self, document_bytes: bytes, file_name: str, edits: PageEditMap,
             page_order: Sequence[int]) -> bool:
        """
        Save the current edits and page order.

        Returns:
            True if save was successful, False otherwise
        """
        file_path = self.get_json_path(document_bytes)
        data = {
            'file_name': file_name,
            'page_order': list(page_order),
            'edits': edits.to_dict(),
        }

        try:
            os.makedirs(file_path.parent, exist_ok=True)
            with open(file_path, 'w') as f:
                json.dump(data, f, indent=2)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Failed to save edit session: %s", e)
            return False

    def load(self, document_bytes: bytes) -> Optional[Tuple[PageEditMap, Tuple[int, ...]]]:
        """
        Load a saved session for a document.

        Returns:
            Tuple of (edits, page order), or None if nothing usable is stored
        """
        file_path = self.get_json_path(document_bytes)
        if not file_path.exists():
            return None

        try:
            with open(file_path, 'r') as f:
                data = json.load(f)

            if not isinstance(data, dict):
                raise ValueError("session file does not hold an object")
            stored_edits = data.get('edits', {})
            stored_order = data.get('page_order', [])
            if not isinstance(stored_edits, dict) or not isinstance(stored_order, list):
                raise ValueError("session file has unexpected edits or page order")

            edits = PageEditMap.from_dict(stored_edits)
            page_order = tuple(int(p) for p in stored_order)
            return edits, page_order
        except (OSError, AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Failed to load edit session from %s: %s", file_path, e)
            return None

    def delete(self, document_bytes: bytes) -> bool:
        """
        Delete the saved session for a document.

        Returns:
            True if deletion was successful or no file existed
        """
        file_path = self.get_json_path(document_bytes)
        if not file_path.exists():
            return True

        try:
            os.remove(file_path)
            return True
        except OSError as e:
            logger.warning("Failed to delete edit session: %s", e)
            return False

    def has_saved_session(self, document_bytes: bytes) -> bool:
        return self.get_json_path(document_bytes).exists()
