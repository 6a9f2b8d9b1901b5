"""Per-document settings that survive editor restarts.

Settings live in a JSON file in the user's config directory, keyed by the
absolute path of the document. The editor uses them to reopen a file with
the cursor where it was left.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .buffer import BufCursor
from .constants import EditorConstants

logger = logging.getLogger(__name__)

CURSOR_ROW = "cursor_row"
CURSOR_COL = "cursor_col"


class SettingsPersistence:
    """Reads and writes the per-document settings file."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = config_dir or Path(
            platformdirs.user_config_dir(EditorConstants.APP_NAME, EditorConstants.APP_AUTHOR))
        self._settings_file = self._config_dir / EditorConstants.SETTINGS_FILE_NAME
        self._settings_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _load_all_settings(self) -> Dict[str, Dict[str, Any]]:
        """Load every document's settings, or an empty dict if unreadable."""
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load settings from %s: %s", self._settings_file, e)
            data = {}

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}
        self._settings_cache = data
        return self._settings_cache

    def _save_all_settings(self, settings: Dict[str, Dict[str, Any]]) -> bool:
        """Write every document's settings atomically (temp file + rename)."""
        temp_file = self._settings_file.with_suffix(EditorConstants.ATOMIC_SAVE_SUFFIX)
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning("Could not save settings to %s: %s", self._settings_file, e)
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False
        self._settings_cache = settings
        return True

    def load_settings(self, document_path: Optional[str]) -> Dict[str, Any]:
        """Settings for one document; empty if none were saved.

        Values that fail :meth:`validate_setting` are dropped.
        """
        if document_path is None:
            return {}
        doc_settings = self._load_all_settings().get(os.path.abspath(document_path), {})
        if not isinstance(doc_settings, dict):
            logger.warning("Settings for %s are not a dict, ignoring", document_path)
            return {}
        return {k: v for k, v in doc_settings.items() if self.validate_setting(k, v)}

    def save_settings(self, document_path: Optional[str], settings: Dict[str, Any]) -> bool:
        """Replace the settings stored for one document.

        Returns:
            True if the settings file was written
        """
        if document_path is None:
            return False
        all_settings = dict(self._load_all_settings())
        all_settings[os.path.abspath(document_path)] = settings
        return self._save_all_settings(all_settings)

    def validate_setting(self, key: str, value: Any) -> bool:
        """Check a setting's type and range. Unknown keys are accepted."""
        if key in (CURSOR_ROW, CURSOR_COL):
            # bool is a subclass of int but is never a coordinate
            return isinstance(value, int) and not isinstance(value, bool) and value >= 0
        return True

    def load_cursor(self, document_path: Optional[str]) -> Optional[BufCursor]:
        """Last remembered cursor for a document, unclamped."""
        settings = self.load_settings(document_path)
        if CURSOR_ROW not in settings or CURSOR_COL not in settings:
            return None
        return BufCursor(settings[CURSOR_ROW], settings[CURSOR_COL])

    def save_cursor(self, document_path: Optional[str], cursor: BufCursor) -> bool:
        settings = self.load_settings(document_path)
        settings[CURSOR_ROW] = cursor.row
        settings[CURSOR_COL] = cursor.col
        return self.save_settings(document_path, settings)

    def clear_cache(self) -> None:
        """Forget the in-memory copy so the next read goes to disk."""
        self._settings_cache = None


_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
