"""
Local key-value storage: one JSON document per key
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional
from study_tracker.config.settings import settings
from study_tracker.utils.error_handler import PersistenceReadError, PersistenceWriteError
from study_tracker.utils.logger import logger


class Storage:
    """Durable string-key store holding JSON-serialized values"""

    def __init__(self, data_dir: Optional[str] = None):
        """
        Initialize storage

        Args:
            data_dir: Directory holding the documents (optional, uses settings)
        """
        if data_dir is None:
            data_dir = settings.DATA_DIR
        self.data_dir = Path(data_dir)
        self.logger = logger

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def save(self, key: str, value: Any) -> None:
        """
        Serialize value and replace the document stored under key

        The write goes to a temporary file first and is moved into place,
        so a document is either fully old or fully new.

        Args:
            key: Storage key
            value: JSON-serializable value

        Raises:
            PersistenceWriteError: If the value can't be serialized or written
        """
        path = self._path(key)
        try:
            payload = json.dumps(value, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as e:
            raise PersistenceWriteError(f"Value for '{key}' is not JSON-serializable: {e}", key=key) from e

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceWriteError(f"Failed to write '{key}': {e}", key=key) from e

        self.logger.debug(f"[Storage] Saved '{key}' ({len(payload)} bytes)")

    def _read(self, key: str) -> Any:
        path = self._path(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PersistenceReadError(f"Failed to read '{key}': {e}", key=key) from e

    def load(self, key: str, default: Any = None) -> Any:
        """
        Read and deserialize the document stored under key

        Args:
            key: Storage key
            default: Value returned when the key is absent or malformed

        Returns:
            Stored value or default
        """
        if not self._path(key).exists():
            return default
        try:
            return self._read(key)
        except PersistenceReadError as e:
            self.logger.warning(f"[Storage] {e.message}. Falling back to default.")
            return default

    def delete(self, key: str) -> None:
        """
        Remove the document stored under key (absent key is a no-op)

        Raises:
            PersistenceWriteError: If the document can't be removed
        """
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceWriteError(f"Failed to delete '{key}': {e}", key=key) from e

        self.logger.debug(f"[Storage] Deleted '{key}'")
