"""File-based key/value store for record collections."""

import json
import logging
import re
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[a-z0-9_\-]+$")


class RecordStore:
    """
    Simple file-based store for entity collections.

    Each key holds one JSON document (usually a list of record dicts)
    in its own file under the data directory.

    Usage:
        store = RecordStore(data_dir=".gpa_data")

        students = store.get("students", [])
        students.append({"id": "std1", "matric_no": "2025/1111"})
        store.set("students", students)
    """

    def __init__(self, data_dir: str = ".gpa_data"):
        """
        Initialize store.

        Args:
            data_dir: Directory to store collection files.
        """
        self.data_dir = Path(data_dir)
        self._ensure_data_dir()

    def _ensure_data_dir(self) -> None:
        """Create data directory if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _normalize_key(self, key: str) -> str:
        """Lower-case and validate a collection key."""
        normalized = key.strip().lower()
        if not normalized or not _KEY_PATTERN.match(normalized):
            raise ValueError(f"Invalid store key: {key!r}")
        return normalized

    def _data_file(self, key: str) -> Path:
        """Get file path for key."""
        return self.data_dir / f"{self._normalize_key(key)}.json"

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get the collection stored under key.

        Args:
            key: Collection key to look up.
            default: Value returned when the key is missing or unreadable.

        Returns:
            Stored data, or default.
        """
        data_file = self._data_file(key)

        if not data_file.exists():
            return default

        try:
            return json.loads(data_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Discarding unreadable store file %s", data_file)
            data_file.unlink(missing_ok=True)
            return default

    def set(self, key: str, data: Any) -> None:
        """
        Store data under key, replacing what was there.

        Args:
            key: Collection key.
            data: JSON-serialisable data.
        """
        self._ensure_data_dir()
        data_file = self._data_file(key)
        data_file.write_text(
            json.dumps(data, indent=2, default=str),
            encoding="utf-8"
        )
        logger.debug("Wrote %s", data_file)

    def delete(self, key: str) -> bool:
        """
        Delete the collection stored under key.

        Returns:
            True if deleted, False if not found.
        """
        data_file = self._data_file(key)

        if data_file.exists():
            data_file.unlink()
            return True
        return False

    def keys(self) -> list[str]:
        """List stored keys, sorted."""
        if not self.data_dir.exists():
            return []
        return sorted(data_file.stem for data_file in self.data_dir.glob("*.json"))

    def clear(self) -> int:
        """
        Delete every stored collection.

        Returns:
            Number of files deleted.
        """
        count = 0
        if self.data_dir.exists():
            for data_file in self.data_dir.glob("*.json"):
                data_file.unlink()
                count += 1
        return count

    def stats(self) -> dict[str, Any]:
        """
        Get store statistics.

        Returns:
            Dict with total entries, total size and data dir.
        """
        total = 0
        total_size = 0

        if self.data_dir.exists():
            for data_file in self.data_dir.glob("*.json"):
                total += 1
                total_size += data_file.stat().st_size

        return {
            "total_entries": total,
            "total_size_bytes": total_size,
            "data_dir": str(self.data_dir),
        }
