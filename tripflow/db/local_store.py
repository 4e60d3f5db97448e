"""Process-local key-value stores backing offline mode."""

import os
import tempfile
from pathlib import Path
from typing import Protocol
from urllib.parse import quote


class KeyValueStore(Protocol):
    """String key-value store with whole-value reads and writes."""

    def get(self, key: str) -> str | None:
        """Get value for key, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Replace the value stored under key."""
        ...


class InMemoryKeyValueStore:
    """In-memory implementation of KeyValueStore."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        """Get value for key."""
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        """Set value for key."""
        self._values[key] = value

    def keys(self) -> list[str]:
        """Stored keys in insertion order."""
        return list(self._values)


class FileKeyValueStore:
    """Durable KeyValueStore keeping one file per key in a directory.

    File names are the URL-quoted key plus ".json". Writes go through a
    temporary file and an atomic rename.
    """

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)
        self._dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self._dir / f"{quote(key, safe='')}.json"

    def get(self, key: str) -> str | None:
        """Read value for key from disk."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        """Write value for key to disk."""
        path = self._path(key)
        fd, tmp_name = tempfile.mkstemp(dir=self._dir, prefix=".tmp-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
