"""Key-value store backed by JSON files in a directory."""

import asyncio
import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path

from calorie_ledger.services.storage import KeyValueStore

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass
class JsonFileStore(KeyValueStore):
    """Stores each key as ``<directory>/<key>.json``."""

    directory: Path

    @classmethod
    def create(cls, directory: str | Path) -> "JsonFileStore":
        """Create a store rooted at a directory, creating it if needed."""
        path = Path(directory)
        path.mkdir(parents=True, exist_ok=True)
        return cls(directory=path)

    async def get(self, key: str) -> str | None:
        """Return the file contents for a key."""
        return await asyncio.to_thread(self._read, self._path(key))

    async def set(self, key: str, value: str) -> None:
        """Atomically replace the file for a key."""
        await asyncio.to_thread(self._write, self._path(key), value)

    async def remove(self, key: str) -> None:
        """Delete the file for a key if present."""
        await asyncio.to_thread(self._path(key).unlink, missing_ok=True)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    @staticmethod
    def _read(path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    @staticmethod
    def _write(path: Path, value: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            Path(tmp_name).replace(path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
