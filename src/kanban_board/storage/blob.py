"""
Key-value blob stores.

A blob store keeps opaque strings under string keys, the way a browser's
local storage does. BoardRepository layers the board schema on top.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..core.paths import BoardPaths, atomic_write_text
from ..tasks.errors import PersistenceError

logger = logging.getLogger(__name__)


class BlobStore(ABC):
    """Durable string storage addressed by key."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Forget a key; missing keys are ignored."""


class MemoryBlobStore(BlobStore):
    """
    In-process store, optionally limited to ``quota_bytes`` per value.

    Exceeding the quota raises PersistenceError, like a full local storage.
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        size = len(value.encode("utf-8"))
        if self.quota_bytes is not None and size > self.quota_bytes:
            raise PersistenceError(f"Quota exceeded for '{key}': {size} > {self.quota_bytes} bytes")
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class FileBlobStore(BlobStore):
    """One file per key under ``<root>/blobs``; writes replace the file atomically."""

    def __init__(self, root: Path):
        self.paths = BoardPaths(root=Path(root).expanduser().resolve())

    def get(self, key: str) -> Optional[str]:
        path = self.paths.blob_path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise PersistenceError(f"Blob '{key}' is not UTF-8 text: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self.paths.blob_path(key)
        atomic_write_text(path, value)
        logger.debug(f"[STORAGE] write | key={key} path={path} size={len(value)}")

    def delete(self, key: str) -> None:
        path = self.paths.blob_path(key)
        if path.exists():
            path.unlink()
