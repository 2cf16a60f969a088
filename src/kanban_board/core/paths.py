from __future__ import annotations

import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


@dataclass(frozen=True, slots=True)
class BoardPaths:
    root: Path

    @property
    def blobs_dir(self) -> Path:
        return self.root / "blobs"

    def blob_path(self, key: str) -> Path:
        return self.blobs_dir / f"{safe_name(key)}.json"


def safe_name(key: str) -> str:
    """Map an arbitrary storage key onto a file name."""
    name = _UNSAFE_CHARS.sub("_", key)
    if not name.strip("._"):
        raise ValueError(f"Storage key cannot be used as a file name: {key!r}")
    return name


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write_text(path: Path, text: str) -> None:
    """Write through a sibling temp file so readers never see a partial blob."""
    ensure_dir(path.parent)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise
