"""
Board snapshots on top of a blob store.

Persisted layout (version 2)::

    {
        "version": 2,
        "updated_at": "<iso timestamp>",
        "board": {"prefix", "title", "tasks", "columns", "column_order", "next_sequence"}
    }

Unversioned blobs written by the first release (camelCase ``columnOrder``,
``taskIds`` and ``nextId``) are migrated on load. Anything else is rejected
and ``load`` reports no board, so the caller falls back to a default.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import pydantic

from ..tasks.errors import InvariantViolation, PersistenceError, SchemaError
from ..tasks.models import DEFAULT_PREFIX, Board, validate_board
from .blob import BlobStore
from .schema import BoardEnvelope, BoardRecord

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 2
DEFAULT_STORAGE_KEY = "jira-todo-v2"


def _migrate_v1(data: Dict[str, Any]) -> Dict[str, Any]:
    """Unversioned camelCase blob -> version 2 board dict."""
    tasks = data["tasks"]
    prefix = DEFAULT_PREFIX
    for raw in tasks.values():
        key = str(raw.get("key", ""))
        if "-" in key:
            prefix = key.rsplit("-", 1)[0]
            break

    columns = {
        column_id: {
            "id": raw["id"],
            "title": raw["title"],
            "task_ids": list(raw.get("taskIds", [])),
        }
        for column_id, raw in data["columns"].items()
    }
    return {
        "prefix": prefix,
        "title": f"{prefix} Board",
        "tasks": tasks,
        "columns": columns,
        "column_order": list(data["columnOrder"]),
        "next_sequence": data["nextId"],
    }


MIGRATIONS: Dict[int, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    1: _migrate_v1,
}


def encode_board(board: Board) -> str:
    envelope = {
        "version": SCHEMA_VERSION,
        "updated_at": datetime.now().isoformat(),
        "board": board.to_dict(),
    }
    return json.dumps(envelope, ensure_ascii=False, indent=2)


def decode_board(text: str) -> Board:
    """
    Parse, migrate and validate a persisted blob.

    Raises:
        SchemaError: undecodable text, unknown version or malformed fields
        InvariantViolation: structurally valid but inconsistent board
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaError(f"Blob is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SchemaError(f"Expected a JSON object, got {type(data).__name__}")

    version = data.get("version", 1)
    if not isinstance(version, int) or isinstance(version, bool):
        raise SchemaError(f"Invalid schema version: {version!r}")

    try:
        if version == SCHEMA_VERSION:
            record = BoardEnvelope.model_validate(data).board
        elif version in MIGRATIONS:
            try:
                migrated = MIGRATIONS[version](data)
            except (KeyError, TypeError, AttributeError) as e:
                raise SchemaError(f"Cannot migrate version {version} blob: {e!r}") from e
            record = BoardRecord.model_validate(migrated)
            logger.info(f"[STORAGE] migrate | from={version} to={SCHEMA_VERSION}")
        else:
            raise SchemaError(f"Unsupported schema version: {version}")
    except pydantic.ValidationError as e:
        raise SchemaError(f"Malformed board data: {e.error_count()} error(s), first: {e.errors()[0]['loc']}") from e

    return validate_board(record.to_board())


class BoardRepository:
    """
    Load and snapshot the board under a single storage key.

    ``save`` never raises for storage problems: it logs them and returns
    False so the caller can warn the user and keep working in memory.
    """

    def __init__(self, blobs: BlobStore, key: str = DEFAULT_STORAGE_KEY):
        self.blobs = blobs
        self.key = key

    def load(self) -> Optional[Board]:
        try:
            text = self.blobs.get(self.key)
        except (OSError, PersistenceError) as e:
            logger.warning(f"[STORAGE] load failed | key={self.key} error={e}")
            return None
        if text is None:
            logger.info(f"[STORAGE] load | key={self.key} status=absent")
            return None

        try:
            board = decode_board(text)
        except (SchemaError, InvariantViolation) as e:
            logger.warning(f"[STORAGE] load rejected | key={self.key} error={e}")
            return None

        logger.info(f"[STORAGE] load | key={self.key} tasks={board.task_count}")
        return board

    def save(self, board: Board) -> bool:
        try:
            self.blobs.set(self.key, encode_board(board))
        except (OSError, PersistenceError, TypeError, ValueError) as e:
            logger.warning(f"[STORAGE] save failed | key={self.key} error={e}")
            return False
        return True

    def clear(self) -> None:
        self.blobs.delete(self.key)
