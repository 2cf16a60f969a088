"""Board persistence: blob stores, the persisted schema and the versioned board repository."""

from .blob import BlobStore, FileBlobStore, MemoryBlobStore
from .repository import DEFAULT_STORAGE_KEY, SCHEMA_VERSION, BoardRepository, decode_board, encode_board
from .schema import BoardEnvelope, BoardRecord, ColumnRecord, TaskRecord

__all__ = [
    "BlobStore",
    "FileBlobStore",
    "MemoryBlobStore",
    "BoardRepository",
    "DEFAULT_STORAGE_KEY",
    "SCHEMA_VERSION",
    "decode_board",
    "encode_board",
    "BoardEnvelope",
    "BoardRecord",
    "ColumnRecord",
    "TaskRecord",
]
