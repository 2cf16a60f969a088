from __future__ import annotations

from typing import Optional

from .config import AppConfig, load_config
from .storage import BoardRepository, FileBlobStore
from .tasks import BoardStore, default_board


def build_repository(cfg: AppConfig) -> BoardRepository:
    return BoardRepository(FileBlobStore(cfg.data_path), key=cfg.storage_key)


def open_store(cfg: Optional[AppConfig] = None) -> BoardStore:
    """
    Open the board described by the config.

    Falls back to the built-in default board (with the configured prefix)
    when nothing valid is stored yet.
    """
    cfg = cfg or load_config()
    default = default_board(cfg.board_prefix, cfg.board_title)
    return BoardStore.open(build_repository(cfg), default=default)
