from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .storage.repository import DEFAULT_STORAGE_KEY
from .tasks.models import DEFAULT_PREFIX

HOME_ENV = "KANBAN_BOARD_HOME"


def config_dir() -> Path:
    override = os.environ.get(HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".kanban-board"


def config_path() -> Path:
    return config_dir() / "config.json"


class AppConfig(BaseModel):
    """Глобальный конфиг доски."""

    data_dir: str = Field(default_factory=lambda: str(config_dir()))
    storage_key: str = DEFAULT_STORAGE_KEY

    # Prefix of generated keys (WEB-1, WEB-2, ...) for a freshly created board
    board_prefix: str = DEFAULT_PREFIX
    board_title: str | None = None

    web_host: str = "127.0.0.1"
    web_port: int = 8080

    log_level: str = "INFO"

    @field_validator("board_prefix")
    @classmethod
    def _prefix_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("board_prefix must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir).expanduser()


def load_config() -> AppConfig:
    path = config_path()
    if not path.exists():
        return AppConfig()
    data = json.loads(path.read_text(encoding="utf-8"))
    return AppConfig(**data)


def save_config(cfg: AppConfig) -> None:
    d = config_dir()
    d.mkdir(parents=True, exist_ok=True)
    config_path().write_text(cfg.model_dump_json(indent=2), encoding="utf-8")
