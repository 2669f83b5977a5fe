"""Location of the submission store."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

DATA_DIR_ENV: Final[str] = "MEMBERORDERS_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"
SQLITE_FILENAME: Final[str] = "memberorders.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Directory holding the default SQLite submission store."""

    data_dir: Path

    def sqlite_uri(self) -> str:
        data_dir = self.data_dir.expanduser().resolve()
        data_dir.mkdir(parents=True, exist_ok=True)
        return f"sqlite+pysqlite:///{data_dir / SQLITE_FILENAME}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv(DATA_DIR_ENV, "").strip()
    if env_dir:
        return StorageConfig(data_dir=Path(env_dir))
    xdg_data_home = os.getenv("XDG_DATA_HOME", "").strip()
    base = Path(xdg_data_home) if xdg_data_home else Path.home() / ".local" / "share"
    return StorageConfig(data_dir=base / "memberorders")


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """Use ``DATABASE_URI`` when set, else a SQLite file in the data directory."""

    env_uri = os.getenv(DATABASE_URI_ENV, "").strip()
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    return DatabaseConfig(uri=(storage or get_storage_config()).sqlite_uri())
