"""Location of the resource store."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

DATABASE_FILENAME: Final[str] = "ipamkeeper.db"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def default_data_dir() -> Path:
    """``$IPAMKEEPER_DATA_DIR``, else ``ipamkeeper`` under the XDG data home."""

    override = os.getenv("IPAMKEEPER_DATA_DIR")
    if override:
        return Path(override).expanduser().resolve()
    xdg_data_home = os.getenv("XDG_DATA_HOME")
    base = Path(xdg_data_home) if xdg_data_home else Path.home() / ".local" / "share"
    return (base / "ipamkeeper").expanduser().resolve()


def get_database_config(*, data_dir: Path | None = None) -> DatabaseConfig:
    """Use ``DATABASE_URI`` when set, otherwise a sqlite file in the data dir.

    The data dir is created on demand so the sqlite driver can open the file.
    """

    explicit = os.getenv("DATABASE_URI")
    if explicit:
        return DatabaseConfig(uri=explicit)
    directory = data_dir or default_data_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return DatabaseConfig(uri=f"sqlite+pysqlite:///{directory / DATABASE_FILENAME}")
