"""Key-value backends the board document is written to.

Every backend stores opaque strings under string keys. Failures are raised
as :class:`StorageError`; deciding whether a failure matters is left to the
caller.
"""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .config import Settings
from .db import KeyValue, init_db, make_engine, make_session_factory

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """A backend could not read or write a key."""


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage, lost when the process exits."""

    def __init__(self) -> None:
        self.items: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set(self, key: str, value: str) -> None:
        self.items[key] = value


class FileStorage:
    """One file per key inside ``directory``."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"cannot read {path}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # readers only ever see a complete document
            fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp, path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"cannot write {path}: {exc}") from exc


class SqlStorage:
    """Rows of the ``kv_store`` table, through SQLAlchemy."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.SessionLocal = make_session_factory(engine)
        try:
            init_db(engine)
        except SQLAlchemyError as exc:
            raise StorageError(f"cannot initialise kv_store: {exc}") from exc

    def get(self, key: str) -> Optional[str]:
        try:
            with self.SessionLocal() as session:
                row = session.get(KeyValue, key)
                return row.value if row is not None else None
        except SQLAlchemyError as exc:
            raise StorageError(f"cannot read {key!r}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            with self.SessionLocal() as session:
                row = session.get(KeyValue, key)
                if row is None:
                    session.add(KeyValue(key=key, value=value))
                else:
                    row.value = value
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"cannot write {key!r}: {exc}") from exc


def storage_from_settings(settings: Settings) -> KeyValueStorage:
    if settings.storage == "memory":
        return MemoryStorage()
    if settings.storage == "file":
        return FileStorage(settings.data_dir)
    return SqlStorage(make_engine(settings.database_url))


def open_storage(settings: Settings) -> KeyValueStorage:
    """Open the configured backend, or keep the board in memory if it is unavailable."""
    try:
        return storage_from_settings(settings)
    except StorageError as exc:
        logger.warning(
            "Storage backend %r unavailable, board changes will not be saved: %s",
            settings.storage,
            exc,
        )
        return MemoryStorage()
