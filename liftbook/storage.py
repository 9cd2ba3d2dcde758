"""Key/value storage backing the workout data.

Adapters expose ``read``, ``write`` and ``remove`` and raise on I/O errors.
The module level helpers :func:`get_item`, :func:`set_item` and
:func:`remove_item` wrap an adapter with the application's fail-soft policy:
failures are logged and turned into ``None`` for reads or ``False`` for
writes.  Nothing is retried.
"""

from __future__ import annotations

import logging
import os
import sqlite3
from pathlib import Path

from liftbook import DEFAULT_DB_PATH


class StorageAdapter:
    """Interface for durable string storage keyed by name."""

    def read(self, key: str) -> str | None:
        raise NotImplementedError

    def write(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class SQLiteStorage(StorageAdapter):
    """Store values in a single ``kv_store`` table of an SQLite database."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH) -> None:
        self.db_path = Path(db_path)
        self._initialized = False

    def _connect(self) -> sqlite3.Connection:
        if not self._initialized:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        if not self._initialized:
            try:
                conn.execute(
                    "CREATE TABLE IF NOT EXISTS kv_store ("
                    "key TEXT PRIMARY KEY, value TEXT NOT NULL)"
                )
                conn.commit()
            except sqlite3.Error:
                conn.close()
                raise
            self._initialized = True
        return conn

    def read(self, key: str) -> str | None:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        finally:
            conn.close()
        return row[0] if row else None

    def write(self, key: str, value: str) -> None:
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    "INSERT OR REPLACE INTO kv_store (key, value) VALUES (?, ?)",
                    (key, value),
                )
        finally:
            conn.close()

    def remove(self, key: str) -> None:
        conn = self._connect()
        try:
            with conn:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        finally:
            conn.close()


class JsonFileStorage(StorageAdapter):
    """Store each key as ``<key>.json`` inside ``directory``.

    Writes go to a temporary file which is then renamed over the target so
    a crash never leaves a half written value behind.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, value: str) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, encoding="utf-8")
        os.replace(tmp, path)

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass


# Returned by get_item(..., default=READ_FAILED) when the read raised, so a
# failed read can be told apart from a missing key.
READ_FAILED = object()


def get_item(storage: StorageAdapter, key: str, default=None):
    """Return the value stored under ``key`` or ``default`` on failure.

    A missing key always gives ``None``.
    """

    try:
        return storage.read(key)
    except Exception:
        logging.exception("Error reading storage key %s", key)
        return default


def set_item(storage: StorageAdapter, key: str, value: str) -> bool:
    """Store ``value`` under ``key``; return ``False`` if the write failed."""

    try:
        storage.write(key, value)
    except Exception:
        logging.exception("Error writing storage key %s", key)
        return False
    return True


def remove_item(storage: StorageAdapter, key: str) -> bool:
    """Delete ``key``; return ``False`` if the removal failed."""

    try:
        storage.remove(key)
    except Exception:
        logging.exception("Error removing storage key %s", key)
        return False
    return True
