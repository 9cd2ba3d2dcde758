import sqlite3

import pytest

from liftbook import storage as storage_module
from liftbook.storage import (
    READ_FAILED,
    JsonFileStorage,
    SQLiteStorage,
    get_item,
    remove_item,
    set_item,
)
from helpers import BrokenStorage


@pytest.fixture(params=["sqlite", "json"])
def adapter(request, tmp_path):
    if request.param == "sqlite":
        return SQLiteStorage(tmp_path / "nested" / "store.db")
    return JsonFileStorage(tmp_path / "store")


def test_read_missing_key(adapter):
    assert adapter.read("sessions") is None


def test_write_overwrite_remove(adapter):
    adapter.write("settings", '{"a": 1}')
    adapter.write("settings", '{"a": 2}')
    assert adapter.read("settings") == '{"a": 2}'
    adapter.remove("settings")
    assert adapter.read("settings") is None
    # removing twice is harmless
    adapter.remove("settings")


def test_sqlite_uses_single_table(tmp_path):
    db = tmp_path / "store.db"
    SQLiteStorage(db).write("sessions", "[]")
    with sqlite3.connect(db) as conn:
        rows = conn.execute("SELECT key, value FROM kv_store").fetchall()
    assert rows == [("sessions", "[]")]


def test_json_storage_leaves_no_temp_file(tmp_path):
    storage = JsonFileStorage(tmp_path)
    storage.write("sessions", "[]")
    assert sorted(p.name for p in tmp_path.iterdir()) == ["sessions.json"]


def test_fail_soft_helpers(caplog):
    broken = BrokenStorage()
    assert get_item(broken, "sessions") is None
    assert set_item(broken, "sessions", "[]") is False
    assert remove_item(broken, "sessions") is False
    assert "Error reading storage key sessions" in caplog.text
    assert "Error writing storage key sessions" in caplog.text


def test_helpers_pass_through(adapter):
    assert set_item(adapter, "k", "v") is True
    assert get_item(adapter, "k") == "v"
    assert remove_item(adapter, "k") is True
    assert get_item(adapter, "k") is None


def test_get_item_default_marks_failed_read(adapter):
    assert get_item(adapter, "missing", default=READ_FAILED) is None
    assert get_item(BrokenStorage(), "sessions", default=READ_FAILED) is READ_FAILED


def test_sqlite_closes_connection_when_setup_fails(tmp_path, monkeypatch):
    class FailingConnection:
        closed = False

        def execute(self, *args):
            raise sqlite3.OperationalError("disk I/O error")

        def close(self):
            self.closed = True

    conn = FailingConnection()
    monkeypatch.setattr(storage_module.sqlite3, "connect", lambda path: conn)
    storage = SQLiteStorage(tmp_path / "store.db")
    with pytest.raises(sqlite3.OperationalError):
        storage.read("sessions")
    assert conn.closed
    assert storage._initialized is False
