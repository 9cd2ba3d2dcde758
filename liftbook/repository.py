"""Typed access to the records kept in a :class:`StorageAdapter`.

Sessions are stored as a single JSON array under :data:`SESSIONS_KEY`,
settings as a JSON object under :data:`SETTINGS_KEY`.  Reads never raise:
missing or unreadable data falls back to an empty list or default settings.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from liftbook import SESSIONS_KEY, SETTINGS_KEY
from liftbook.models import UserSettings, WorkoutSession
from liftbook.storage import READ_FAILED, StorageAdapter, get_item, remove_item, set_item
from liftbook.utils import to_iso, utcnow


def make_export_name(now: datetime | None = None) -> str:
    """Return the file name used for JSON exports.

    The name follows ``liftbook_YYYY_MM_DD_HH__MM__SS.json`` using local time.
    """

    now = now or datetime.now()
    return now.strftime("liftbook_%Y_%m_%d_%H__%M__%S.json")


class SessionRepository:
    """Sessions and settings persisted through ``storage``."""

    def __init__(self, storage: StorageAdapter) -> None:
        self.storage = storage

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def _load_session_dicts(self) -> list[dict]:
        raw = get_item(self.storage, SESSIONS_KEY)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logging.exception("Stored sessions are not valid JSON")
            return []
        if not isinstance(data, list):
            logging.warning("Stored sessions are not a list; ignoring")
            return []
        return data

    def list_sessions(self) -> list[WorkoutSession]:
        """Return stored sessions, most recent first.

        Entries that cannot be decoded are skipped.
        """

        sessions: list[WorkoutSession] = []
        for item in self._load_session_dicts():
            try:
                sessions.append(WorkoutSession.from_dict(item))
            except (KeyError, TypeError, ValueError):
                logging.warning("Skipping malformed session record: %r", item)
        return sessions

    def get_session(self, session_id: str) -> WorkoutSession | None:
        for session in self.list_sessions():
            if session.id == session_id:
                return session
        return None

    def upsert_session(self, session: WorkoutSession) -> bool:
        """Insert ``session`` or replace the stored entry with the same id.

        The stored list is re-sorted by date, newest first.  Returns
        ``False`` when the write failed.
        """

        sessions = [s for s in self.list_sessions() if s.id != session.id]
        sessions.append(session)
        sessions.sort(key=lambda s: s.date, reverse=True)
        payload = json.dumps([s.to_dict() for s in sessions])
        return set_item(self.storage, SESSIONS_KEY, payload)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def get_settings(self) -> UserSettings:
        """Return stored settings, creating the defaults on first use.

        When the store cannot be read the defaults are returned without
        being written, so stored values survive a failed read.
        """

        raw = get_item(self.storage, SETTINGS_KEY, default=READ_FAILED)
        if raw is READ_FAILED:
            return UserSettings()
        if raw is None:
            settings = UserSettings()
            self.save_settings(settings)
            return settings
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("settings must be an object")
            return UserSettings.from_dict(data)
        except (TypeError, ValueError):
            logging.exception("Stored settings are invalid; using defaults")
            return UserSettings()

    def save_settings(self, settings: UserSettings) -> bool:
        """Persist ``settings``."""

        return set_item(self.storage, SETTINGS_KEY, json.dumps(settings.to_dict()))

    def update_settings(self, **changes) -> UserSettings:
        """Apply ``changes`` to the stored settings and persist them."""

        settings = replace(self.get_settings(), **changes)
        self.save_settings(settings)
        return settings

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def clear_all(self) -> UserSettings:
        """Delete all sessions and settings, then store default settings."""

        remove_item(self.storage, SESSIONS_KEY)
        remove_item(self.storage, SETTINGS_KEY)
        settings = UserSettings()
        self.save_settings(settings)
        logging.info("All workout data cleared")
        return settings

    def export_data(self, now: datetime | None = None) -> str:
        """Return a JSON document with every session and the settings.

        An empty string is returned if the snapshot could not be built.
        """

        try:
            snapshot = {
                "sessions": [s.to_dict() for s in self.list_sessions()],
                "settings": self.get_settings().to_dict(),
                "export_date": to_iso(now or utcnow()),
            }
            return json.dumps(snapshot, indent=2)
        except (TypeError, ValueError):
            logging.exception("Error exporting workout data")
            return ""

    def export_to_file(self, dest_dir: Path) -> Path:
        """Write :meth:`export_data` into ``dest_dir`` and return the path.

        ``OSError`` subclasses propagate so the caller can report them.
        """

        dest_dir = Path(dest_dir)
        dest = dest_dir / make_export_name()
        try:
            dest_dir.mkdir(parents=True, exist_ok=True)
            dest.write_text(self.export_data(), encoding="utf-8")
        except PermissionError:
            logging.exception("Permission denied writing export to %s", dest)
            raise
        except OSError:
            logging.exception("OS error exporting workout data to %s", dest)
            raise
        logging.info("Exported workout data to %s", dest)
        return dest
