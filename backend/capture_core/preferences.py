"""Dark-mode preference: read once at startup, overwritten on every toggle."""
import json
import logging
import threading
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from capture_core.errors import PreferenceIOError
from repositories.preference_repository import get_preference, set_preference
from utils.config import DARK_MODE_KEY

LOG = logging.getLogger(__name__)


class PreferenceStore:
    """
    Boolean flag persisted as JSON under a fixed key.

    Failures never propagate: load() falls back to light mode and save() keeps the
    in-memory value even when the write is lost.
    """

    def __init__(
        self,
        session_factory: Optional[Callable[[], Session]] = None,
        key: str = DARK_MODE_KEY,
        default: bool = False,
    ) -> None:
        if session_factory is None:
            from db import SessionLocal
            session_factory = SessionLocal
        self._session_factory = session_factory
        self.key = key
        self.default = default
        self.dark_mode = default
        # False while the in-memory flag differs from what storage is known to hold.
        self.persisted = True
        # Routes run in a threadpool; memory update and write happen under one lock.
        self._lock = threading.RLock()

    def _read(self) -> Optional[str]:
        db = self._session_factory()
        try:
            return get_preference(db, self.key)
        except SQLAlchemyError as e:
            raise PreferenceIOError(f"read {self.key!r} failed: {e}") from e
        finally:
            db.close()

    def _write(self, raw: str) -> None:
        db = self._session_factory()
        try:
            set_preference(db, self.key, raw)
        except SQLAlchemyError as e:
            db.rollback()
            raise PreferenceIOError(f"write {self.key!r} failed: {e}") from e
        finally:
            db.close()

    def load(self) -> bool:
        """Return the persisted flag, or the default if it is absent or unreadable."""
        with self._lock:
            try:
                raw = self._read()
            except PreferenceIOError as e:
                LOG.error("Failed to load dark mode: %s", e)
                raw = None
            else:
                # Memory is about to hold exactly what storage holds.
                self.persisted = True
            value = self.default
            if raw is not None:
                try:
                    parsed = json.loads(raw)
                except json.JSONDecodeError:
                    LOG.warning("Ignoring unparsable %s value: %r", self.key, raw)
                else:
                    if isinstance(parsed, bool):
                        value = parsed
                    else:
                        LOG.warning("Ignoring non-boolean %s value: %r", self.key, raw)
            self.dark_mode = value
            return value

    def save(self, value: bool) -> bool:
        """Set the flag in memory, then persist it. Returns True if the write succeeded."""
        with self._lock:
            self.dark_mode = bool(value)
            try:
                self._write(json.dumps(self.dark_mode))
            except PreferenceIOError as e:
                LOG.error("Failed to save dark mode: %s", e)
                self.persisted = False
                return False
            self.persisted = True
            return True

    def toggle(self) -> bool:
        """Flip the flag and save it. Returns the new value."""
        with self._lock:
            self.save(not self.dark_mode)
            return self.dark_mode
