"""Durable location storage on top of the location repository."""
import logging
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from capture_core.errors import StorageError
from capture_core.record import LocationRecord, Position
from repositories.location_repository import insert_location, list_locations

LOG = logging.getLogger(__name__)


class LocationStore:
    """
    Insert-only store of location records. Each call opens and closes its own session,
    so it is safe to run from a worker thread via asyncio.to_thread.
    """

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None) -> None:
        if session_factory is None:
            from db import SessionLocal
            session_factory = SessionLocal
        self._session_factory = session_factory

    def insert(self, position: Position) -> LocationRecord:
        """Persist position and return the stored record (id assigned by the database)."""
        db = self._session_factory()
        try:
            row = insert_location(
                db,
                latitude=position.latitude,
                longitude=position.longitude,
                accuracy=position.accuracy,
                altitude=position.altitude,
            )
            return LocationRecord.from_row(row)
        except SQLAlchemyError as e:
            db.rollback()
            LOG.exception("insert location failed: %s", e)
            raise StorageError(f"Could not store location: {e}") from e
        finally:
            db.close()

    def select_all(self) -> list[LocationRecord]:
        """All stored records, oldest first."""
        db = self._session_factory()
        try:
            return [LocationRecord.from_row(row) for row in list_locations(db)]
        except SQLAlchemyError as e:
            LOG.exception("list locations failed: %s", e)
            raise StorageError(f"Could not read locations: {e}") from e
        finally:
            db.close()
