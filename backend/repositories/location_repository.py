"""Location repository: insert and list. Records are never updated or deleted."""
from sqlalchemy import select
from sqlalchemy.orm import Session

from models.location import LocationRow


def list_locations(session: Session) -> list[LocationRow]:
    """Return all locations in insertion order."""
    result = session.execute(select(LocationRow).order_by(LocationRow.id))
    return list(result.scalars().all())


def insert_location(
    session: Session,
    latitude: float,
    longitude: float,
    accuracy: float | None = None,
    altitude: float | None = None,
) -> LocationRow:
    """Insert a location, commit, and return it with its store-assigned id."""
    row = LocationRow(latitude=latitude, longitude=longitude, accuracy=accuracy, altitude=altitude)
    session.add(row)
    session.commit()
    session.refresh(row)
    return row

