"""Preference repository: get and set raw string values by key."""
from typing import Optional

from sqlalchemy.orm import Session

from models.preference import Preference


def get_preference(session: Session, key: str) -> Optional[str]:
    """Return the stored value for key, or None if absent."""
    row = session.get(Preference, key)
    return row.value if row is not None else None


def set_preference(session: Session, key: str, value: str) -> Preference:
    """Insert or overwrite the value for key, commit, and return the row."""
    row = session.get(Preference, key)
    if row is None:
        row = Preference(key=key, value=value)
        session.add(row)
    else:
        row.value = value
    session.commit()
    session.refresh(row)
    return row
