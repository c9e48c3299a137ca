"""Integration tests: location repository with test DB session."""
import pytest

from repositories.location_repository import insert_location, list_locations

pytestmark = pytest.mark.integration


def test_insert_assigns_increasing_ids(db_session):
    """Store-assigned ids are non-null and increase with insertion order."""
    first = insert_location(db_session, -23.55, -46.63)
    second = insert_location(db_session, 40.71, -74.0, accuracy=12.5, altitude=11.0)
    assert first.id is not None
    assert second.id > first.id
    assert (second.accuracy, second.altitude) == (12.5, 11.0)
    assert first.captured_at is not None


def test_list_locations_in_insertion_order(db_session):
    """list_locations returns rows oldest first."""
    before = len(list_locations(db_session))
    insert_location(db_session, 3.0, 3.0)
    insert_location(db_session, 1.0, 1.0)
    insert_location(db_session, 2.0, 2.0)
    rows = list_locations(db_session)
    assert len(rows) == before + 3
    assert [r.latitude for r in rows[-3:]] == [3.0, 1.0, 2.0]
