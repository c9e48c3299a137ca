# Set test environment before any application or db imports.
import os

os.environ["TESTING"] = "true"
os.environ["TESTING_DATABASE_URL"] = "sqlite:///:memory:"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from api.deps import get_capture_flow, get_preference_store
from capture_core import runtime
from capture_core.capture import CaptureFlow
from capture_core.preferences import PreferenceStore
from capture_core.providers import PermissionStatus, SimulatedLocationProvider
from capture_core.storage import LocationStore
from db import SessionLocal, create_db_engine, make_session_factory
from main import app
from models import Base
from models.location import LocationRow  # noqa: F401 - register with Base
from models.preference import Preference  # noqa: F401


def _get_engine():
    """Engine used by the app (in-memory when TESTING=true)."""
    return SessionLocal.kw["bind"]


@pytest.fixture(scope="session")
def engine():
    """One in-memory engine per test run; create tables once."""
    eng = _get_engine()
    Base.metadata.create_all(eng)
    return eng


@pytest.fixture
def db_session(engine):
    """Function-scoped session; each test runs in a transaction that is rolled back."""
    connection = engine.connect()
    trans = connection.begin()
    session = Session(bind=connection)
    session.begin_nested()
    try:
        yield session
    finally:
        session.close()
        if trans.is_active:
            trans.rollback()
        connection.close()


@pytest.fixture
def session_factory():
    """Fresh in-memory database per test for stores that open and close their own sessions."""
    eng = create_db_engine("sqlite:///:memory:")
    Base.metadata.create_all(eng)
    try:
        yield make_session_factory(eng)
    finally:
        eng.dispose()


@pytest.fixture
def location_store(session_factory):
    return LocationStore(session_factory)


@pytest.fixture
def preference_store(session_factory):
    return PreferenceStore(session_factory)


@pytest.fixture
def provider():
    """Simulated provider at São Paulo with permission granted."""
    return SimulatedLocationProvider(latitude=-23.55, longitude=-46.63, permission=PermissionStatus.Granted)


@pytest.fixture
def flow(provider, location_store):
    return CaptureFlow(provider=provider, store=location_store, timeout_s=1.0)


@pytest.fixture
def client(engine, flow, preference_store):
    """API test client; routes use the test flow and preference store, cleared on teardown."""
    app.dependency_overrides[get_capture_flow] = lambda: flow
    app.dependency_overrides[get_preference_store] = lambda: preference_store
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
        runtime.clear()
