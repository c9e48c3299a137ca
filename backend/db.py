"""Database engine and session for SQLite (device/dev) or any SQLAlchemy URL."""
import os

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from utils.config import DATABASE_URL

# Runtime safety: when TESTING=true, never use the real location database.
if os.environ.get("TESTING") == "true":
    url = DATABASE_URL
    if "locations.db" in url or (":memory:" not in url and "test" not in url.lower().split("?")[0]):
        raise RuntimeError(
            "Tests must not run against the real database. Set TESTING_DATABASE_URL to sqlite:///:memory: "
            "(or another test URL containing :memory: or 'test')."
        )


def create_db_engine(url: str) -> Engine:
    """Build an engine for url. In-memory SQLite shares one connection so all sessions see the same DB."""
    connect_args = {"check_same_thread": False} if "sqlite" in url else {}
    engine_kw = {"connect_args": connect_args, "echo": False}
    if "sqlite" in url and (":memory:" in url or url.rstrip("/").endswith("sqlite:")):
        engine_kw["poolclass"] = StaticPool

    return create_engine(url, **engine_kw)


def make_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to engine (stores open and close their own sessions)."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


_engine = create_db_engine(DATABASE_URL)

SessionLocal = make_session_factory(_engine)
