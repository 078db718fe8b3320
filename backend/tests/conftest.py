"""
Shared pytest fixtures: in-memory SQLite per test, seeded catalog rows and a
FastAPI TestClient bound to the same database.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["AUTO_REORDER_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from partsledger.database import Base, build_engine, create_tables, get_db
from partsledger.models import Vendor, Part
from partsledger.utils.events import DomainEvent, get_event_bus
from tests.factories import make_vendor, make_part


@pytest.fixture()
def engine():
    engine = build_engine("sqlite://")
    create_tables(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def events():
    """Every domain event published during the test, in order."""
    bus = get_event_bus()
    bus.clear()
    received = []
    bus.subscribe(DomainEvent, received.append)
    yield received
    bus.clear()


@pytest.fixture()
def client(db):
    # requests share the test session: StaticPool hands every session the
    # same sqlite connection, which cannot hold two transactions at once
    from partsledger.main import app

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def vendor(db) -> Vendor:
    return make_vendor(db)


@pytest.fixture()
def part(db, vendor) -> Part:
    return make_part(db, vendor=vendor)
