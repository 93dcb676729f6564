"""Shared fixtures: an in-memory SQLite store, sessions, and sample records."""

import os

# Settings are read at import time; point them at SQLite before the app loads.
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.session import enable_sqlite_foreign_keys, get_db
from app.main import app
from app.schemas.customer import CustomerCreate
from app.schemas.event import EventCreate
from app.schemas.venue import VenueCreate
from app.services import customers as customer_service
from app.services import events as event_service
from app.services import venues as venue_service


def at(hour: int, minute: int = 0, day: int = 1) -> datetime:
    """A naive UTC timestamp on a fixed day in May 2026."""
    return datetime(2026, 5, day, hour, minute)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Sample records
# ---------------------------------------------------------------------------


@pytest.fixture
def venue(db):
    return venue_service.create_venue(
        db, VenueCreate(name="Main Hall", location="Campus A", capacity=300)
    )


@pytest.fixture
def other_venue(db):
    return venue_service.create_venue(
        db, VenueCreate(name="Auditorium", location="Campus B", capacity=500)
    )


@pytest.fixture
def event(db, venue):
    """Tech Talk at Main Hall, 10:00-12:00."""
    return event_service.create_event(
        db,
        EventCreate(name="Tech Talk", venue_id=venue.id, start_datetime=at(10), end_datetime=at(12)),
    )


@pytest.fixture
def customer(db):
    return customer_service.create_customer(
        db, CustomerCreate(full_name="Alex Smith", email="alex@example.com")
    )


@pytest.fixture
def other_customer(db):
    return customer_service.create_customer(
        db, CustomerCreate(full_name="Sam Lee", email="sam@example.com", phone="555-0100")
    )
