"""Lost races between two sessions.

Each test lets a second session commit a conflicting change right before the
service session flushes, then checks how the service reports it.
"""

from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy import event as sa_event
from sqlalchemy.orm import sessionmaker

from app.core.errors import ConcurrencyConflictError, NotFoundError
from app.db.base import Base
from app.db.session import enable_sqlite_foreign_keys
from app.models.booking import Booking
from app.models.event import Event
from app.models.venue import Venue
from app.schemas.booking import BookingCreate, BookingUpdate
from app.schemas.customer import CustomerCreate
from app.schemas.event import EventCreate
from app.schemas.venue import VenueCreate, VenueUpdate
from app.services import bookings as booking_service
from app.services import customers as customer_service
from app.services import events as event_service
from app.services import venues as venue_service


def at(hour, minute=0, day=1):
    return datetime(2026, 5, day, hour, minute)


@pytest.fixture
def factory(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'eventease.db'}")
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def seeded(factory):
    with factory() as db:
        venue = venue_service.create_venue(db, VenueCreate(name="Main Hall", location="Campus A", capacity=300))
        event = event_service.create_event(
            db, EventCreate(name="Tech Talk", venue_id=venue.id, start_datetime=at(10), end_datetime=at(12))
        )
        customer = customer_service.create_customer(
            db, CustomerCreate(full_name="Alex Smith", email="alex@example.com")
        )
        booking = booking_service.create_booking(
            db, BookingCreate(event_id=event.id, customer_id=customer.id, booking_date=at(9))
        )
        return {"venue": venue.id, "event": event.id, "customer": customer.id, "booking": booking.id}


def _before_next_flush(session, action):
    @sa_event.listens_for(session, "before_flush", once=True)
    def _interleave(session, flush_context, instances):
        action()


def test_update_of_row_deleted_meanwhile_is_not_found(factory, seeded):
    def delete_elsewhere():
        with factory() as other:
            other.query(Booking).filter(Booking.id == seeded["booking"]).delete()
            other.commit()

    with factory() as db:
        _before_next_flush(db, delete_elsewhere)
        with pytest.raises(NotFoundError):
            booking_service.update_booking(
                db,
                seeded["booking"],
                BookingUpdate(event_id=seeded["event"], customer_id=seeded["customer"], booking_date=at(11)),
            )


def test_update_of_row_changed_meanwhile_conflicts(factory, seeded):
    def bump_elsewhere():
        with factory() as other:
            other.query(Booking).filter(Booking.id == seeded["booking"]).update(
                {Booking.version: Booking.version + 1}, synchronize_session=False
            )
            other.commit()

    with factory() as db:
        _before_next_flush(db, bump_elsewhere)
        with pytest.raises(ConcurrencyConflictError):
            booking_service.update_booking(
                db,
                seeded["booking"],
                BookingUpdate(event_id=seeded["event"], customer_id=seeded["customer"], booking_date=at(11)),
            )

    with factory() as db:
        assert db.get(Booking, seeded["booking"]).booking_date == at(9)


def test_delete_of_row_deleted_meanwhile_is_a_no_op(factory, seeded):
    def delete_elsewhere():
        with factory() as other:
            other.query(Booking).filter(Booking.id == seeded["booking"]).delete()
            other.commit()

    with factory() as db:
        _before_next_flush(db, delete_elsewhere)
        assert booking_service.delete_booking(db, seeded["booking"]) is False


def test_referenced_event_removed_before_insert_conflicts(factory, seeded):
    with factory() as db:
        spare = event_service.create_event(db, EventCreate(name="Spare", venue_id=seeded["venue"]))
        spare_id = spare.id

    def delete_event_elsewhere():
        with factory() as other:
            other.query(Event).filter(Event.id == spare_id).delete()
            other.commit()

    with factory() as db:
        _before_next_flush(db, delete_event_elsewhere)
        with pytest.raises(ConcurrencyConflictError):
            booking_service.create_booking(
                db, BookingCreate(event_id=spare_id, customer_id=seeded["customer"], booking_date=at(9))
            )

    with factory() as db:
        assert db.query(Booking).count() == 1


def test_venue_update_race_reports_conflict(factory, seeded):
    def rename_elsewhere():
        with factory() as other:
            venue = other.get(Venue, seeded["venue"])
            venue.name = "Renamed Hall"
            other.commit()

    with factory() as db:
        _before_next_flush(db, rename_elsewhere)
        with pytest.raises(ConcurrencyConflictError):
            venue_service.update_venue(
                db,
                seeded["venue"],
                VenueUpdate(name="Main Hall", location="Campus A", capacity=350),
            )
