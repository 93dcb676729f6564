"""Tests for the booking service."""

from datetime import datetime

import pytest

from app.core.errors import ConcurrencyConflictError, NotFoundError, UniqueViolationError, ValidationError
from app.models.booking import Booking
from app.schemas.booking import BookingCreate, BookingUpdate
from app.schemas.event import EventCreate, EventUpdate
from app.services import bookings as booking_service
from app.services import events as event_service


def at(hour, minute=0, day=1):
    return datetime(2026, 5, day, hour, minute)


@pytest.fixture
def booking(db, event, customer):
    return booking_service.create_booking(
        db,
        BookingCreate(event_id=event.id, customer_id=customer.id, booking_date=at(9)),
        user_id="staff-1",
    )


@pytest.fixture
def other_event(db, other_venue):
    return event_service.create_event(
        db, EventCreate(name="Concert", venue_id=other_venue.id, start_datetime=at(19), end_datetime=at(22))
    )


class TestCreateBooking:
    def test_copies_venue_from_event(self, booking, event):
        assert booking.venue_id == event.venue_id
        assert booking.venue.name == "Main Hall"
        assert booking.event.name == "Tech Talk"
        assert booking.customer.full_name == "Alex Smith"

    def test_records_creator_and_timestamps(self, booking):
        assert booking.created_by_user_id == "staff-1"
        assert booking.updated_by_user_id is None
        assert booking.created_at is not None
        assert booking.updated_at is None

    def test_unknown_event_is_a_field_error(self, db, customer):
        with pytest.raises(ValidationError) as exc_info:
            booking_service.create_booking(db, BookingCreate(event_id=999, customer_id=customer.id, booking_date=at(9)))
        assert exc_info.value.fields() == ["event_id"]
        assert exc_info.value.errors[0].message == "Selected event was not found."

    def test_unknown_customer_is_a_field_error(self, db, event):
        with pytest.raises(ValidationError) as exc_info:
            booking_service.create_booking(db, BookingCreate(event_id=event.id, customer_id=999, booking_date=at(9)))
        assert exc_info.value.fields() == ["customer_id"]

    def test_second_booking_for_same_pair_is_a_uniqueness_conflict(self, db, booking, event, customer):
        with pytest.raises(UniqueViolationError) as exc_info:
            booking_service.create_booking(
                db, BookingCreate(event_id=event.id, customer_id=customer.id, booking_date=at(10))
            )
        assert exc_info.value.fields() == ["customer_id"]
        assert db.query(Booking).count() == 1

    def test_same_customer_may_book_other_events(self, db, booking, customer, other_event):
        second = booking_service.create_booking(
            db, BookingCreate(event_id=other_event.id, customer_id=customer.id, booking_date=at(9))
        )
        assert second.venue_id == other_event.venue_id


class TestUpdateBooking:
    def test_changing_event_recopies_venue(self, db, booking, other_event):
        updated = booking_service.update_booking(
            db,
            booking.id,
            BookingUpdate(event_id=other_event.id, customer_id=booking.customer_id, booking_date=at(11)),
            user_id="staff-2",
        )
        assert updated.event_id == other_event.id
        assert updated.venue_id == other_event.venue_id
        assert updated.booking_date == at(11)
        assert updated.created_by_user_id == "staff-1"
        assert updated.updated_by_user_id == "staff-2"
        assert updated.updated_at is not None

    def test_venue_follows_event_that_moved(self, db, booking, event, other_venue):
        event_service.update_event(
            db,
            event.id,
            EventUpdate(name=event.name, venue_id=other_venue.id, start_datetime=at(10), end_datetime=at(12)),
        )
        updated = booking_service.update_booking(
            db, booking.id, BookingUpdate(event_id=event.id, customer_id=booking.customer_id, booking_date=at(9, 30))
        )
        assert updated.venue_id == other_venue.id

    def test_missing_booking_raises_not_found(self, db, event, customer):
        with pytest.raises(NotFoundError):
            booking_service.update_booking(
                db, 999, BookingUpdate(event_id=event.id, customer_id=customer.id, booking_date=at(9))
            )

    def test_unknown_event_is_a_field_error(self, db, booking):
        with pytest.raises(ValidationError) as exc_info:
            booking_service.update_booking(
                db, booking.id, BookingUpdate(event_id=999, customer_id=booking.customer_id, booking_date=at(9))
            )
        assert exc_info.value.fields() == ["event_id"]

    def test_moving_onto_an_existing_pair_conflicts(self, db, booking, event, other_customer):
        theirs = booking_service.create_booking(
            db, BookingCreate(event_id=event.id, customer_id=other_customer.id, booking_date=at(9))
        )
        with pytest.raises(UniqueViolationError):
            booking_service.update_booking(
                db, theirs.id, BookingUpdate(event_id=event.id, customer_id=booking.customer_id, booking_date=at(9))
            )

    def test_stale_version_is_a_conflict(self, db, booking):
        with pytest.raises(ConcurrencyConflictError):
            booking_service.update_booking(
                db,
                booking.id,
                BookingUpdate(
                    event_id=booking.event_id,
                    customer_id=booking.customer_id,
                    booking_date=at(12),
                    version=booking.version + 1,
                ),
            )


class TestDeleteBooking:
    def test_delete_existing_booking(self, db, booking):
        assert booking_service.delete_booking(db, booking.id) is True
        assert db.query(Booking).count() == 0

    def test_delete_missing_booking_is_a_no_op(self, db):
        assert booking_service.delete_booking(db, 4242) is False


def test_list_bookings_newest_date_first(db, booking, event, other_customer):
    later = booking_service.create_booking(
        db, BookingCreate(event_id=event.id, customer_id=other_customer.id, booking_date=at(9, day=2))
    )
    bookings, total = booking_service.list_bookings(db)
    assert total == 2
    assert [b.id for b in bookings] == [later.id, booking.id]
