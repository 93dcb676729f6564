"""Booking service.

A booking links one customer to one event. The booking's venue is never
taken from the caller: it is copied from the event on every create and
update, so it always mirrors the event's venue at write time.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from app.core.errors import FieldError, NotFoundError, UniqueViolationError
from app.models.booking import Booking
from app.models.customer import Customer
from app.models.event import Event
from app.schemas.booking import BookingCreate, BookingUpdate
from app.services.base import check_version, commit, commit_update, delete_if_present, page_bounds, raise_if_errors
from app.services.validation import check_duplicate_booking, validate_booking
from app.utils.dates import as_naive_utc

logger = logging.getLogger(__name__)

ENTITY = "Booking"
EVENT_NOT_FOUND = "Selected event was not found."
CUSTOMER_NOT_FOUND = "Selected customer was not found."
ALREADY_BOOKED = "This customer has already booked this event."


def _resolve_references(db: Session, data) -> Event:
    """Validate the input and return the booked event."""
    errors = validate_booking(data)
    event = db.get(Event, data.event_id)
    if event is None:
        errors.append(FieldError("event_id", EVENT_NOT_FOUND))
    if db.get(Customer, data.customer_id) is None:
        errors.append(FieldError("customer_id", CUSTOMER_NOT_FOUND))
    raise_if_errors(errors, db, ENTITY)
    return event


def _load_booking(db: Session, booking_id: int) -> Optional[Booking]:
    """Load a booking with its event, venue and customer eager-loaded."""
    return (
        db.query(Booking)
        .options(
            joinedload(Booking.event),
            joinedload(Booking.venue),
            joinedload(Booking.customer),
        )
        .filter(Booking.id == booking_id)
        .first()
    )


def list_bookings(db: Session, page: int = 1, limit: Optional[int] = None) -> Tuple[List[Booking], int]:
    offset, limit = page_bounds(page, limit)
    total = db.query(Booking).count()
    bookings = (
        db.query(Booking)
        .options(
            joinedload(Booking.event),
            joinedload(Booking.venue),
            joinedload(Booking.customer),
        )
        .order_by(Booking.booking_date.desc(), Booking.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return bookings, total


def get_booking(db: Session, booking_id: int) -> Booking:
    booking = _load_booking(db, booking_id)
    if booking is None:
        raise NotFoundError(ENTITY, booking_id)
    return booking


def create_booking(db: Session, data: BookingCreate, user_id: Optional[str] = None) -> Booking:
    event = _resolve_references(db, data)

    if check_duplicate_booking(db, data.event_id, data.customer_id):
        db.rollback()
        logger.warning("Duplicate booking for event %s by customer %s", data.event_id, data.customer_id)
        raise UniqueViolationError("customer_id", ALREADY_BOOKED)

    booking = Booking(
        event_id=event.id,
        venue_id=event.venue_id,
        customer_id=data.customer_id,
        booking_date=as_naive_utc(data.booking_date),
        created_by_user_id=user_id,
    )
    db.add(booking)
    commit(db, ENTITY)
    logger.info("Booked customer %s onto event %s (booking %s)", booking.customer_id, booking.event_id, booking.id)
    return get_booking(db, booking.id)


def update_booking(db: Session, booking_id: int, data: BookingUpdate, user_id: Optional[str] = None) -> Booking:
    booking = db.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError(ENTITY, booking_id)
    check_version(data.version, booking.version, ENTITY, booking_id)

    event = _resolve_references(db, data)

    if check_duplicate_booking(db, data.event_id, data.customer_id, exclude_booking_id=booking_id):
        db.rollback()
        logger.warning("Duplicate booking for event %s by customer %s", data.event_id, data.customer_id)
        raise UniqueViolationError("customer_id", ALREADY_BOOKED)

    booking.event_id = event.id
    booking.customer_id = data.customer_id
    booking.booking_date = as_naive_utc(data.booking_date)
    booking.venue_id = event.venue_id
    booking.updated_by_user_id = user_id

    commit_update(db, Booking, ENTITY, booking_id)
    logger.info("Updated booking %s", booking_id)
    return get_booking(db, booking_id)


def delete_booking(db: Session, booking_id: int) -> bool:
    return delete_if_present(db, Booking, ENTITY, booking_id, lambda: None)
