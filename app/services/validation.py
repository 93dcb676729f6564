"""Validation rules.

Field rules are pure: they take an input object and return a list of
`FieldError`, empty when the input is valid. The two cross-record checks
(`check_venue_overlap`, `check_duplicate_booking`) only read from the session.
"""

from datetime import datetime
from typing import Any, List, Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.orm import Session

from app.core.errors import FieldError
from app.models.booking import Booking
from app.models.event import Event

NAME_MAX_LENGTH = 200
LOCATION_MAX_LENGTH = 200
EMAIL_MAX_LENGTH = 200
PHONE_MAX_LENGTH = 50
VENUE_IMAGE_URL_MAX_LENGTH = 500

VENUE_ALREADY_BOOKED = "This venue is already booked for the selected time."
END_BEFORE_START = "End time must be after start time."


def _required_text(errors: List[FieldError], field: str, value: Optional[str], max_length: int, label: str) -> None:
    if value is None or not value.strip():
        errors.append(FieldError(field, f"{label} is required."))
    elif len(value) > max_length:
        errors.append(FieldError(field, f"{label} must be at most {max_length} characters."))


def _optional_text(errors: List[FieldError], field: str, value: Optional[str], max_length: int, label: str) -> None:
    if value is not None and len(value) > max_length:
        errors.append(FieldError(field, f"{label} must be at most {max_length} characters."))


def validate_venue(data: Any) -> List[FieldError]:
    errors: List[FieldError] = []
    _required_text(errors, "name", data.name, NAME_MAX_LENGTH, "Venue name")
    _required_text(errors, "location", data.location, LOCATION_MAX_LENGTH, "Location")
    if data.capacity is None or data.capacity <= 0:
        errors.append(FieldError("capacity", "Capacity must be greater than zero."))
    _optional_text(errors, "image_url", data.image_url, VENUE_IMAGE_URL_MAX_LENGTH, "Image URL")
    return errors


def validate_event(data: Any) -> List[FieldError]:
    errors: List[FieldError] = []
    _required_text(errors, "name", data.name, NAME_MAX_LENGTH, "Event name")
    start, end = data.start_datetime, data.end_datetime
    if start is not None and end is not None and start > end:
        errors.append(FieldError("end_datetime", END_BEFORE_START))
    return errors


def validate_customer(data: Any) -> List[FieldError]:
    errors: List[FieldError] = []
    _required_text(errors, "full_name", data.full_name, NAME_MAX_LENGTH, "Full name")
    email = data.email
    if email is None or not email.strip():
        errors.append(FieldError("email", "Email is required."))
    elif len(email) > EMAIL_MAX_LENGTH:
        errors.append(FieldError("email", f"Email must be at most {EMAIL_MAX_LENGTH} characters."))
    else:
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            errors.append(FieldError("email", "Email is not a valid email address."))
    _optional_text(errors, "phone", data.phone, PHONE_MAX_LENGTH, "Phone")
    return errors


def validate_booking(data: Any) -> List[FieldError]:
    errors: List[FieldError] = []
    if data.booking_date is None:
        errors.append(FieldError("booking_date", "Booking date is required."))
    return errors


def check_venue_overlap(
    db: Session,
    venue_id: int,
    start: Optional[datetime],
    end: Optional[datetime],
    exclude_event_id: Optional[int] = None,
) -> bool:
    """
    True if another event at the venue overlaps [start, end).

    Only events with both bounds set take part. Intervals that merely touch
    (one ends exactly when the other starts) do not overlap. When either
    proposed bound is missing there is nothing to compare and the answer is False.
    """
    if start is None or end is None:
        return False

    filters = [
        Event.venue_id == venue_id,
        Event.start_datetime.isnot(None),
        Event.end_datetime.isnot(None),
        Event.start_datetime < end,
        Event.end_datetime > start,
    ]
    if exclude_event_id is not None:
        filters.append(Event.id != exclude_event_id)

    return db.query(Event.id).filter(*filters).first() is not None


def check_duplicate_booking(
    db: Session,
    event_id: int,
    customer_id: int,
    exclude_booking_id: Optional[int] = None,
) -> bool:
    """True if some other booking already links this customer to this event."""
    filters = [Booking.event_id == event_id, Booking.customer_id == customer_id]
    if exclude_booking_id is not None:
        filters.append(Booking.id != exclude_booking_id)
    return db.query(Booking.id).filter(*filters).first() is not None
