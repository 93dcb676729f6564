import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from app.core.errors import FieldError, NotFoundError, ValidationError
from app.models.booking import Booking
from app.models.event import Event
from app.models.venue import Venue
from app.schemas.event import EventCreate, EventUpdate
from app.services.base import check_version, commit, commit_update, delete_if_present, page_bounds, raise_if_errors
from app.services.validation import VENUE_ALREADY_BOOKED, check_venue_overlap, validate_event
from app.utils.dates import as_naive_utc

logger = logging.getLogger(__name__)

ENTITY = "Event"
VENUE_NOT_FOUND = "Selected venue was not found."


def _normalized(data):
    return data.model_copy(
        update={
            "start_datetime": as_naive_utc(data.start_datetime),
            "end_datetime": as_naive_utc(data.end_datetime),
        }
    )


def _validate(db: Session, data, exclude_event_id: Optional[int] = None) -> None:
    """Field rules, venue lookup, then the overlap check once everything else passes."""
    errors = validate_event(data)
    if db.get(Venue, data.venue_id) is None:
        errors.append(FieldError("venue_id", VENUE_NOT_FOUND))
    raise_if_errors(errors, db, ENTITY)

    if check_venue_overlap(db, data.venue_id, data.start_datetime, data.end_datetime, exclude_event_id):
        db.rollback()
        logger.warning("Event at venue %s rejected: overlapping booking", data.venue_id)
        raise ValidationError([FieldError("start_datetime", VENUE_ALREADY_BOOKED)])


def list_events(db: Session, page: int = 1, limit: Optional[int] = None) -> Tuple[List[Event], int]:
    offset, limit = page_bounds(page, limit)
    total = db.query(Event).count()
    events = (
        db.query(Event)
        .options(joinedload(Event.venue))
        .order_by(Event.start_datetime, Event.id)
        .offset(offset)
        .limit(limit)
        .all()
    )
    return events, total


def get_event(db: Session, event_id: int) -> Event:
    event = (
        db.query(Event)
        .options(joinedload(Event.venue))
        .filter(Event.id == event_id)
        .first()
    )
    if event is None:
        raise NotFoundError(ENTITY, event_id)
    return event


def create_event(db: Session, data: EventCreate) -> Event:
    data = _normalized(data)
    _validate(db, data)

    event = Event(
        name=data.name,
        description=data.description,
        start_datetime=data.start_datetime,
        end_datetime=data.end_datetime,
        venue_id=data.venue_id,
        image_url=data.image_url,
        is_active=data.is_active,
    )
    db.add(event)
    commit(db, ENTITY)
    db.refresh(event)
    logger.info("Scheduled event %s at venue %s", event.id, event.venue_id)
    return event


def update_event(db: Session, event_id: int, data: EventUpdate) -> Event:
    event = db.get(Event, event_id)
    if event is None:
        raise NotFoundError(ENTITY, event_id)
    check_version(data.version, event.version, ENTITY, event_id)

    data = _normalized(data)
    _validate(db, data, exclude_event_id=event_id)

    event.name = data.name
    event.description = data.description
    event.start_datetime = data.start_datetime
    event.end_datetime = data.end_datetime
    event.venue_id = data.venue_id
    event.is_active = data.is_active
    event.image_url = data.image_url

    commit_update(db, Event, ENTITY, event_id)
    db.refresh(event)
    logger.info("Updated event %s", event_id)
    return event


def delete_event(db: Session, event_id: int) -> bool:
    def blockers() -> Optional[str]:
        if db.query(Booking.id).filter(Booking.event_id == event_id).first() is not None:
            return "bookings"
        return None

    return delete_if_present(db, Event, ENTITY, event_id, blockers)
