import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.booking import Booking
from app.models.event import Event
from app.models.venue import Venue
from app.schemas.venue import VenueCreate, VenueUpdate
from app.services.base import check_version, commit, commit_update, delete_if_present, page_bounds, raise_if_errors
from app.services.validation import validate_venue

logger = logging.getLogger(__name__)

ENTITY = "Venue"


def list_venues(db: Session, page: int = 1, limit: Optional[int] = None) -> Tuple[List[Venue], int]:
    offset, limit = page_bounds(page, limit)
    total = db.query(Venue).count()
    venues = db.query(Venue).order_by(Venue.name, Venue.id).offset(offset).limit(limit).all()
    return venues, total


def get_venue(db: Session, venue_id: int) -> Venue:
    venue = db.get(Venue, venue_id)
    if venue is None:
        raise NotFoundError(ENTITY, venue_id)
    return venue


def create_venue(db: Session, data: VenueCreate) -> Venue:
    raise_if_errors(validate_venue(data), db, ENTITY)

    venue = Venue(
        name=data.name,
        location=data.location,
        capacity=data.capacity,
        image_url=data.image_url,
        is_active=data.is_active,
    )
    db.add(venue)
    commit(db, ENTITY)
    db.refresh(venue)
    logger.info("Created venue %s (%s)", venue.id, venue.name)
    return venue


def update_venue(db: Session, venue_id: int, data: VenueUpdate) -> Venue:
    venue = get_venue(db, venue_id)
    check_version(data.version, venue.version, ENTITY, venue_id)
    raise_if_errors(validate_venue(data), db, ENTITY)

    venue.name = data.name
    venue.location = data.location
    venue.capacity = data.capacity
    venue.image_url = data.image_url
    venue.is_active = data.is_active

    commit_update(db, Venue, ENTITY, venue_id)
    db.refresh(venue)
    logger.info("Updated venue %s", venue_id)
    return venue


def delete_venue(db: Session, venue_id: int) -> bool:
    def blockers() -> Optional[str]:
        if db.query(Event.id).filter(Event.venue_id == venue_id).first() is not None:
            return "events"
        if db.query(Booking.id).filter(Booking.venue_id == venue_id).first() is not None:
            return "bookings"
        return None

    return delete_if_present(db, Venue, ENTITY, venue_id, blockers)
