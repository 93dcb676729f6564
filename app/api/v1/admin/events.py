
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.schemas.event import EventCreate, EventUpdate, EventWithVenue
from app.schemas.common import PaginatedResponse, DeleteResponse
from app.services import events as event_service

router = APIRouter(prefix="/admin/events", tags=["Admin - Events"])


@router.post("/", response_model=EventWithVenue, status_code=status.HTTP_201_CREATED)
def create_event(
    data: EventCreate,
    db: Session = Depends(get_db),
):
    """
    Schedule an event at a venue.

    Rejected with a field error on `start_datetime` when another event at the
    same venue overlaps the requested window. Events without both a start and
    an end are never checked for overlap.
    """
    event = event_service.create_event(db, data)
    return event_service.get_event(db, event.id)


@router.get("/", response_model=PaginatedResponse[EventWithVenue])
def list_events(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    events, total = event_service.list_events(db, page, limit)
    return PaginatedResponse(
        data=[EventWithVenue.model_validate(e) for e in events],
        total=total,
        page=page,
        limit=limit,
        total_pages=-(-total // limit) if total else 0,
    )


@router.get("/{id}", response_model=EventWithVenue)
def get_event(
    id: int,
    db: Session = Depends(get_db),
):
    return event_service.get_event(db, id)


@router.put("/{id}", response_model=EventWithVenue)
def update_event(
    id: int,
    data: EventUpdate,
    db: Session = Depends(get_db),
):
    event_service.update_event(db, id, data)
    return event_service.get_event(db, id)


@router.delete("/{id}", response_model=DeleteResponse, status_code=status.HTTP_200_OK)
def delete_event(
    id: int,
    db: Session = Depends(get_db),
):
    deleted = event_service.delete_event(db, id)
    return {"id": id, "deleted": deleted}
