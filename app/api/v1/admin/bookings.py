from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.api.deps import get_current_user_id
from app.schemas.booking import BookingCreate, BookingUpdate, BookingDetail
from app.schemas.common import PaginatedResponse, DeleteResponse
from app.services import bookings as booking_service

router = APIRouter(prefix="/admin/bookings", tags=["Admin - Bookings"])


@router.post("/", response_model=BookingDetail, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
    current_user_id: Optional[str] = Depends(get_current_user_id),
):
    """
    Book a customer onto an event.

    The booking's venue is copied from the event. A customer can book a
    given event only once; a second attempt returns 409.
    """
    return booking_service.create_booking(db, data, user_id=current_user_id)


@router.get("/", response_model=PaginatedResponse[BookingDetail])
def list_bookings(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    """Return all bookings, newest booking date first, with event, venue and customer."""
    bookings, total = booking_service.list_bookings(db, page, limit)
    return PaginatedResponse(
        data=[BookingDetail.model_validate(b) for b in bookings],
        total=total,
        page=page,
        limit=limit,
        total_pages=-(-total // limit) if total else 0,
    )


@router.get("/{id}", response_model=BookingDetail)
def get_booking(
    id: int,
    db: Session = Depends(get_db),
):
    return booking_service.get_booking(db, id)


@router.put("/{id}", response_model=BookingDetail)
def update_booking(
    id: int,
    data: BookingUpdate,
    db: Session = Depends(get_db),
    current_user_id: Optional[str] = Depends(get_current_user_id),
):
    return booking_service.update_booking(db, id, data, user_id=current_user_id)


@router.delete("/{id}", response_model=DeleteResponse, status_code=status.HTTP_200_OK)
def delete_booking(
    id: int,
    db: Session = Depends(get_db),
):
    deleted = booking_service.delete_booking(db, id)
    return {"id": id, "deleted": deleted}
