
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.schemas.venue import VenueCreate, VenueUpdate, Venue as VenueSchema
from app.schemas.common import PaginatedResponse, DeleteResponse
from app.services import venues as venue_service

router = APIRouter(prefix="/admin/venues", tags=["Admin - Venues"])


# ---------------------------------------------------------------------------
# Venue CRUD
# ---------------------------------------------------------------------------


@router.post("/", response_model=VenueSchema, status_code=status.HTTP_201_CREATED)
def create_venue(
    data: VenueCreate,
    db: Session = Depends(get_db),
):
    return venue_service.create_venue(db, data)


@router.get("/", response_model=PaginatedResponse[VenueSchema])
def list_venues(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    venues, total = venue_service.list_venues(db, page, limit)
    return PaginatedResponse(
        data=[VenueSchema.model_validate(v) for v in venues],
        total=total,
        page=page,
        limit=limit,
        total_pages=-(-total // limit) if total else 0,
    )


@router.get("/{id}", response_model=VenueSchema)
def get_venue(
    id: int,
    db: Session = Depends(get_db),
):
    return venue_service.get_venue(db, id)


@router.put("/{id}", response_model=VenueSchema)
def update_venue(
    id: int,
    data: VenueUpdate,
    db: Session = Depends(get_db),
):
    return venue_service.update_venue(db, id, data)


@router.delete("/{id}", response_model=DeleteResponse, status_code=status.HTTP_200_OK)
def delete_venue(
    id: int,
    db: Session = Depends(get_db),
):
    deleted = venue_service.delete_venue(db, id)
    return {"id": id, "deleted": deleted}
