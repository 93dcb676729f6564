
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.schemas.customer import CustomerCreate, CustomerUpdate, Customer as CustomerSchema
from app.schemas.common import PaginatedResponse, DeleteResponse
from app.services import customers as customer_service

router = APIRouter(prefix="/admin/customers", tags=["Admin - Customers"])


@router.post("/", response_model=CustomerSchema, status_code=status.HTTP_201_CREATED)
def create_customer(
    data: CustomerCreate,
    db: Session = Depends(get_db),
):
    return customer_service.create_customer(db, data)


@router.get("/", response_model=PaginatedResponse[CustomerSchema])
def list_customers(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    customers, total = customer_service.list_customers(db, page, limit)
    return PaginatedResponse(
        data=[CustomerSchema.model_validate(c) for c in customers],
        total=total,
        page=page,
        limit=limit,
        total_pages=-(-total // limit) if total else 0,
    )


@router.get("/{id}", response_model=CustomerSchema)
def get_customer(
    id: int,
    db: Session = Depends(get_db),
):
    return customer_service.get_customer(db, id)


@router.put("/{id}", response_model=CustomerSchema)
def update_customer(
    id: int,
    data: CustomerUpdate,
    db: Session = Depends(get_db),
):
    return customer_service.update_customer(db, id, data)


@router.delete("/{id}", response_model=DeleteResponse, status_code=status.HTTP_200_OK)
def delete_customer(
    id: int,
    db: Session = Depends(get_db),
):
    deleted = customer_service.delete_customer(db, id)
    return {"id": id, "deleted": deleted}
