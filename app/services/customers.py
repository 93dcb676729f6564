import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, UniqueViolationError
from app.models.booking import Booking
from app.models.customer import Customer
from app.schemas.customer import CustomerCreate, CustomerUpdate
from app.services.base import check_version, commit, commit_update, delete_if_present, page_bounds, raise_if_errors
from app.services.validation import validate_customer

logger = logging.getLogger(__name__)

ENTITY = "Customer"
EMAIL_TAKEN = "A customer with this email already exists."


def _email_taken(db: Session, email: str, exclude_customer_id: Optional[int] = None) -> bool:
    query = db.query(Customer.id).filter(func.lower(Customer.email) == email.lower())
    if exclude_customer_id is not None:
        query = query.filter(Customer.id != exclude_customer_id)
    return query.first() is not None


def list_customers(db: Session, page: int = 1, limit: Optional[int] = None) -> Tuple[List[Customer], int]:
    offset, limit = page_bounds(page, limit)
    total = db.query(Customer).count()
    customers = db.query(Customer).order_by(Customer.full_name, Customer.id).offset(offset).limit(limit).all()
    return customers, total


def get_customer(db: Session, customer_id: int) -> Customer:
    customer = db.get(Customer, customer_id)
    if customer is None:
        raise NotFoundError(ENTITY, customer_id)
    return customer


def create_customer(db: Session, data: CustomerCreate) -> Customer:
    raise_if_errors(validate_customer(data), db, ENTITY)
    if _email_taken(db, data.email):
        db.rollback()
        logger.warning("Customer rejected: email already registered")
        raise UniqueViolationError("email", EMAIL_TAKEN)

    customer = Customer(full_name=data.full_name, email=data.email, phone=data.phone)
    db.add(customer)
    commit(db, ENTITY)
    db.refresh(customer)
    logger.info("Registered customer %s", customer.id)
    return customer


def update_customer(db: Session, customer_id: int, data: CustomerUpdate) -> Customer:
    customer = get_customer(db, customer_id)
    check_version(data.version, customer.version, ENTITY, customer_id)
    raise_if_errors(validate_customer(data), db, ENTITY)
    if _email_taken(db, data.email, exclude_customer_id=customer_id):
        db.rollback()
        logger.warning("Customer rejected: email already registered")
        raise UniqueViolationError("email", EMAIL_TAKEN)

    customer.full_name = data.full_name
    customer.email = data.email
    customer.phone = data.phone

    commit_update(db, Customer, ENTITY, customer_id)
    db.refresh(customer)
    logger.info("Updated customer %s", customer_id)
    return customer


def delete_customer(db: Session, customer_id: int) -> bool:
    def blockers() -> Optional[str]:
        if db.query(Booking.id).filter(Booking.customer_id == customer_id).first() is not None:
            return "bookings"
        return None

    return delete_if_present(db, Customer, ENTITY, customer_id, blockers)
