"""Shared write path for all services.

Every mutation ends in `commit()`: it stamps audit fields on pending objects,
commits, and translates the store errors we know about into service errors.
Anything else propagates unchanged.
"""

import logging
from typing import Callable, Optional, Type

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.core.config import settings
from app.core.errors import (
    ConcurrencyConflictError,
    FieldError,
    NotFoundError,
    ReferentialIntegrityError,
    UniqueViolationError,
    ValidationError,
)
from app.services.audit import stamp_session

logger = logging.getLogger(__name__)


# constraint name -> (field, message, markers as they appear in SQLite messages)
_UNIQUE_CONSTRAINTS = {
    "uq_booking_event_customer": (
        "customer_id",
        "This customer has already booked this event.",
        ("bookings.event_id, bookings.customer_id",),
    ),
    "ix_customers_email": (
        "email",
        "A customer with this email already exists.",
        ("index 'ix_customers_email'",),
    ),
}

_CHECK_CONSTRAINTS = {
    "ck_venue_capacity_positive": ("capacity", "Capacity must be greater than zero."),
    "ck_event_time_order": ("end_datetime", "End time must be after start time."),
}

_FOREIGN_KEY_MARKERS = ("foreign key constraint",)
_FOREIGN_KEY_VIOLATION = "23503"


def _extract_constraint_name(exc: IntegrityError) -> Optional[str]:
    # psycopg2 exposes the violated constraint on the diagnostics object
    diag = getattr(exc.orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None)
    if isinstance(constraint_name, str) and constraint_name:
        return constraint_name
    return None


def translate_integrity_error(exc: IntegrityError, entity: str, entity_id: Optional[int] = None, deleting: bool = False) -> Exception:
    """Map a known constraint violation to a service error, or return the original."""
    constraint_name = _extract_constraint_name(exc)
    text = str(exc.orig)
    lowered = text.lower()

    for name, (field, message, markers) in _UNIQUE_CONSTRAINTS.items():
        if constraint_name is not None:
            matched = constraint_name == name
        else:
            # no diagnostics (SQLite): fall back to the message text
            matched = any(m in text for m in markers)
        if matched:
            return UniqueViolationError(field, message)

    for name, (field, message) in _CHECK_CONSTRAINTS.items():
        if constraint_name is not None:
            matched = constraint_name == name
        else:
            matched = f"CHECK constraint failed: {name}" in text
        if matched:
            return ValidationError([FieldError(field, message)])

    pgcode = getattr(exc.orig, "pgcode", None)
    if pgcode is not None:
        foreign_key_violation = pgcode == _FOREIGN_KEY_VIOLATION
    else:
        foreign_key_violation = any(m in lowered for m in _FOREIGN_KEY_MARKERS)

    if foreign_key_violation:
        if deleting:
            return ReferentialIntegrityError(entity, entity_id)
        # a referenced row was deleted between our lookup and the write
        return ConcurrencyConflictError(entity, entity_id)

    return exc


def commit(db: Session, entity: str, entity_id: Optional[int] = None, deleting: bool = False) -> None:
    """Stamp, commit, and map store errors. Rolls back on any failure."""
    stamp_session(db)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        error = translate_integrity_error(exc, entity, entity_id, deleting=deleting)
        if error is exc:
            raise
        logger.warning("%s %s rejected by store: %s", entity, entity_id, error)
        raise error from exc


def commit_update(db: Session, model: Type, entity: str, entity_id: int) -> None:
    """
    Commit an update, treating a lost race as a reportable condition.

    If the row vanished underneath us the update is reported as not found;
    if it was changed by someone else it is a concurrency conflict. Neither
    is retried.
    """
    try:
        commit(db, entity, entity_id)
    except StaleDataError:
        db.rollback()
        still_there = db.query(model.id).filter(model.id == entity_id).first() is not None
        if not still_there:
            logger.warning("%s %s was deleted during update", entity, entity_id)
            raise NotFoundError(entity, entity_id)
        logger.warning("%s %s was modified concurrently", entity, entity_id)
        raise ConcurrencyConflictError(entity, entity_id)


def check_version(expected: Optional[int], current: int, entity: str, entity_id: int) -> None:
    """Reject an update made against a stale copy of the record."""
    if expected is not None and expected != current:
        raise ConcurrencyConflictError(entity, entity_id)


def raise_if_errors(errors, db: Session, entity: str) -> None:
    if errors:
        db.rollback()
        logger.warning("%s rejected: %s", entity, ", ".join(e.field for e in errors))
        raise ValidationError(errors)


def page_bounds(page: int, limit: Optional[int]) -> tuple:
    """Clamp pagination arguments to the configured limits and return (offset, limit)."""
    limit = limit or settings.DEFAULT_PAGE_SIZE
    limit = max(1, min(limit, settings.MAX_PAGE_SIZE))
    page = max(1, page)
    return (page - 1) * limit, limit


def delete_if_present(db: Session, model: Type, entity: str, entity_id: int, blockers: Callable[[], Optional[str]]) -> bool:
    """
    Delete a row by id. Missing rows are a no-op (returns False).

    `blockers` returns a description of dependents that block the delete, or None.
    """
    obj = db.get(model, entity_id)
    if obj is None:
        return False

    blocked_by = blockers()
    if blocked_by:
        db.rollback()
        logger.warning("Refusing to delete %s %s: %s", entity, entity_id, blocked_by)
        raise ReferentialIntegrityError(entity, entity_id, f"{entity} is still referenced by {blocked_by}")

    db.delete(obj)
    try:
        commit(db, entity, entity_id, deleting=True)
    except StaleDataError:
        db.rollback()
        if db.query(model.id).filter(model.id == entity_id).first() is None:
            return False
        raise ConcurrencyConflictError(entity, entity_id)
    logger.info("Deleted %s %s", entity, entity_id)
    return True
