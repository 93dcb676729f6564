from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.orm import Session


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def stamp_audit(entity: Any, is_new: bool, now: Optional[datetime] = None) -> None:
    """
    Set audit timestamps on a single entity about to be written.

    - New entity: `created_at = now`, `updated_at = None`.
    - Modified entity: `updated_at = now`; `created_at` is left alone.

    Entities without one of the attributes just skip that half.
    """
    now = now or utcnow()
    if is_new:
        if hasattr(entity, "created_at"):
            entity.created_at = now
        if hasattr(entity, "updated_at"):
            entity.updated_at = None
    elif hasattr(entity, "updated_at"):
        entity.updated_at = now


def stamp_session(db: Session, now: Optional[datetime] = None) -> int:
    """
    Stamp every pending insert and every really-modified object in the session.

    Must be called once, right before commit. Returns the number of objects stamped.
    """
    now = now or utcnow()
    count = 0
    for obj in list(db.new):
        stamp_audit(obj, is_new=True, now=now)
        count += 1
    for obj in list(db.dirty):
        # dirty also holds objects whose attributes were set to the same value
        if db.is_modified(obj, include_collections=False):
            stamp_audit(obj, is_new=False, now=now)
            count += 1
    return count
