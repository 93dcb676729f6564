
from typing import Optional
from pydantic import BaseModel
from datetime import datetime

from app.schemas.venue import VenueSummary


class EventBase(BaseModel):
    name: str
    description: Optional[str] = None
    start_datetime: Optional[datetime] = None
    end_datetime: Optional[datetime] = None
    venue_id: int
    image_url: Optional[str] = None
    is_active: bool = True


class EventCreate(EventBase):
    pass


# Full overwrite (PUT /admin/events/{id})
class EventUpdate(EventBase):
    version: Optional[int] = None


class Event(EventBase):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    version: int

    class Config:
        from_attributes = True


# Event with nested venue: list and detail views
class EventWithVenue(Event):
    venue: Optional[VenueSummary] = None

    class Config:
        from_attributes = True


# Compact event for nested booking responses
class EventSummary(BaseModel):
    id: int
    name: str
    start_datetime: Optional[datetime] = None
    end_datetime: Optional[datetime] = None

    class Config:
        from_attributes = True
