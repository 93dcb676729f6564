
from typing import Optional
from pydantic import BaseModel
from datetime import datetime

from app.schemas.customer import CustomerSummary
from app.schemas.event import EventSummary
from app.schemas.venue import VenueSummary


# Booking: Create (POST /admin/bookings). The venue is taken from the event.
class BookingCreate(BaseModel):
    event_id: int
    customer_id: int
    booking_date: datetime


# Booking: Update (PUT /admin/bookings/{id})
class BookingUpdate(BookingCreate):
    version: Optional[int] = None


# Booking: Full response
class Booking(BaseModel):
    id: int
    event_id: int
    venue_id: int
    customer_id: int
    booking_date: datetime
    created_by_user_id: Optional[str] = None
    updated_by_user_id: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    version: int

    class Config:
        from_attributes = True


# Booking with related records: list and detail views
class BookingDetail(Booking):
    event: Optional[EventSummary] = None
    venue: Optional[VenueSummary] = None
    customer: Optional[CustomerSummary] = None

    class Config:
        from_attributes = True
