
from typing import Optional
from pydantic import BaseModel
from datetime import datetime


# Venue Schemas
class VenueBase(BaseModel):
    name: str
    location: str
    capacity: int
    image_url: Optional[str] = None
    is_active: bool = True


class VenueCreate(VenueBase):
    pass


# Full overwrite (PUT /admin/venues/{id}); `version` guards against stale edits
class VenueUpdate(VenueBase):
    version: Optional[int] = None


class Venue(VenueBase):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    version: int

    class Config:
        from_attributes = True


# Compact venue for nested responses (event, booking)
class VenueSummary(BaseModel):
    id: int
    name: str
    location: str

    class Config:
        from_attributes = True
