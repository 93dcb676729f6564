
from sqlalchemy import Column, String, Boolean, DateTime, Integer, CheckConstraint, Index, true
from app.db.session import Base

class Venue(Base):
    __tablename__ = "venues"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, index=True)
    location = Column(String(200), nullable=False)
    capacity = Column(Integer, nullable=False)
    image_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    version = Column(Integer, nullable=False, default=1)

    # Dependents (events, bookings) are reached by query, never through a relationship

    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_venue_capacity_positive"),
        Index("ix_venues_location_is_active", "location", "is_active"),
    )
    __mapper_args__ = {"version_id_col": version}
