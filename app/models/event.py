
from sqlalchemy import Column, String, Boolean, DateTime, Integer, Text, ForeignKey, CheckConstraint, Index, true
from sqlalchemy.orm import relationship
from app.db.session import Base

class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    # Naive UTC wall-clock values
    start_datetime = Column(DateTime, nullable=True)
    end_datetime = Column(DateTime, nullable=True)
    venue_id = Column(Integer, ForeignKey("venues.id", ondelete="RESTRICT"), nullable=False)
    image_url = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    version = Column(Integer, nullable=False, default=1)

    # Relationships
    venue = relationship("Venue")

    __table_args__ = (
        CheckConstraint(
            "start_datetime IS NULL OR end_datetime IS NULL OR start_datetime <= end_datetime",
            name="ck_event_time_order",
        ),
        Index("ix_events_venue_id_start_datetime", "venue_id", "start_datetime"),
        Index("ix_events_is_active_name", "is_active", "name"),
    )
    __mapper_args__ = {"version_id_col": version}
