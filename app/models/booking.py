
from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from app.db.session import Base

class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="RESTRICT"), nullable=False)
    # Copy of the event's venue, refreshed on every write
    venue_id = Column(Integer, ForeignKey("venues.id", ondelete="RESTRICT"), nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False)
    booking_date = Column(DateTime, nullable=False)
    # Opaque ids from the external identity provider
    created_by_user_id = Column(String(450), nullable=True)
    updated_by_user_id = Column(String(450), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    version = Column(Integer, nullable=False, default=1)

    # Relationships
    event = relationship("Event")
    venue = relationship("Venue")
    customer = relationship("Customer")

    __table_args__ = (
        # One booking per customer per event
        UniqueConstraint("event_id", "customer_id", name="uq_booking_event_customer"),
        Index("ix_bookings_booking_date_event_id", "booking_date", "event_id"),
    )
    __mapper_args__ = {"version_id_col": version}
