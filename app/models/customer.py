
from sqlalchemy import Column, String, DateTime, Integer, Index, func
from app.db.session import Base

class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(200), nullable=False, index=True)
    email = Column(String(200), nullable=False)
    phone = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    version = Column(Integer, nullable=False, default=1)

    __table_args__ = (
        # Emails are unique regardless of case
        Index("ix_customers_email", func.lower(email), unique=True),
    )
    __mapper_args__ = {"version_id_col": version}
