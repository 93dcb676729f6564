
from typing import Optional
from pydantic import BaseModel
from datetime import datetime


# Email syntax is checked by validate_customer, not here
class CustomerBase(BaseModel):
    full_name: str
    email: str
    phone: Optional[str] = None


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(CustomerBase):
    version: Optional[int] = None


class Customer(CustomerBase):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    version: int

    class Config:
        from_attributes = True


# Compact customer for nested booking responses
class CustomerSummary(BaseModel):
    id: int
    full_name: str
    email: str

    class Config:
        from_attributes = True
