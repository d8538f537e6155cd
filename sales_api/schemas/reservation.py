"""Reservation schemas"""

from datetime import datetime
from typing import Optional, List
from pydantic import Field

from sales_api.schemas.common import CamelModel, StatusLabel


class ReservationItemCreate(CamelModel):
    """Line item sent with a new reservation"""
    item_id: int
    quantity: int = Field(1, ge=1)
    discount_id: Optional[int] = None
    notes: Optional[str] = None


class ReservationCreate(CamelModel):
    """Create reservation request"""
    business_id: int
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_note: Optional[str] = None
    appointment_time: datetime
    created_by: Optional[int] = None
    assigned_employee: Optional[int] = None
    guest_number: int = Field(..., ge=1)
    table_id: Optional[int] = None
    status: Optional[str] = None
    items: List[ReservationItemCreate] = []


class ReservationUpdate(CamelModel):
    """Sparse reservation patch; only the fields sent are applied"""
    business_id: Optional[int] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_note: Optional[str] = None
    appointment_time: Optional[datetime] = None
    created_by: Optional[int] = None
    assigned_employee: Optional[int] = None
    guest_number: Optional[int] = Field(None, ge=1)
    table_id: Optional[int] = None
    status: Optional[str] = None


class ReservationItemResponse(CamelModel):
    """Reservation line item"""
    id: int
    item_id: int
    quantity: int
    discount_id: Optional[int]
    notes: Optional[str]


class ReservationResponse(CamelModel):
    """Reservation response"""
    id: int
    business_id: int
    customer_name: Optional[str]
    customer_phone: Optional[str]
    customer_note: Optional[str]
    appointment_time: datetime
    created_at: datetime
    created_by: int
    status: StatusLabel
    items: List[ReservationItemResponse] = []
    assigned_employee: Optional[int]
    guest_number: int
    table_id: Optional[int]
