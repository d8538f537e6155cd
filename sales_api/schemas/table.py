"""Table schemas"""

from typing import Optional
from pydantic import Field

from sales_api.schemas.common import CamelModel, StatusLabel


class TableCreate(CamelModel):
    """Create table request"""
    business_id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=100)
    capacity: int = Field(..., gt=0)
    status: Optional[str] = None


class TableUpdate(CamelModel):
    """Sparse table patch"""
    business_id: Optional[int] = None
    name: Optional[str] = Field(None, max_length=100)
    capacity: Optional[int] = Field(None, gt=0)
    status: Optional[str] = None


class TableResponse(CamelModel):
    """Table response"""
    id: int
    business_id: int
    name: str
    capacity: int
    status: StatusLabel
