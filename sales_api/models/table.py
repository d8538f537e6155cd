"""Dining table model"""

import enum
from sqlalchemy import Column, String, Integer, BigInteger, Enum

from sales_api.database import Base, BigIntPK


class TableStatus(str, enum.Enum):
    """Table occupancy states"""
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"


class Table(Base):
    """Restaurant tables"""
    __tablename__ = "tables"

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    business_id = Column(BigInteger, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    capacity = Column(Integer, nullable=False)
    status = Column(
        Enum(TableStatus, native_enum=False, length=32),
        nullable=False,
        default=TableStatus.AVAILABLE,
    )
