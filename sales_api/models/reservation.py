"""Reservation models"""

import enum
from sqlalchemy import Column, String, Integer, BigInteger, ForeignKey, Text, Enum
from sqlalchemy.orm import relationship

from sales_api.database import Base, BigIntPK, TZDateTime, utcnow


class ReservationStatus(str, enum.Enum):
    """Reservation lifecycle states"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"


class Reservation(Base):
    """Table reservations"""
    __tablename__ = "reservations"

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    business_id = Column(BigInteger, nullable=False, index=True)

    # Customer information
    customer_name = Column(String(255))
    customer_phone = Column(String(32))
    customer_note = Column(Text)

    # Reservation details
    appointment_time = Column(TZDateTime, nullable=False)
    guest_number = Column(Integer, nullable=False, default=1)
    table_id = Column(BigInteger, ForeignKey("tables.id", ondelete="SET NULL"), index=True)
    assigned_employee = Column(BigInteger)

    status = Column(
        Enum(ReservationStatus, native_enum=False, length=32),
        nullable=False,
        default=ReservationStatus.PENDING,
    )

    # Metadata
    created_at = Column(TZDateTime, nullable=False, default=utcnow)
    created_by = Column(BigInteger, nullable=False)

    # Owned line items; no back-reference
    items = relationship(
        "ReservationItem",
        cascade="all, delete-orphan",
        order_by="ReservationItem.id",
        lazy="selectin",
    )


class ReservationItem(Base):
    """Menu items pre-ordered with a reservation"""
    __tablename__ = "reservation_items"

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    reservation_id = Column(
        BigInteger, ForeignKey("reservations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    item_id = Column(BigInteger, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    discount_id = Column(BigInteger)
    notes = Column(Text)
