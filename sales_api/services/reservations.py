"""Reservation service"""

from typing import Optional

from sales_api.database import utcnow
from sales_api.models.reservation import Reservation, ReservationItem, ReservationStatus
from sales_api.models.user import User
from sales_api.query.enums import parse_or_ignore
from sales_api.query.listing import (
    ListSpec,
    ContainsFilter,
    EqualsFilter,
    EnumFilter,
    parse_datetime,
)
from sales_api.query import patching
from sales_api.schemas.reservation import ReservationCreate
from sales_api.services.base import EntityService


class ReservationService(EntityService[Reservation]):
    model = Reservation
    entity_name = "Reservation"

    list_spec = ListSpec(
        model=Reservation,
        filters={
            "name": ContainsFilter(Reservation.customer_name),
            "phone": ContainsFilter(Reservation.customer_phone),
            "appointment_time": EqualsFilter(Reservation.appointment_time, parse_datetime),
            "creation_time": EqualsFilter(Reservation.created_at, parse_datetime),
            "status": EnumFilter(Reservation.status, ReservationStatus),
            "business_id": EqualsFilter(Reservation.business_id),
            "user_id": EqualsFilter(Reservation.created_by),
            "table_id": EqualsFilter(Reservation.table_id),
        },
        sort_keys={
            "customerName": Reservation.customer_name,
            "appointmentTime": Reservation.appointment_time,
            "createdAt": Reservation.created_at,
            "createdBy": Reservation.created_by,
            # Stored by member name, so this orders alphabetically, not by lifecycle
            "status": Reservation.status,
            "guestNumber": Reservation.guest_number,
        },
        default_sort="createdAt",
        default_direction="desc",
    )

    # created_at is server-assigned and never patched
    patch_rules = {
        "business_id": patching.REQUIRED,
        "customer_name": patching.OPTIONAL_TEXT,
        "customer_phone": patching.OPTIONAL_TEXT,
        "customer_note": patching.OPTIONAL_TEXT,
        "appointment_time": patching.REQUIRED,
        "created_by": patching.REQUIRED,
        "assigned_employee": patching.NULLABLE,
        "guest_number": patching.REQUIRED,
        "table_id": patching.NULLABLE,
        "status": patching.enum_rule(ReservationStatus),
    }

    def build(self, payload: ReservationCreate, actor: Optional[User]) -> Reservation:
        created_by = payload.created_by
        if created_by is None and actor is not None:
            created_by = actor.id

        return Reservation(
            business_id=payload.business_id,
            customer_name=payload.customer_name,
            customer_phone=payload.customer_phone,
            customer_note=payload.customer_note,
            appointment_time=payload.appointment_time,
            created_at=utcnow(),
            created_by=created_by,
            assigned_employee=payload.assigned_employee,
            guest_number=payload.guest_number,
            table_id=payload.table_id,
            status=parse_or_ignore(ReservationStatus, payload.status) or ReservationStatus.PENDING,
            items=[
                ReservationItem(
                    item_id=item.item_id,
                    quantity=item.quantity,
                    discount_id=item.discount_id,
                    notes=item.notes,
                )
                for item in payload.items
            ],
        )
