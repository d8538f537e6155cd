"""Table service"""

from typing import Optional

from sqlalchemy import update

from sales_api.models.reservation import Reservation
from sales_api.models.table import Table, TableStatus
from sales_api.models.user import User
from sales_api.query.enums import parse_or_ignore
from sales_api.query.listing import ListSpec, ContainsFilter, EqualsFilter, EnumFilter
from sales_api.query import patching
from sales_api.schemas.table import TableCreate
from sales_api.services.base import EntityService


class TableService(EntityService[Table]):
    model = Table
    entity_name = "Table"

    list_spec = ListSpec(
        model=Table,
        filters={
            "name": ContainsFilter(Table.name),
            "status": EnumFilter(Table.status, TableStatus),
            "capacity": EqualsFilter(Table.capacity),
            "business_id": EqualsFilter(Table.business_id),
        },
        sort_keys={
            "name": Table.name,
            "capacity": Table.capacity,
            "status": Table.status,
        },
        default_sort="name",
        default_direction="asc",
    )

    patch_rules = {
        "business_id": patching.REQUIRED,
        "name": patching.TEXT,
        "capacity": patching.REQUIRED,
        "status": patching.enum_rule(TableStatus),
    }

    def build(self, payload: TableCreate, actor: Optional[User]) -> Table:
        business_id = payload.business_id
        if business_id is None and actor is not None:
            business_id = actor.business_id
        if business_id is None:
            business_id = 0

        return Table(
            business_id=business_id,
            name=payload.name,
            capacity=payload.capacity,
            status=parse_or_ignore(TableStatus, payload.status) or TableStatus.AVAILABLE,
        )

    async def before_delete(self, entity: Table) -> None:
        # Reservations keep existing without a table
        await self.db.execute(
            update(Reservation)
            .where(Reservation.table_id == entity.id)
            .values(table_id=None)
            .execution_options(synchronize_session="fetch")
        )
