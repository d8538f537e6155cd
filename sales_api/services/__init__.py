"""Entity services"""

from sales_api.services.base import EntityService, EntityNotFound, DuplicateEntity
from sales_api.services.reservations import ReservationService
from sales_api.services.tables import TableService
from sales_api.services.access import (
    RoleService,
    PermissionService,
    AccessService,
    MANAGE_ROLES,
)

__all__ = [
    "EntityService",
    "EntityNotFound",
    "DuplicateEntity",
    "ReservationService",
    "TableService",
    "RoleService",
    "PermissionService",
    "AccessService",
    "MANAGE_ROLES",
]
