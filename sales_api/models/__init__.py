"""Database models"""

from sales_api.models.reservation import Reservation, ReservationItem, ReservationStatus
from sales_api.models.table import Table, TableStatus
from sales_api.models.user import User
from sales_api.models.access import Role, Permission, RolePermission, UserRole, RecordStatus

__all__ = [
    "Reservation",
    "ReservationItem",
    "ReservationStatus",
    "Table",
    "TableStatus",
    "User",
    "Role",
    "Permission",
    "RolePermission",
    "UserRole",
    "RecordStatus",
]
