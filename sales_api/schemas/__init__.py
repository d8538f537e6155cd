"""Pydantic schemas for request/response validation"""

from sales_api.schemas.common import CamelModel, PageResponse, StatusLabel
from sales_api.schemas.auth import (
    Token,
    TokenPayload,
    RefreshRequest,
    UserResponse,
)
from sales_api.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
    ReservationItemCreate,
    ReservationItemResponse,
)
from sales_api.schemas.table import (
    TableCreate,
    TableUpdate,
    TableResponse,
)
from sales_api.schemas.access import (
    RoleCreate,
    RoleUpdate,
    RoleResponse,
    PermissionCreate,
    PermissionResponse,
    RolePermissionCreate,
    RolePermissionResponse,
    UserRoleCreate,
    UserRoleResponse,
)

__all__ = [
    "CamelModel",
    "PageResponse",
    "StatusLabel",
    "Token",
    "TokenPayload",
    "RefreshRequest",
    "UserResponse",
    "ReservationCreate",
    "ReservationUpdate",
    "ReservationResponse",
    "ReservationItemCreate",
    "ReservationItemResponse",
    "TableCreate",
    "TableUpdate",
    "TableResponse",
    "RoleCreate",
    "RoleUpdate",
    "RoleResponse",
    "PermissionCreate",
    "PermissionResponse",
    "RolePermissionCreate",
    "RolePermissionResponse",
    "UserRoleCreate",
    "UserRoleResponse",
]
