"""Role, permission and assignment schemas"""

from datetime import datetime
from typing import Optional
from pydantic import ConfigDict, Field

from sales_api.schemas.common import CamelModel, StatusLabel


class RoleCreate(CamelModel):
    """Create role request"""
    business_id: int
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[str] = None


class RoleUpdate(CamelModel):
    """Sparse role patch"""
    business_id: Optional[int] = None
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    status: Optional[str] = None


class RoleResponse(CamelModel):
    """Role response"""
    id: int
    business_id: int
    title: str
    description: Optional[str]
    status: StatusLabel
    created_at: datetime
    updated_at: datetime


class PermissionCreate(CamelModel):
    """Create permission request; the code is stripped before length checks"""
    model_config = ConfigDict(str_strip_whitespace=True)

    code: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class PermissionResponse(CamelModel):
    """Permission response"""
    id: int
    code: str
    description: Optional[str]
    created_at: datetime


class RolePermissionCreate(CamelModel):
    """Grant a permission to a role"""
    permission_id: int


class RolePermissionResponse(CamelModel):
    """Role-permission link"""
    id: int
    role_id: int
    permission_id: int
    created_at: datetime
    updated_at: datetime


class UserRoleCreate(CamelModel):
    """Assign a role to a user"""
    role_id: int


class UserRoleResponse(CamelModel):
    """User-role assignment"""
    id: int
    user_id: int
    role_id: int
    assigned_at: datetime
