"""Permission catalogue API endpoints"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database import get_db
from sales_api.models.user import User
from sales_api.query.listing import PageRequest, DEFAULT_LIMIT
from sales_api.query.projection import project, project_page
from sales_api.schemas.common import PageResponse
from sales_api.schemas.access import PermissionCreate, PermissionResponse
from sales_api.services.access import PermissionService, MANAGE_ROLES
from sales_api.services.base import DuplicateEntity
from sales_api.api.auth import require_permission

router = APIRouter()


@router.get("", response_model=PageResponse[PermissionResponse])
async def list_permissions(
    page: int = Query(1),
    limit: int = Query(DEFAULT_LIMIT),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_direction: Optional[str] = Query(None, alias="sortDirection"),
    filter_by_code: Optional[str] = Query(None, alias="filterByCode"),
    current_user: User = Depends(require_permission(MANAGE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """List permissions"""
    result = await PermissionService(db).list(
        PageRequest.build(page, limit, sort_by, sort_direction),
        {"code": filter_by_code},
    )
    return project_page(PermissionResponse, result)


@router.post("", response_model=PermissionResponse, status_code=status.HTTP_201_CREATED)
async def create_permission(
    permission_data: Optional[PermissionCreate] = Body(None),
    current_user: User = Depends(require_permission(MANAGE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Register a new permission code"""
    if permission_data is None:
        raise HTTPException(status_code=400, detail="Request body is required")

    try:
        permission = await PermissionService(db).create(permission_data, current_user)
    except DuplicateEntity as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    return project(PermissionResponse, permission)
