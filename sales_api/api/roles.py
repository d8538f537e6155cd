"""Role management API endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database import get_db
from sales_api.models.user import User
from sales_api.query.listing import PageRequest, DEFAULT_LIMIT
from sales_api.query.projection import project, project_page
from sales_api.schemas.common import PageResponse
from sales_api.schemas.access import (
    RoleCreate,
    RoleUpdate,
    RoleResponse,
    PermissionResponse,
    RolePermissionCreate,
    RolePermissionResponse,
)
from sales_api.services.access import RoleService, AccessService, MANAGE_ROLES
from sales_api.services.base import EntityNotFound, DuplicateEntity
from sales_api.api.auth import require_permission

router = APIRouter()


@router.get("", response_model=PageResponse[RoleResponse])
async def list_roles(
    page: int = Query(1),
    limit: int = Query(DEFAULT_LIMIT),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_direction: Optional[str] = Query(None, alias="sortDirection"),
    filter_by_title: Optional[str] = Query(None, alias="filterByTitle"),
    filter_by_status: Optional[str] = Query(None, alias="filterByStatus"),
    filter_by_business_id: Optional[str] = Query(None, alias="filterByBusinessId"),
    current_user: User = Depends(require_permission(MANAGE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """List roles with filtering, sorting and pagination"""
    result = await RoleService(db).list(
        PageRequest.build(page, limit, sort_by, sort_direction),
        {
            "title": filter_by_title,
            "status": filter_by_status,
            "business_id": filter_by_business_id,
        },
    )
    return project_page(RoleResponse, result)


@router.post("", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
async def create_role(
    request: Request,
    response: Response,
    role_data: Optional[RoleCreate] = Body(None),
    current_user: User = Depends(require_permission(MANAGE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Create a new role"""
    if role_data is None:
        raise HTTPException(status_code=400, detail="Request body is required")

    role = await RoleService(db).create(role_data, current_user)

    response.headers["Location"] = str(request.url_for("get_role", role_id=role.id))
    return project(RoleResponse, role)


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(
    role_id: int,
    current_user: User = Depends(require_permission(MANAGE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Get role details"""
    role = await RoleService(db).get(role_id)

    if not role:
        raise HTTPException(status_code=404, detail="Role not found")

    return project(RoleResponse, role)


@router.patch("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: int,
    role_data: Optional[RoleUpdate] = Body(None),
    current_user: User = Depends(require_permission(MANAGE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Apply a sparse update to a role"""
    if role_data is None:
        raise HTTPException(status_code=400, detail="Request body is required")

    role = await RoleService(db).patch(role_id, role_data)

    if not role:
        raise HTTPException(status_code=404, detail="Role not found")

    return project(RoleResponse, role)


@router.delete("/{role_id}", status_code=status.HTTP_200_OK)
async def delete_role(
    role_id: int,
    current_user: User = Depends(require_permission(MANAGE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Delete a role together with its permission links and user assignments"""
    if not await RoleService(db).delete(role_id):
        raise HTTPException(status_code=404, detail="Role not found")

    return Response(status_code=status.HTTP_200_OK)


@router.get("/{role_id}/permissions", response_model=List[PermissionResponse])
async def list_role_permissions(
    role_id: int,
    current_user: User = Depends(require_permission(MANAGE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """List the permissions granted to a role"""
    try:
        permissions = await AccessService(db).role_permission_list(role_id)
    except EntityNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    return [project(PermissionResponse, permission) for permission in permissions]


@router.post(
    "/{role_id}/permissions",
    response_model=RolePermissionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def grant_role_permission(
    role_id: int,
    link_data: Optional[RolePermissionCreate] = Body(None),
    current_user: User = Depends(require_permission(MANAGE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Grant a permission to a role"""
    if link_data is None:
        raise HTTPException(status_code=400, detail="Request body is required")

    try:
        link = await AccessService(db).grant_permission(role_id, link_data.permission_id)
    except EntityNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except DuplicateEntity as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    return project(RolePermissionResponse, link)


@router.delete("/{role_id}/permissions/{permission_id}", status_code=status.HTTP_200_OK)
async def revoke_role_permission(
    role_id: int,
    permission_id: int,
    current_user: User = Depends(require_permission(MANAGE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Revoke a permission from a role"""
    if not await AccessService(db).revoke_permission(role_id, permission_id):
        raise HTTPException(status_code=404, detail="Role permission not found")

    return Response(status_code=status.HTTP_200_OK)
