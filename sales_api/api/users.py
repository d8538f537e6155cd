"""User role assignment API endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database import get_db
from sales_api.models.user import User
from sales_api.query.projection import project
from sales_api.schemas.access import RoleResponse, UserRoleCreate, UserRoleResponse
from sales_api.services.access import AccessService, MANAGE_ROLES
from sales_api.services.base import EntityNotFound, DuplicateEntity
from sales_api.api.auth import require_permission

router = APIRouter()


@router.get("/{user_id}/roles", response_model=List[RoleResponse])
async def list_user_roles(
    user_id: int,
    current_user: User = Depends(require_permission(MANAGE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """List the roles assigned to a user"""
    try:
        roles = await AccessService(db).user_role_list(user_id)
    except EntityNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    return [project(RoleResponse, role) for role in roles]


@router.post(
    "/{user_id}/roles",
    response_model=UserRoleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def assign_user_role(
    user_id: int,
    assignment_data: Optional[UserRoleCreate] = Body(None),
    current_user: User = Depends(require_permission(MANAGE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Assign a role to a user"""
    if assignment_data is None:
        raise HTTPException(status_code=400, detail="Request body is required")

    try:
        assignment = await AccessService(db).assign_role(user_id, assignment_data.role_id)
    except EntityNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except DuplicateEntity as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    return project(UserRoleResponse, assignment)


@router.delete("/{user_id}/roles/{role_id}", status_code=status.HTTP_200_OK)
async def unassign_user_role(
    user_id: int,
    role_id: int,
    current_user: User = Depends(require_permission(MANAGE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Remove a role from a user"""
    if not await AccessService(db).unassign_role(user_id, role_id):
        raise HTTPException(status_code=404, detail="User role not found")

    return Response(status_code=status.HTTP_200_OK)
