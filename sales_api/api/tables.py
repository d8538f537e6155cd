"""Table management API endpoints"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database import get_db
from sales_api.models.user import User
from sales_api.query.listing import PageRequest, DEFAULT_LIMIT
from sales_api.query.projection import project, project_page
from sales_api.schemas.common import PageResponse
from sales_api.schemas.table import TableCreate, TableUpdate, TableResponse
from sales_api.services.tables import TableService
from sales_api.api.auth import get_current_active_user

router = APIRouter()


@router.get("", response_model=PageResponse[TableResponse])
async def list_tables(
    page: int = Query(1),
    limit: int = Query(DEFAULT_LIMIT),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_direction: Optional[str] = Query(None, alias="sortDirection"),
    filter_by_name: Optional[str] = Query(None, alias="filterByName"),
    filter_by_status: Optional[str] = Query(None, alias="filterByStatus"),
    filter_by_capacity: Optional[str] = Query(None, alias="filterByCapacity"),
    filter_by_business_id: Optional[str] = Query(None, alias="filterByBusinessId"),
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """List tables with filtering, sorting and pagination"""
    result = await TableService(db).list(
        PageRequest.build(page, limit, sort_by, sort_direction),
        {
            "name": filter_by_name,
            "status": filter_by_status,
            "capacity": filter_by_capacity,
            "business_id": filter_by_business_id,
        },
    )
    return project_page(TableResponse, result)


@router.post("", response_model=TableResponse, status_code=status.HTTP_201_CREATED)
async def create_table(
    request: Request,
    response: Response,
    table_data: Optional[TableCreate] = Body(None),
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a new table"""
    if table_data is None:
        raise HTTPException(status_code=400, detail="Request body is required")

    table = await TableService(db).create(table_data, current_user)

    response.headers["Location"] = str(request.url_for("get_table", table_id=table.id))
    return project(TableResponse, table)


@router.get("/{table_id}", response_model=TableResponse)
async def get_table(
    table_id: int,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Get table details"""
    table = await TableService(db).get(table_id)

    if not table:
        raise HTTPException(status_code=404, detail="Table not found")

    return project(TableResponse, table)


@router.patch("/{table_id}", response_model=TableResponse)
async def update_table(
    table_id: int,
    table_data: Optional[TableUpdate] = Body(None),
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Apply a sparse update to a table"""
    if table_data is None:
        raise HTTPException(status_code=400, detail="Request body is required")

    table = await TableService(db).patch(table_id, table_data)

    if not table:
        raise HTTPException(status_code=404, detail="Table not found")

    return project(TableResponse, table)


@router.delete("/{table_id}", status_code=status.HTTP_200_OK)
async def delete_table(
    table_id: int,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a table; reservations pointing at it lose their table reference"""
    if not await TableService(db).delete(table_id):
        raise HTTPException(status_code=404, detail="Table not found")

    return Response(status_code=status.HTTP_200_OK)
