"""Reservation management API endpoints"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database import get_db
from sales_api.models.user import User
from sales_api.query.listing import PageRequest, DEFAULT_LIMIT
from sales_api.query.projection import project, project_page
from sales_api.schemas.common import PageResponse
from sales_api.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
)
from sales_api.services.reservations import ReservationService
from sales_api.api.auth import get_current_active_user

router = APIRouter()


@router.get("", response_model=PageResponse[ReservationResponse])
async def list_reservations(
    page: int = Query(1),
    limit: int = Query(DEFAULT_LIMIT),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_direction: Optional[str] = Query(None, alias="sortDirection"),
    filter_by_name: Optional[str] = Query(None, alias="filterByName"),
    filter_by_phone: Optional[str] = Query(None, alias="filterByPhone"),
    filter_by_appointment_time: Optional[str] = Query(None, alias="filterByAppointmentTime"),
    filter_by_creation_time: Optional[str] = Query(None, alias="filterByCreationTime"),
    filter_by_status: Optional[str] = Query(None, alias="filterByStatus"),
    filter_by_business_id: Optional[str] = Query(None, alias="filterByBusinessId"),
    filter_by_user_id: Optional[str] = Query(None, alias="filterByUserId"),
    filter_by_table_id: Optional[str] = Query(None, alias="filterByTableId"),
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """List reservations with filtering, sorting and pagination"""
    result = await ReservationService(db).list(
        PageRequest.build(page, limit, sort_by, sort_direction),
        {
            "name": filter_by_name,
            "phone": filter_by_phone,
            "appointment_time": filter_by_appointment_time,
            "creation_time": filter_by_creation_time,
            "status": filter_by_status,
            "business_id": filter_by_business_id,
            "user_id": filter_by_user_id,
            "table_id": filter_by_table_id,
        },
    )
    return project_page(ReservationResponse, result)


@router.post("", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    request: Request,
    response: Response,
    reservation_data: Optional[ReservationCreate] = Body(None),
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a new reservation"""
    if reservation_data is None:
        raise HTTPException(status_code=400, detail="Request body is required")

    reservation = await ReservationService(db).create(reservation_data, current_user)

    response.headers["Location"] = str(
        request.url_for("get_reservation", reservation_id=reservation.id)
    )
    return project(ReservationResponse, reservation)


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: int,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Get reservation details"""
    reservation = await ReservationService(db).get(reservation_id)

    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")

    return project(ReservationResponse, reservation)


@router.patch("/{reservation_id}", response_model=ReservationResponse)
async def update_reservation(
    reservation_id: int,
    reservation_data: Optional[ReservationUpdate] = Body(None),
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Apply a sparse update to a reservation"""
    if reservation_data is None:
        raise HTTPException(status_code=400, detail="Request body is required")

    reservation = await ReservationService(db).patch(reservation_id, reservation_data)

    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")

    return project(ReservationResponse, reservation)


@router.delete("/{reservation_id}", status_code=status.HTTP_200_OK)
async def delete_reservation(
    reservation_id: int,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a reservation and its line items"""
    if not await ReservationService(db).delete(reservation_id):
        raise HTTPException(status_code=404, detail="Reservation not found")

    return Response(status_code=status.HTTP_200_OK)
