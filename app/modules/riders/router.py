# app/modules/riders/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import get_db
from app.core.auth.dependencies import get_admin_user, get_rider_user
from app.shared.database.models import User, WorkStatus
from .service import RidersService
from .schemas import (
    RiderListResponse, AssignRiderRequest, AssignRiderResponse,
    RiderDeliveriesResponse, CompletedDeliveriesResponse
)

router = APIRouter()
assignment_router = APIRouter()


@router.get("", response_model=RiderListResponse)
async def list_riders(
    region: Optional[str] = Query(None),
    district: Optional[str] = Query(None),
    work_status: Optional[WorkStatus] = Query(None, description="available / in-delivery"),
    admin: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Admin: approved riders, optionally narrowed to a region/district or work status"""
    service = RidersService(db)
    return await service.list_riders(region, district, work_status.value if work_status else None)


@router.get("/pending-deliveries", response_model=RiderDeliveriesResponse)
async def get_pending_deliveries(
    rider: User = Depends(get_rider_user),
    db: Session = Depends(get_db)
):
    """Rider: assigned parcels not yet delivered"""
    service = RidersService(db)
    return await service.get_pending_deliveries(rider)


@router.get("/completed-deliveries", response_model=CompletedDeliveriesResponse)
async def get_completed_deliveries(
    rider: User = Depends(get_rider_user),
    db: Session = Depends(get_db)
):
    """Rider: delivered parcels with the earning of each"""
    service = RidersService(db)
    return await service.get_completed_deliveries(rider)


@assignment_router.post("/assign-rider", response_model=AssignRiderResponse)
async def assign_rider(
    assignment: AssignRiderRequest,
    admin: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """
    Admin: assign a pending parcel to an approved rider

    **Validations:**
    - Parcel must exist and be `pending`
    - Rider must exist, be approved and not already `in-delivery`

    **Effect (single transaction):**
    - Parcel -> `rider_assigned` with the rider's identity
    - Rider work status -> `in-delivery`
    """
    service = RidersService(db)
    return await service.assign_rider(assignment.parcel_id, assignment.rider_id, admin)
