# app/modules/stats/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import get_db
from app.core.auth.dependencies import get_admin_user, get_optional_user, get_verified_identity
from app.core.auth.schemas import VerifiedIdentity
from app.shared.database.models import User
from .service import StatsService
from .schemas import StatsRole, StatsResponse, DeliveryStatusCountsResponse

router = APIRouter()


@router.get("", response_model=StatsResponse)
async def get_stats(
    role: StatsRole = Query(..., description="user: parcels sent, rider: parcels delivered"),
    email: Optional[str] = Query(None, description="Defaults to the caller"),
    identity: VerifiedIdentity = Depends(get_verified_identity),
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """
    Parcel counts and earnings

    **Earnings:** per delivered parcel, by default 90% of the cost within one region,
    30% across regions; `cashed_out` is the part already paid out.
    """
    service = StatsService(db)
    return await service.get_stats(role, identity, current_user.role if current_user else None, email)


@router.get("/delivery-status", response_model=DeliveryStatusCountsResponse)
async def get_delivery_status_counts(
    admin: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Admin: number of parcels in each delivery status"""
    service = StatsService(db)
    return await service.get_delivery_status_counts()
