# app/modules/parcels/router.py
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import get_db
from app.core.auth.dependencies import (
    get_optional_user, get_rider_or_admin_user, get_rider_user, get_verified_identity
)
from app.core.auth.schemas import VerifiedIdentity
from app.shared.database.models import DeliveryStatus, PaymentStatus, User
from app.shared.schemas.common import DeleteResponse
from .service import ParcelsService
from .schemas import (
    ParcelCreate, ParcelResponse, ParcelListResponse, DeliveryStatusUpdate, DeliveryStatusResponse
)

router = APIRouter()


def _role(user: Optional[User]) -> Optional[str]:
    return user.role if user else None


@router.get("", response_model=ParcelListResponse)
async def list_parcels(
    email: Optional[str] = Query(None, description="Sender email (admins only for other users)"),
    delivery_status: Optional[DeliveryStatus] = Query(None),
    payment_status: Optional[PaymentStatus] = Query(None),
    identity: VerifiedIdentity = Depends(get_verified_identity),
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """
    List parcels, latest first

    **Filters:**
    - email: sender email
    - delivery_status: pending, rider_assigned, in_transit, delivered, service_center_delivered
    - payment_status: unpaid, paid
    """
    service = ParcelsService(db)
    return await service.list_parcels(
        identity,
        _role(current_user),
        email=email,
        delivery_status=delivery_status.value if delivery_status else None,
        payment_status=payment_status.value if payment_status else None
    )


@router.get("/{parcel_id}", response_model=ParcelResponse)
async def get_parcel(
    parcel_id: int = Path(..., description="Parcel ID"),
    identity: VerifiedIdentity = Depends(get_verified_identity),
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Parcel detail for its sender, its assigned rider or an admin"""
    service = ParcelsService(db)
    return await service.get_parcel(parcel_id, identity, _role(current_user))


@router.post("", response_model=ParcelResponse, status_code=status.HTTP_201_CREATED)
async def create_parcel(
    parcel_data: ParcelCreate,
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Session = Depends(get_db)
):
    """
    Book a parcel

    Starts as `pending` / `unpaid`; status fields sent by the client are ignored.
    """
    service = ParcelsService(db)
    return await service.create_parcel(parcel_data, identity)


@router.delete("/{parcel_id}", response_model=DeleteResponse)
async def delete_parcel(
    parcel_id: int = Path(..., description="Parcel ID"),
    identity: VerifiedIdentity = Depends(get_verified_identity),
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Delete an unpaid parcel (sender or admin)"""
    service = ParcelsService(db)
    return await service.delete_parcel(parcel_id, identity, _role(current_user))


@router.patch("/{parcel_id}/status", response_model=DeliveryStatusResponse)
async def update_delivery_status(
    status_data: DeliveryStatusUpdate,
    parcel_id: int = Path(..., description="Parcel ID"),
    current_user: User = Depends(get_rider_or_admin_user),
    db: Session = Depends(get_db)
):
    """
    Advance the delivery lifecycle

    **Allowed transitions:**
    - rider_assigned -> in_transit (pickup)
    - rider_assigned -> pending (rider declines, assignment cleared)
    - in_transit -> delivered / service_center_delivered (rider released)
    """
    service = ParcelsService(db)
    return await service.update_delivery_status(parcel_id, status_data.status.value, current_user)


@router.patch("/{parcel_id}/cashout", response_model=ParcelResponse)
async def cash_out_parcel(
    parcel_id: int = Path(..., description="Parcel ID"),
    rider: User = Depends(get_rider_user),
    db: Session = Depends(get_db)
):
    """Rider: mark the earning of a delivered parcel as cashed out"""
    service = ParcelsService(db)
    return await service.cash_out(parcel_id, rider)
