# app/modules/tracking/router.py
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_verified_identity
from app.core.auth.schemas import VerifiedIdentity
from .service import TrackingService
from .schemas import TrackingEventCreate, TrackingEventResponse, TrackingHistoryResponse

router = APIRouter()


@router.post("", response_model=TrackingEventResponse, status_code=status.HTTP_201_CREATED)
async def add_tracking_event(
    event_data: TrackingEventCreate,
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Session = Depends(get_db)
):
    """Append a status/location event; events are never edited or removed"""
    service = TrackingService(db)
    return await service.add_event(event_data)


@router.get("/{tracking_id}", response_model=TrackingHistoryResponse)
async def get_tracking_history(
    tracking_id: str = Path(..., description="Tracking ID"),
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Session = Depends(get_db)
):
    """All events of a tracking ID, newest first (404 when there are none yet)"""
    service = TrackingService(db)
    return await service.get_history(tracking_id)
