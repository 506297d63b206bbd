# app/modules/rider_applications/router.py
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import get_db
from app.core.auth.dependencies import get_admin_user, get_verified_identity
from app.core.auth.schemas import VerifiedIdentity
from app.shared.database.models import ApplicationStatus, User
from .service import RiderApplicationsService
from .schemas import (
    RiderApplicationCreate, RiderApplicationResponse, RiderApplicationListResponse,
    ApplicationStatusUpdate, ApplicationReviewResponse
)

router = APIRouter()


@router.post("", response_model=RiderApplicationResponse, status_code=status.HTTP_201_CREATED)
async def submit_application(
    application_data: RiderApplicationCreate,
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Session = Depends(get_db)
):
    """
    Apply to become a rider

    The applicant email is the verified token email. A second application
    while one is pending or approved is rejected with 409.
    """
    service = RiderApplicationsService(db)
    return await service.submit_application(application_data, identity)


@router.get("", response_model=RiderApplicationListResponse)
async def list_applications(
    application_status: Optional[ApplicationStatus] = Query(None, alias="status"),
    admin: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Admin: applications, latest first, optionally by status"""
    service = RiderApplicationsService(db)
    return await service.list_applications(application_status.value if application_status else None)


@router.get("/{application_id}", response_model=RiderApplicationResponse)
async def get_application(
    application_id: int = Path(..., description="Application ID"),
    admin: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = RiderApplicationsService(db)
    return await service.get_application(application_id)


@router.patch("/{application_id}/status", response_model=ApplicationReviewResponse)
async def review_application(
    review: ApplicationStatusUpdate,
    application_id: int = Path(..., description="Application ID"),
    admin: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """
    Admin: approve, reject or deactivate a rider

    - approved: rider becomes `available`, account role -> rider
    - rejected / inactive: work status cleared, account role back to user
    """
    service = RiderApplicationsService(db)
    return await service.review_application(application_id, review.status.value, admin)
