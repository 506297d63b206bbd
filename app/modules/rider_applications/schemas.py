# app/modules/rider_applications/schemas.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.shared.database.models import ApplicationStatus
from app.shared.schemas.common import BaseResponse


class RiderApplicationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=50)
    age: Optional[int] = Field(None, ge=0)
    national_id: str = Field(..., min_length=1, max_length=100)
    region: str = Field(..., min_length=1, max_length=100)
    district: str = Field(..., min_length=1, max_length=100)
    bike_brand: str = Field(..., min_length=1, max_length=100)
    bike_registration: str = Field(..., min_length=1, max_length=100)
    identity_document_url: Optional[str] = Field(None, description="Link to the uploaded identity document")


class RiderApplicationOut(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    age: Optional[int] = None
    national_id: str
    region: str
    district: str
    bike_brand: str
    bike_registration: str
    identity_document_url: Optional[str] = None
    status: str
    work_status: Optional[str] = None
    created_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RiderApplicationResponse(BaseResponse):
    application: RiderApplicationOut


class RiderApplicationListResponse(BaseResponse):
    applications: List[RiderApplicationOut]
    count: int


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus = Field(..., description="pending, approved, rejected or inactive")


class ApplicationReviewResponse(BaseResponse):
    application: RiderApplicationOut
    previous_status: str
    user_role: Optional[str] = None
