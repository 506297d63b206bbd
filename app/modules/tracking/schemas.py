# app/modules/tracking/schemas.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.shared.schemas.common import BaseResponse


class TrackingEventCreate(BaseModel):
    tracking_id: str = Field(..., min_length=1, max_length=50)
    status: str = Field(..., min_length=1, max_length=100, description="Status label shown to the customer")
    location: str = Field(..., min_length=1, max_length=255)
    updated_by: str = Field(..., min_length=1, max_length=255, description="Who reported the event")
    parcel_id: Optional[int] = None


class TrackingEventOut(BaseModel):
    id: int
    tracking_id: str
    parcel_id: Optional[int] = None
    status: str
    location: str
    updated_by: str
    timestamp: datetime

    class Config:
        from_attributes = True


class TrackingEventResponse(BaseResponse):
    event: TrackingEventOut


class TrackingHistoryResponse(BaseResponse):
    tracking_id: str
    events: List[TrackingEventOut]
    count: int
