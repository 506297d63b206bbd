# app/modules/parcels/schemas.py
from pydantic import BaseModel, Field
from typing import Optional, List
from decimal import Decimal
from datetime import datetime

from app.shared.database.models import DeliveryStatus
from app.shared.schemas.common import BaseResponse


class ParcelCreate(BaseModel):
    parcel_type: str = Field(..., min_length=1, max_length=30, description="document / non-document")
    title: str = Field(..., min_length=1, max_length=255, description="Short description of the content")
    weight: Optional[Decimal] = Field(None, ge=0, description="Weight in kg")
    tracking_id: Optional[str] = Field(None, max_length=50, description="Generated when omitted")

    sender_name: str = Field(..., min_length=1)
    sender_contact: str = Field(..., min_length=1)
    sender_region: str = Field(..., min_length=1)
    sender_center: Optional[str] = None
    sender_address: Optional[str] = None
    pickup_instruction: Optional[str] = None

    receiver_name: str = Field(..., min_length=1)
    receiver_contact: str = Field(..., min_length=1)
    receiver_region: str = Field(..., min_length=1)
    receiver_center: Optional[str] = None
    receiver_address: Optional[str] = None
    delivery_instruction: Optional[str] = None

    total_cost: Decimal = Field(..., ge=0, description="Declared delivery cost")


class ParcelOut(BaseModel):
    id: int
    tracking_id: str
    parcel_type: str
    title: str
    weight: Optional[float] = None
    created_by: str

    sender_name: str
    sender_contact: str
    sender_region: str
    sender_center: Optional[str] = None
    sender_address: Optional[str] = None
    pickup_instruction: Optional[str] = None

    receiver_name: str
    receiver_contact: str
    receiver_region: str
    receiver_center: Optional[str] = None
    receiver_address: Optional[str] = None
    delivery_instruction: Optional[str] = None

    total_cost: float
    delivery_status: str
    payment_status: str
    assigned_rider_id: Optional[int] = None
    assigned_rider_name: Optional[str] = None
    assigned_rider_email: Optional[str] = None
    is_cashed_out: bool = False

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    assigned_at: Optional[datetime] = None
    picked_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    cashed_out_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ParcelResponse(BaseResponse):
    parcel: ParcelOut


class ParcelListResponse(BaseResponse):
    parcels: List[ParcelOut]
    count: int


class DeliveryStatusUpdate(BaseModel):
    status: DeliveryStatus = Field(..., description="Target delivery status")


class DeliveryStatusResponse(BaseResponse):
    parcel: ParcelOut
    previous_status: str
    rider_released: bool = False
