# app/modules/riders/schemas.py
from pydantic import BaseModel, Field
from typing import Optional, List

from app.modules.parcels.schemas import ParcelOut
from app.shared.schemas.common import BaseResponse


class RiderOut(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    region: str
    district: str
    bike_brand: str
    bike_registration: str
    status: str
    work_status: Optional[str] = None

    class Config:
        from_attributes = True


class RiderListResponse(BaseResponse):
    riders: List[RiderOut]
    count: int


class AssignRiderRequest(BaseModel):
    parcel_id: int = Field(..., description="Parcel to assign")
    rider_id: int = Field(..., description="Approved rider (application ID)")


class AssignRiderResponse(BaseResponse):
    parcel: ParcelOut
    rider: RiderOut


class RiderDeliveriesResponse(BaseResponse):
    parcels: List[ParcelOut]
    count: int


class CompletedDelivery(ParcelOut):
    earning: float


class CompletedDeliveriesResponse(BaseResponse):
    deliveries: List[CompletedDelivery]
    count: int
    total_earnings: float
    cashed_out: float
