# app/modules/payments/schemas.py
from pydantic import BaseModel, EmailStr, Field
from typing import List
from decimal import Decimal
from datetime import datetime

from app.shared.schemas.common import BaseResponse


class PaymentCreate(BaseModel):
    parcel_id: int = Field(..., description="Paid parcel")
    email: EmailStr = Field(..., description="Payer email")
    amount: Decimal = Field(..., description="Amount charged")
    transaction_id: str = Field(..., min_length=1, max_length=255, description="Provider transaction ID")
    payment_method: str = Field(..., min_length=1, max_length=50, description="card, ...")


class PaymentOut(BaseModel):
    id: int
    parcel_id: int
    email: str
    amount: float
    transaction_id: str
    payment_method: str
    paid_at: datetime

    class Config:
        from_attributes = True


class PaymentResponse(BaseResponse):
    payment: PaymentOut
    parcel_id: int
    payment_status: str


class PaymentHistoryResponse(BaseResponse):
    payments: List[PaymentOut]
    count: int


class PaymentIntentRequest(BaseModel):
    amount_in_cents: int = Field(..., gt=0, description="Amount in minor currency units")


class PaymentIntentResponse(BaseModel):
    client_secret: str
