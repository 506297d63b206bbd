# app/modules/payments/router.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import get_db
from app.core.auth.dependencies import get_optional_user, get_verified_identity
from app.core.auth.schemas import VerifiedIdentity
from app.shared.database.models import User
from app.shared.services.payment_intent_client import PaymentIntentClient, get_payment_intent_client
from .service import PaymentsService, create_payment_intent
from .schemas import (
    PaymentCreate, PaymentResponse, PaymentHistoryResponse, PaymentIntentRequest, PaymentIntentResponse
)

router = APIRouter()
intent_router = APIRouter()


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def record_payment(
    payment_data: PaymentCreate,
    identity: VerifiedIdentity = Depends(get_verified_identity),
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """
    Record a completed payment

    **Effect (single transaction):**
    - Parcel `payment_status` -> paid, `paid_at` stamped
    - Payment record appended to the ledger

    **Rejections:**
    - 403 caller is neither the sender nor an admin, or pays as someone else
    - 404 unknown parcel
    - 409 parcel already paid or transaction already recorded
    """
    service = PaymentsService(db)
    return await service.record_payment(payment_data, identity, current_user.role if current_user else None)


@router.get("", response_model=PaymentHistoryResponse)
async def get_payment_history(
    email: Optional[str] = Query(None, description="Payer email (admins only for other users)"),
    identity: VerifiedIdentity = Depends(get_verified_identity),
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Payment history, latest first"""
    service = PaymentsService(db)
    return await service.get_history(identity, current_user.role if current_user else None, email)


@intent_router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_intent(
    intent: PaymentIntentRequest,
    identity: VerifiedIdentity = Depends(get_verified_identity),
    client: PaymentIntentClient = Depends(get_payment_intent_client)
):
    """Create a card payment intent and return its client secret"""
    return await create_payment_intent(client, intent.amount_in_cents)
