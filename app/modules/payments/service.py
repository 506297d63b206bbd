# app/modules/payments/service.py
import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.config.database import transaction
from app.core.auth.policy import can_act_for, can_manage_parcel, is_admin
from app.core.auth.schemas import VerifiedIdentity
from app.core.exceptions import Conflict, Forbidden, InternalError, NotFound
from app.modules.parcels.repository import ParcelsRepository
from app.shared.database.models import PaymentStatus
from app.shared.services.payment_intent_client import PaymentIntentClient
from .repository import PaymentsRepository
from .schemas import (
    PaymentCreate, PaymentOut, PaymentResponse, PaymentHistoryResponse, PaymentIntentResponse
)

logger = logging.getLogger(__name__)


class PaymentsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = PaymentsRepository(db)
        self.parcels = ParcelsRepository(db)

    async def record_payment(
        self,
        payment_data: PaymentCreate,
        identity: VerifiedIdentity,
        role: Optional[str]
    ) -> PaymentResponse:
        """
        Record a completed payment

        Flipping the parcel to `paid` and appending the ledger entry commit
        together, so a payment record never exists for an unpaid parcel. The
        parcel row stays locked until commit. Only the sender or an admin may
        pay for a parcel, and non-admins pay as themselves.
        """
        data = payment_data.model_dump()
        data["email"] = data["email"].lower()

        if not can_act_for(identity.email, role, data["email"]):
            raise Forbidden("Cannot record a payment for another payer")

        try:
            with transaction(self.db):
                parcel = self.parcels.get_for_update(payment_data.parcel_id)
                if not parcel:
                    raise NotFound("Parcel not found")
                if not can_manage_parcel(identity.email, role, parcel):
                    raise Forbidden("Not allowed to pay for this parcel")
                if parcel.payment_status == PaymentStatus.PAID.value:
                    raise Conflict("Parcel is already paid")
                if self.repository.transaction_exists(payment_data.transaction_id):
                    raise Conflict("Transaction already recorded")

                self.parcels.mark_paid(parcel)
                payment = self.repository.append(data)
        except IntegrityError:
            raise Conflict("Transaction already recorded")
        except SQLAlchemyError as e:
            logger.error(f"Error recording payment for parcel {payment_data.parcel_id}: {e}")
            raise InternalError("Failed to record payment")

        logger.info(
            f"Payment {payment.transaction_id} of {payment.amount} recorded for parcel {payment.parcel_id}"
        )
        return PaymentResponse(
            message="Payment recorded",
            payment=PaymentOut.model_validate(payment),
            parcel_id=parcel.id,
            payment_status=parcel.payment_status
        )

    async def get_history(
        self,
        identity: VerifiedIdentity,
        role: Optional[str],
        email: Optional[str] = None
    ) -> PaymentHistoryResponse:
        if not can_act_for(identity.email, role, email):
            raise Forbidden("Cannot read another user's payments")

        payer = email if is_admin(role) else identity.email
        payments = self.repository.list(payer)
        return PaymentHistoryResponse(
            message=f"{len(payments)} payments",
            payments=[PaymentOut.model_validate(p) for p in payments],
            count=len(payments)
        )


async def create_payment_intent(client: PaymentIntentClient, amount_in_cents: int) -> PaymentIntentResponse:
    result = await client.create_payment_intent(amount_in_cents)
    client_secret = result.get("client_secret")
    if not client_secret:
        logger.error(f"Payment intent {result.get('id')} came back without a client secret")
        raise InternalError("Payment provider returned no client secret")
    return PaymentIntentResponse(client_secret=client_secret)
