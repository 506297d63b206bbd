# app/modules/parcels/service.py
import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.config.database import transaction
from app.core.auth.policy import (
    can_act_for, can_manage_parcel, can_update_delivery, can_view_parcel, is_admin, is_assigned_rider
)
from app.core.auth.schemas import VerifiedIdentity
from app.core.exceptions import Conflict, Forbidden, InternalError, NotFound
from app.modules.riders.repository import RidersRepository
from app.shared.database.models import Parcel, PaymentStatus, User
from app.shared.schemas.common import DeleteResponse
from . import state_machine
from .repository import ParcelsRepository
from .schemas import (
    ParcelCreate, ParcelOut, ParcelResponse, ParcelListResponse, DeliveryStatusResponse
)

logger = logging.getLogger(__name__)


class ParcelsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ParcelsRepository(db)
        self.riders = RidersRepository(db)

    def _get_or_404(self, parcel_id: int, lock: bool = False) -> Parcel:
        parcel = self.repository.get_for_update(parcel_id) if lock else self.repository.get(parcel_id)
        if not parcel:
            raise NotFound("Parcel not found")
        return parcel

    async def list_parcels(
        self,
        identity: VerifiedIdentity,
        role: Optional[str],
        email: Optional[str] = None,
        delivery_status: Optional[str] = None,
        payment_status: Optional[str] = None
    ) -> ParcelListResponse:
        """Admins see every parcel; everybody else only their own bookings"""
        if not can_act_for(identity.email, role, email):
            raise Forbidden("Cannot list another user's parcels")

        created_by = email if is_admin(role) else identity.email
        parcels = self.repository.list(created_by, delivery_status, payment_status)

        return ParcelListResponse(
            message=f"{len(parcels)} parcels",
            parcels=[ParcelOut.model_validate(p) for p in parcels],
            count=len(parcels)
        )

    async def get_parcel(self, parcel_id: int, identity: VerifiedIdentity, role: Optional[str]) -> ParcelResponse:
        parcel = self._get_or_404(parcel_id)
        if not can_view_parcel(identity.email, role, parcel):
            raise Forbidden("Not allowed to view this parcel")
        return ParcelResponse(parcel=ParcelOut.model_validate(parcel))

    async def create_parcel(self, parcel_data: ParcelCreate, identity: VerifiedIdentity) -> ParcelResponse:
        data = parcel_data.model_dump(exclude={"tracking_id"})

        try:
            with transaction(self.db):
                tracking_id = parcel_data.tracking_id or self.repository.generate_tracking_id()
                if parcel_data.tracking_id and self.repository.tracking_id_exists(tracking_id):
                    raise Conflict(f"Tracking ID {tracking_id} already in use")
                parcel = self.repository.create(data, identity.email, tracking_id)
        except IntegrityError:
            raise Conflict("Tracking ID already in use")
        except SQLAlchemyError as e:
            logger.error(f"Error creating parcel for {identity.email}: {e}")
            raise InternalError("Failed to add parcel")

        logger.info(f"Parcel {parcel.id} ({parcel.tracking_id}) booked by {identity.email}")
        return ParcelResponse(message="Parcel created", parcel=ParcelOut.model_validate(parcel))

    async def delete_parcel(self, parcel_id: int, identity: VerifiedIdentity, role: Optional[str]) -> DeleteResponse:
        try:
            with transaction(self.db):
                parcel = self._get_or_404(parcel_id, lock=True)
                if not can_manage_parcel(identity.email, role, parcel):
                    raise Forbidden("Not allowed to delete this parcel")
                if parcel.payment_status == PaymentStatus.PAID.value:
                    raise Conflict("Paid parcels cannot be deleted")
                # Once dispatched the parcel holds a rider
                if parcel.delivery_status != state_machine.PENDING:
                    raise Conflict(f"Parcel is '{parcel.delivery_status}', only pending parcels can be deleted")
                self.repository.delete(parcel)
        except SQLAlchemyError as e:
            logger.error(f"Error deleting parcel {parcel_id}: {e}")
            raise InternalError("Failed to delete parcel")

        logger.info(f"Parcel {parcel_id} deleted by {identity.email}")
        return DeleteResponse(message="Parcel deleted successfully", deleted_id=parcel_id)

    async def update_delivery_status(self, parcel_id: int, target: str, current_user: User) -> DeliveryStatusResponse:
        """
        Move a parcel along the delivery lifecycle

        Reaching a terminal status, or handing the assignment back, frees the
        attached rider in the same transaction.
        """
        rider_released = False
        try:
            with transaction(self.db):
                parcel = self._get_or_404(parcel_id, lock=True)
                if not can_update_delivery(current_user.email, current_user.role, parcel):
                    raise Forbidden("Only the assigned rider or an admin can update this parcel")

                current = parcel.delivery_status
                if target in state_machine.ASSIGNMENT_ONLY:
                    raise Conflict("Riders are assigned through /assign-rider")
                if not state_machine.can_transition(current, target):
                    raise Conflict(f"Cannot move parcel from '{current}' to '{target}'")

                rider_id = parcel.assigned_rider_id
                self.repository.set_delivery_status(parcel, target)

                if rider_id is not None and state_machine.releases_rider(current, target):
                    rider_released = self.riders.release(rider_id)
                    if target == state_machine.PENDING:
                        self.repository.clear_assignment(parcel)
        except SQLAlchemyError as e:
            logger.error(f"Error updating status of parcel {parcel_id}: {e}")
            raise InternalError("Failed to update parcel status")

        logger.info(
            f"Parcel {parcel_id}: {current} -> {target} by {current_user.email}"
            f"{' (rider released)' if rider_released else ''}"
        )
        return DeliveryStatusResponse(
            message="Parcel status updated",
            parcel=ParcelOut.model_validate(parcel),
            previous_status=current,
            rider_released=rider_released
        )

    async def cash_out(self, parcel_id: int, rider_user: User) -> ParcelResponse:
        try:
            with transaction(self.db):
                parcel = self._get_or_404(parcel_id, lock=True)
                if not is_assigned_rider(rider_user.email, parcel):
                    raise Forbidden("Only the assigned rider can cash out this parcel")
                if not parcel.is_delivered:
                    raise Conflict("Only delivered parcels can be cashed out")
                if parcel.is_cashed_out:
                    raise Conflict("Parcel already cashed out")
                self.repository.mark_cashed_out(parcel)
        except SQLAlchemyError as e:
            logger.error(f"Error cashing out parcel {parcel_id}: {e}")
            raise InternalError("Failed to cash out parcel")

        logger.info(f"Parcel {parcel_id} cashed out by {rider_user.email}")
        return ParcelResponse(message="Parcel cashed out", parcel=ParcelOut.model_validate(parcel))
