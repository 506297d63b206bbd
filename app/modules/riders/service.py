# app/modules/riders/service.py
import logging
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config.database import transaction
from app.config.settings import settings
from app.core.exceptions import Conflict, InternalError, NotFound
from app.modules.parcels.repository import ParcelsRepository
from app.modules.parcels.schemas import ParcelOut
from app.modules.parcels.state_machine import IN_TRANSIT, PENDING, RIDER_ASSIGNED
from app.modules.stats.calculator import parcel_earning, summarize_parcels
from app.shared.database.models import ApplicationStatus, TERMINAL_DELIVERY_STATUSES, User
from .repository import RidersRepository
from .schemas import (
    RiderOut, RiderListResponse, AssignRiderResponse, RiderDeliveriesResponse,
    CompletedDelivery, CompletedDeliveriesResponse
)

logger = logging.getLogger(__name__)


class RidersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = RidersRepository(db)
        self.parcels = ParcelsRepository(db)

    async def list_riders(
        self,
        region: Optional[str] = None,
        district: Optional[str] = None,
        work_status: Optional[str] = None
    ) -> RiderListResponse:
        riders = self.repository.list_approved(region, district, work_status)
        return RiderListResponse(
            message=f"{len(riders)} approved riders",
            riders=[RiderOut.model_validate(r) for r in riders],
            count=len(riders)
        )

    async def assign_rider(self, parcel_id: int, rider_id: int, admin: User) -> AssignRiderResponse:
        """
        pending -> rider_assigned

        The parcel update and the rider claim commit together; if the rider is
        already in a delivery nothing is written.
        """
        try:
            with transaction(self.db):
                parcel = self.parcels.get_for_update(parcel_id)
                if not parcel:
                    raise NotFound("Parcel not found")
                if parcel.delivery_status != PENDING:
                    raise Conflict(f"Parcel is '{parcel.delivery_status}', only pending parcels can be assigned")

                rider = self.repository.get(rider_id)
                if not rider:
                    raise NotFound("Rider not found")
                if rider.status != ApplicationStatus.APPROVED.value:
                    raise Conflict("Rider is not approved")

                if not self.repository.claim_for_delivery(rider_id):
                    logger.warning(f"Rider {rider_id} busy, assignment of parcel {parcel_id} rejected")
                    raise Conflict("Rider is already in a delivery")

                self.parcels.assign_rider(parcel, rider.id, rider.name, rider.email)
        except SQLAlchemyError as e:
            logger.error(f"Error assigning rider {rider_id} to parcel {parcel_id}: {e}")
            raise InternalError("Failed to assign rider")

        self.db.refresh(rider)
        logger.info(f"Parcel {parcel_id} assigned to rider {rider_id} by {admin.email}")
        return AssignRiderResponse(
            message="Rider assigned",
            parcel=ParcelOut.model_validate(parcel),
            rider=RiderOut.model_validate(rider)
        )

    async def get_pending_deliveries(self, rider_user: User) -> RiderDeliveriesResponse:
        parcels = self.parcels.list_for_rider(rider_user.email, [RIDER_ASSIGNED, IN_TRANSIT])
        return RiderDeliveriesResponse(
            message=f"{len(parcels)} deliveries in progress",
            parcels=[ParcelOut.model_validate(p) for p in parcels],
            count=len(parcels)
        )

    async def get_completed_deliveries(self, rider_user: User) -> CompletedDeliveriesResponse:
        parcels = self.parcels.list_for_rider(rider_user.email, list(TERMINAL_DELIVERY_STATUSES))
        deliveries = [
            CompletedDelivery(
                **ParcelOut.model_validate(p).model_dump(),
                earning=float(parcel_earning(p, settings.same_region_rate, settings.cross_region_rate))
            )
            for p in parcels
        ]
        summary = summarize_parcels(parcels, settings.same_region_rate, settings.cross_region_rate)

        return CompletedDeliveriesResponse(
            message=f"{len(deliveries)} completed deliveries",
            deliveries=deliveries,
            count=len(deliveries),
            total_earnings=summary["earnings"],
            cashed_out=summary["cashed_out"]
        )

