# app/modules/tracking/service.py
import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config.database import transaction
from app.core.exceptions import InternalError, NotFound
from app.modules.parcels.repository import ParcelsRepository
from .repository import TrackingRepository
from .schemas import TrackingEventCreate, TrackingEventOut, TrackingEventResponse, TrackingHistoryResponse

logger = logging.getLogger(__name__)


class TrackingService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = TrackingRepository(db)
        self.parcels = ParcelsRepository(db)

    async def add_event(self, event_data: TrackingEventCreate) -> TrackingEventResponse:
        try:
            with transaction(self.db):
                if event_data.parcel_id is not None and not self.parcels.get(event_data.parcel_id):
                    raise NotFound("Parcel not found")
                event = self.repository.append(event_data.model_dump())
        except SQLAlchemyError as e:
            logger.error(f"Error saving tracking event for {event_data.tracking_id}: {e}")
            raise InternalError("Failed to add tracking event")

        logger.info(f"Tracking {event.tracking_id}: '{event.status}' at {event.location}")
        return TrackingEventResponse(
            message="Tracking event added",
            event=TrackingEventOut.model_validate(event)
        )

    async def get_history(self, tracking_id: str) -> TrackingHistoryResponse:
        events = self.repository.get_by_tracking_id(tracking_id)
        if not events:
            raise NotFound(f"No tracking events for {tracking_id}")

        return TrackingHistoryResponse(
            tracking_id=tracking_id,
            events=[TrackingEventOut.model_validate(e) for e in events],
            count=len(events)
        )
