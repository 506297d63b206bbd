# app/modules/tracking/repository.py
from sqlalchemy.orm import Session
from typing import Any, Dict, List

from app.shared.database.models import TrackingEvent, utcnow


class TrackingRepository:
    def __init__(self, db: Session):
        self.db = db

    def append(self, event_data: Dict[str, Any]) -> TrackingEvent:
        event = TrackingEvent(**event_data, timestamp=utcnow())
        self.db.add(event)
        self.db.flush()
        return event

    def get_by_tracking_id(self, tracking_id: str) -> List[TrackingEvent]:
        """Newest first; insertion order breaks timestamp ties"""
        return self.db.query(TrackingEvent).filter(
            TrackingEvent.tracking_id == tracking_id
        ).order_by(TrackingEvent.timestamp.desc(), TrackingEvent.id.desc()).all()
