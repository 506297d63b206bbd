# app/modules/stats/repository.py
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List, Tuple

from app.shared.database.models import Parcel


class StatsRepository:
    def __init__(self, db: Session):
        self.db = db

    def parcels_sent_by(self, email: str) -> List[Parcel]:
        return self.db.query(Parcel).filter(Parcel.created_by == email.lower()).all()

    def parcels_assigned_to(self, rider_email: str) -> List[Parcel]:
        return self.db.query(Parcel).filter(Parcel.assigned_rider_email == rider_email.lower()).all()

    def count_by_delivery_status(self) -> List[Tuple[str, int]]:
        return self.db.query(
            Parcel.delivery_status, func.count(Parcel.id)
        ).group_by(Parcel.delivery_status).order_by(Parcel.delivery_status.asc()).all()
