# app/modules/riders/repository.py
from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import List, Optional

from app.shared.database.models import RiderApplication, ApplicationStatus, WorkStatus


class RidersRepository:
    """Roster of approved riders and their live work status"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, rider_id: int) -> Optional[RiderApplication]:
        return self.db.query(RiderApplication).filter(RiderApplication.id == rider_id).first()

    def list_approved(
        self,
        region: Optional[str] = None,
        district: Optional[str] = None,
        work_status: Optional[str] = None
    ) -> List[RiderApplication]:
        query = self.db.query(RiderApplication).filter(
            RiderApplication.status == ApplicationStatus.APPROVED.value
        )
        if region:
            query = query.filter(RiderApplication.region == region)
        if district:
            query = query.filter(RiderApplication.district == district)
        if work_status:
            query = query.filter(RiderApplication.work_status == work_status)
        return query.order_by(RiderApplication.name.asc()).all()

    def claim_for_delivery(self, rider_id: int) -> bool:
        """
        Compare-and-set the rider to in-delivery.

        The availability check and the write are a single UPDATE, so two
        concurrent assignments for the same rider cannot both succeed.
        """
        updated = self.db.query(RiderApplication).filter(
            RiderApplication.id == rider_id,
            RiderApplication.status == ApplicationStatus.APPROVED.value,
            or_(
                RiderApplication.work_status.is_(None),
                RiderApplication.work_status != WorkStatus.IN_DELIVERY.value
            )
        ).update(
            {RiderApplication.work_status: WorkStatus.IN_DELIVERY.value},
            synchronize_session="fetch"
        )
        return updated == 1

    def release(self, rider_id: int) -> bool:
        updated = self.db.query(RiderApplication).filter(
            RiderApplication.id == rider_id,
            RiderApplication.work_status == WorkStatus.IN_DELIVERY.value
        ).update(
            {RiderApplication.work_status: WorkStatus.AVAILABLE.value},
            synchronize_session="fetch"
        )
        return updated == 1
