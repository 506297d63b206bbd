# app/modules/rider_applications/repository.py
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional

from app.shared.database.models import RiderApplication, ApplicationStatus, utcnow

ACTIVE_APPLICATION_STATUSES = (
    ApplicationStatus.PENDING.value,
    ApplicationStatus.APPROVED.value,
)


class RiderApplicationsRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, application_id: int) -> Optional[RiderApplication]:
        return self.db.query(RiderApplication).filter(RiderApplication.id == application_id).first()

    def find_active_by_email(self, email: str, exclude_id: Optional[int] = None) -> Optional[RiderApplication]:
        query = self.db.query(RiderApplication).filter(
            RiderApplication.email == email.lower(),
            RiderApplication.status.in_(ACTIVE_APPLICATION_STATUSES)
        )
        if exclude_id is not None:
            query = query.filter(RiderApplication.id != exclude_id)
        return query.first()

    def list(self, status: Optional[str] = None) -> List[RiderApplication]:
        query = self.db.query(RiderApplication)
        if status:
            query = query.filter(RiderApplication.status == status)
        return query.order_by(RiderApplication.id.desc()).all()

    def create(self, application_data: Dict[str, Any], email: str) -> RiderApplication:
        application = RiderApplication(
            **application_data,
            email=email.lower(),
            status=ApplicationStatus.PENDING.value,
            work_status=None
        )
        self.db.add(application)
        self.db.flush()
        return application

    def set_status(self, application: RiderApplication, status: str, work_status: Optional[str]) -> RiderApplication:
        application.status = status
        application.work_status = work_status
        application.reviewed_at = utcnow()
        self.db.flush()
        return application
