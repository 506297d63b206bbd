# app/modules/rider_applications/service.py
import logging
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config.database import transaction
from app.core.auth.schemas import VerifiedIdentity
from app.core.exceptions import Conflict, InternalError, NotFound
from app.modules.users.repository import UsersRepository
from app.shared.database.models import ApplicationStatus, User, UserRole, WorkStatus
from .repository import ACTIVE_APPLICATION_STATUSES, RiderApplicationsRepository
from .schemas import (
    RiderApplicationCreate, RiderApplicationOut, RiderApplicationResponse,
    RiderApplicationListResponse, ApplicationReviewResponse
)

logger = logging.getLogger(__name__)


class RiderApplicationsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = RiderApplicationsRepository(db)
        self.users = UsersRepository(db)

    async def submit_application(
        self,
        application_data: RiderApplicationCreate,
        identity: VerifiedIdentity
    ) -> RiderApplicationResponse:
        """One pending or approved application per email"""
        try:
            with transaction(self.db):
                existing = self.repository.find_active_by_email(identity.email)
                if existing:
                    logger.warning(
                        f"Duplicate rider application from {identity.email} "
                        f"(application {existing.id} is {existing.status})"
                    )
                    raise Conflict(f"An application for this email is already {existing.status}")
                application = self.repository.create(application_data.model_dump(), identity.email)
        except SQLAlchemyError as e:
            logger.error(f"Error saving rider application for {identity.email}: {e}")
            raise InternalError("Failed to submit application")

        logger.info(f"Rider application {application.id} submitted by {identity.email}")
        return RiderApplicationResponse(
            message="Application submitted",
            application=RiderApplicationOut.model_validate(application)
        )

    async def list_applications(self, status: Optional[str] = None) -> RiderApplicationListResponse:
        applications = self.repository.list(status)
        return RiderApplicationListResponse(
            message=f"{len(applications)} applications",
            applications=[RiderApplicationOut.model_validate(a) for a in applications],
            count=len(applications)
        )

    async def get_application(self, application_id: int) -> RiderApplicationResponse:
        application = self.repository.get(application_id)
        if not application:
            raise NotFound("Application not found")
        return RiderApplicationResponse(application=RiderApplicationOut.model_validate(application))

    def _sync_user_role(self, email: str, approved: bool) -> Optional[User]:
        """Approval makes the applicant a rider; anything else takes the rider role away"""
        user = self.users.get_by_email(email)
        if not user:
            return None
        if approved and user.role == UserRole.USER.value:
            self.users.set_role(user, UserRole.RIDER.value)
        elif not approved and user.role == UserRole.RIDER.value:
            self.users.set_role(user, UserRole.USER.value)
        return user

    async def review_application(self, application_id: int, status: str, admin: User) -> ApplicationReviewResponse:
        """
        Admin decision on an application

        The application status, its work status and the applicant's role are
        written in one transaction.
        """
        try:
            with transaction(self.db):
                application = self.repository.get(application_id)
                if not application:
                    raise NotFound("Application not found")

                previous = application.status
                approved = status == ApplicationStatus.APPROVED.value

                if status in ACTIVE_APPLICATION_STATUSES:
                    other = self.repository.find_active_by_email(application.email, exclude_id=application.id)
                    if other:
                        raise Conflict(f"Application {other.id} for this email is already {other.status}")

                if approved:
                    work_status = application.work_status or WorkStatus.AVAILABLE.value
                else:
                    if application.work_status == WorkStatus.IN_DELIVERY.value:
                        raise Conflict("Rider is in a delivery and cannot be deactivated")
                    work_status = None

                self.repository.set_status(application, status, work_status)
                user = self._sync_user_role(application.email, approved)
        except SQLAlchemyError as e:
            logger.error(f"Error reviewing application {application_id}: {e}")
            raise InternalError("Failed to update application")

        logger.info(f"Application {application_id}: {previous} -> {status} by {admin.email}")
        return ApplicationReviewResponse(
            message=f"Application {status}",
            application=RiderApplicationOut.model_validate(application),
            previous_status=previous,
            user_role=user.role if user else None
        )
