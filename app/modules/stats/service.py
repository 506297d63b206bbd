# app/modules/stats/service.py
from typing import Optional
from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.auth.policy import can_act_for
from app.core.auth.schemas import VerifiedIdentity
from app.core.exceptions import Forbidden
from .calculator import summarize_parcels
from .repository import StatsRepository
from .schemas import StatsRole, StatsResponse, StatusCount, DeliveryStatusCountsResponse


class StatsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = StatsRepository(db)

    async def get_stats(
        self,
        role: StatsRole,
        identity: VerifiedIdentity,
        caller_role: Optional[str],
        email: Optional[str] = None
    ) -> StatsResponse:
        """Parcels sent by a user, or delivered by a rider, summarized"""
        target = (email or identity.email).lower()
        if not can_act_for(identity.email, caller_role, target):
            raise Forbidden("Cannot read another user's stats")

        if role == StatsRole.RIDER:
            parcels = self.repository.parcels_assigned_to(target)
        else:
            parcels = self.repository.parcels_sent_by(target)

        summary = summarize_parcels(parcels, settings.same_region_rate, settings.cross_region_rate)
        return StatsResponse(role=role.value, email=target, **summary)

    async def get_delivery_status_counts(self) -> DeliveryStatusCountsResponse:
        rows = self.repository.count_by_delivery_status()
        counts = [StatusCount(status=status, count=count) for status, count in rows]
        return DeliveryStatusCountsResponse(counts=counts, total=sum(c.count for c in counts))
