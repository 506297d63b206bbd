# app/modules/rider_applications/__init__.py
"""
Rider applications module - onboarding of riders

- Submit an application (one active application per email)
- Admin review: approve, reject, deactivate
- Approval promotes the applicant's account to the rider role

Architecture:
- router.py: /riderApplications endpoints
- service.py: review rules
- repository.py: data access
- schemas.py: request/response models
"""

from .router import router
from .service import RiderApplicationsService
from .repository import RiderApplicationsRepository

__all__ = [
    "router",
    "RiderApplicationsService",
    "RiderApplicationsRepository"
]
