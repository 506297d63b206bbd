# app/modules/riders/__init__.py
"""
Riders module - roster of approved riders and dispatch

- Approved rider listing for dispatch
- Rider assignment (pending -> rider_assigned, rider -> in-delivery)
- Rider views of in-progress and completed deliveries

Architecture:
- router.py: /riders endpoints and /assign-rider
- service.py: dispatch rules
- repository.py: roster access and work-status compare-and-set
- schemas.py: request/response models
"""

from .router import router, assignment_router
from .service import RidersService
from .repository import RidersRepository

__all__ = [
    "router",
    "assignment_router",
    "RidersService",
    "RidersRepository"
]
