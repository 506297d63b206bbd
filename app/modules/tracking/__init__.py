# app/modules/tracking/__init__.py
"""
Tracking module - append-only log of parcel status/location events

Architecture:
- router.py: /tracking endpoints
- service.py: append / read rules
- repository.py: data access
- schemas.py: request/response models
"""

from .router import router
from .service import TrackingService
from .repository import TrackingRepository

__all__ = [
    "router",
    "TrackingService",
    "TrackingRepository"
]
