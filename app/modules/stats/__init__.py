# app/modules/stats/__init__.py
"""
Stats module - figures computed on read from parcel records

- Per-user / per-rider counts and rider earnings
- Admin breakdown of parcels by delivery status

Architecture:
- router.py: /stats endpoints
- service.py: scoping and access rules
- repository.py: parcel queries and aggregation
- calculator.py: earnings rule
- schemas.py: response models
"""

from .router import router
from .service import StatsService
from .repository import StatsRepository

__all__ = [
    "router",
    "StatsService",
    "StatsRepository"
]
