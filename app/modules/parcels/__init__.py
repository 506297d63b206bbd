# app/modules/parcels/__init__.py
"""
Parcels module - shipment records and their delivery lifecycle

- Book, list, read and delete parcels
- Delivery status transitions (pending -> rider_assigned -> in_transit -> delivered)
- Rider cash-out of delivered parcels

Architecture:
- router.py: parcel endpoints
- service.py: business rules
- repository.py: data access
- state_machine.py: allowed delivery transitions
- schemas.py: request/response models
"""

from .router import router
from .service import ParcelsService
from .repository import ParcelsRepository

__all__ = [
    "router",
    "ParcelsService",
    "ParcelsRepository"
]
