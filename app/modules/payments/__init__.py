# app/modules/payments/__init__.py
"""
Payments module - payment ledger and payment intents

- Record a completed payment (parcel -> paid + ledger entry, one transaction)
- Payment history
- Payment intent creation with the external payment provider

Architecture:
- router.py: /payments and /create-payment-intent endpoints
- service.py: payment rules
- repository.py: ledger access
- schemas.py: request/response models
"""

from .router import router, intent_router
from .service import PaymentsService
from .repository import PaymentsRepository

__all__ = [
    "router",
    "intent_router",
    "PaymentsService",
    "PaymentsRepository"
]
