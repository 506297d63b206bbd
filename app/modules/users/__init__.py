# app/modules/users/__init__.py
"""
Users module - platform accounts and roles

- Register / refresh an account on login
- Role lookup for the caller
- Admin search and role management

Architecture:
- router.py: user endpoints
- service.py: business rules
- repository.py: data access
- schemas.py: request/response models
"""

from .router import router
from .service import UsersService
from .repository import UsersRepository

__all__ = [
    "router",
    "UsersService",
    "UsersRepository"
]
