import logging
from functools import lru_cache
from typing import List, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.policy import is_allowed
from app.core.auth.schemas import VerifiedIdentity
from app.core.auth.service import (
    IdentityVerifier, IdentityProviderUnavailable, TokenVerificationError, build_identity_verifier
)
from app.core.exceptions import Forbidden, InternalError, Unauthenticated
from app.shared.database.models import User, UserRole

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@lru_cache
def get_identity_verifier() -> IdentityVerifier:
    return build_identity_verifier()


async def get_verified_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: IdentityVerifier = Depends(get_identity_verifier)
) -> VerifiedIdentity:
    """Authentication gate: verify the bearer token with the identity provider"""

    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Missing bearer token")

    try:
        return await verifier.verify(credentials.credentials)
    except TokenVerificationError:
        raise Forbidden("Token rejected by identity provider")
    except IdentityProviderUnavailable as e:
        raise InternalError(f"Identity provider unavailable: {e}")


def get_optional_user(
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Stored account of the caller, if one was ever registered"""
    return db.query(User).filter(User.email == identity.email).first()


def require_roles(allowed_roles: List[str]):
    """Factory for a dependency that requires one of the given stored roles"""
    def role_checker(current_user: Optional[User] = Depends(get_optional_user)) -> User:
        role = current_user.role if current_user else None
        if not is_allowed(role, allowed_roles):
            logger.warning(
                f"Denied role '{role}' for {current_user.email if current_user else 'unregistered caller'}; "
                f"allowed: {allowed_roles}"
            )
            raise Forbidden(f"Role '{role}' not authorized. Allowed roles: {allowed_roles}")
        return current_user
    return role_checker


def get_admin_user(current_user: User = Depends(require_roles([UserRole.ADMIN.value]))) -> User:
    return current_user


def get_rider_user(current_user: User = Depends(require_roles([UserRole.RIDER.value]))) -> User:
    return current_user


def get_rider_or_admin_user(
    current_user: User = Depends(require_roles([UserRole.RIDER.value, UserRole.ADMIN.value]))
) -> User:
    return current_user
