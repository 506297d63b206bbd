# app/modules/users/service.py
import logging
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import transaction
from app.core.auth.policy import can_act_for
from app.core.auth.schemas import VerifiedIdentity
from app.core.exceptions import Conflict, Forbidden, InternalError, NotFound, ValidationError
from app.shared.database.models import User
from .repository import UsersRepository
from .schemas import (
    UserUpsertRequest, UserUpsertResponse, UserOut, UserRoleResponse, UserSearchResponse
)

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10


class UsersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = UsersRepository(db)

    async def upsert_user(self, identity: VerifiedIdentity, user_data: UserUpsertRequest) -> UserUpsertResponse:
        """Create the caller's account on first login, refresh last_login_at afterwards"""
        try:
            with transaction(self.db):
                user = self.repository.get_by_email(identity.email)
                if user:
                    self.repository.touch_login(user)
                    inserted = False
                else:
                    user = self.repository.create(
                        email=identity.email,
                        name=user_data.name or identity.name,
                        photo_url=user_data.photo_url
                    )
                    inserted = True
        except IntegrityError:
            # Concurrent first login for the same email
            raise Conflict("User already exists")
        except SQLAlchemyError as e:
            logger.error(f"Error upserting user {identity.email}: {e}")
            raise InternalError("Failed to save user")

        if inserted:
            logger.info(f"User registered: {user.email}")

        return UserUpsertResponse(
            message="User created" if inserted else "User already exists",
            inserted=inserted,
            user=UserOut.model_validate(user)
        )

    async def get_role(self, email: str, caller: VerifiedIdentity, caller_role: Optional[str] = None) -> UserRoleResponse:
        if not can_act_for(caller.email, caller_role, email):
            raise Forbidden("Cannot read another user's role")

        user = self.repository.get_by_email(email)
        if not user:
            raise NotFound("User not found")

        return UserRoleResponse(email=user.email, role=user.role)

    async def search_users(self, email_fragment: str) -> UserSearchResponse:
        if not email_fragment or not email_fragment.strip():
            raise ValidationError("Query parameter 'email' is required")

        users = self.repository.search_by_email(email_fragment, SEARCH_LIMIT)
        return UserSearchResponse(
            message=f"{len(users)} users found",
            users=[UserOut.model_validate(u) for u in users],
            count=len(users)
        )

    async def update_role(self, user_id: int, role: str, admin: User) -> UserOut:
        try:
            with transaction(self.db):
                user = self.repository.get_by_id(user_id)
                if not user:
                    raise NotFound("User not found")
                previous = user.role
                self.repository.set_role(user, role)
        except SQLAlchemyError as e:
            logger.error(f"Error updating role of user {user_id}: {e}")
            raise InternalError("Failed to update role")

        logger.info(f"Role of {user.email} changed {previous} -> {role} by {admin.email}")
        return UserOut.model_validate(user)
