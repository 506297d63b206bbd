# app/modules/users/router.py
from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import get_db
from app.core.auth.dependencies import get_admin_user, get_optional_user, get_verified_identity
from app.core.auth.schemas import VerifiedIdentity
from app.shared.database.models import User
from .service import UsersService
from .schemas import (
    UserUpsertRequest, UserUpsertResponse, UserOut, UserRoleResponse, RoleUpdateRequest, UserSearchResponse
)

router = APIRouter()


@router.post("", response_model=UserUpsertResponse)
async def upsert_user(
    response: Response,
    user_data: UserUpsertRequest = UserUpsertRequest(),
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Session = Depends(get_db)
):
    """
    Register the caller on first login

    - The account email is always the verified token email
    - New accounts get role `user` (201)
    - Known accounts only refresh `last_login_at` (200)
    """
    service = UsersService(db)
    result = await service.upsert_user(identity, user_data)
    response.status_code = status.HTTP_201_CREATED if result.inserted else status.HTTP_200_OK
    return result


@router.get("/search", response_model=UserSearchResponse)
async def search_users(
    email: str = Query(..., description="Email fragment to search for"),
    admin: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Admin: case-insensitive email search, at most 10 results"""
    service = UsersService(db)
    return await service.search_users(email)


@router.get("/{email}/role", response_model=UserRoleResponse)
async def get_user_role(
    email: str = Path(..., description="Account email"),
    identity: VerifiedIdentity = Depends(get_verified_identity),
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Stored role of an account (own account, or any account for admins)"""
    service = UsersService(db)
    return await service.get_role(email, identity, current_user.role if current_user else None)


@router.patch("/{user_id}/role", response_model=UserOut)
async def update_user_role(
    role_data: RoleUpdateRequest,
    user_id: int = Path(..., description="User ID"),
    admin: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Admin: promote or demote an account"""
    service = UsersService(db)
    return await service.update_role(user_id, role_data.role.value, admin)
