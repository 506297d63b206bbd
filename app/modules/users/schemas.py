# app/modules/users/schemas.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.shared.database.models import UserRole
from app.shared.schemas.common import BaseResponse


class UserUpsertRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=255, description="Display name")
    photo_url: Optional[str] = Field(None, description="Avatar URL")


class UserOut(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserUpsertResponse(BaseResponse):
    inserted: bool
    user: UserOut


class UserRoleResponse(BaseModel):
    email: str
    role: str


class RoleUpdateRequest(BaseModel):
    role: UserRole = Field(..., description="New role: user, rider or admin")


class UserSearchResponse(BaseResponse):
    users: List[UserOut]
    count: int
