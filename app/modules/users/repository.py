# app/modules/users/repository.py
from sqlalchemy.orm import Session
from typing import List, Optional

from app.shared.database.models import User, UserRole, utcnow


class UsersRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.lower()).first()

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def create(self, email: str, name: Optional[str], photo_url: Optional[str]) -> User:
        now = utcnow()
        user = User(
            email=email.lower(),
            name=name,
            photo_url=photo_url,
            role=UserRole.USER.value,
            created_at=now,
            last_login_at=now
        )
        self.db.add(user)
        self.db.flush()
        return user

    def touch_login(self, user: User) -> User:
        user.last_login_at = utcnow()
        self.db.flush()
        return user

    def search_by_email(self, fragment: str, limit: int = 10) -> List[User]:
        """Case-insensitive substring match"""
        return self.db.query(User).filter(
            User.email.ilike(f"%{fragment.strip()}%")
        ).order_by(User.email.asc()).limit(limit).all()

    def set_role(self, user: User, role: str) -> User:
        user.role = role
        self.db.flush()
        return user
