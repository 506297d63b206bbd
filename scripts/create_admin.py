"""
Bootstrap an admin account.

Roles are only changed by admins through the API, so the first admin has to
be granted from the command line:

    python -m scripts.create_admin ops@example.com --name "Operations"
"""
import argparse
import logging

from sqlalchemy.orm import Session

from app.config.database import SessionLocal, engine, transaction
from app.modules.users.repository import UsersRepository
from app.shared.database.models import Base, User, UserRole

logger = logging.getLogger(__name__)


def promote_to_admin(db: Session, email: str, name: str = None) -> User:
    """Create the account if needed and give it the admin role"""
    users = UsersRepository(db)
    with transaction(db):
        user = users.get_by_email(email)
        if not user:
            user = users.create(email=email, name=name, photo_url=None)
            logger.info(f"Created account {user.email}")
        users.set_role(user, UserRole.ADMIN.value)
    logger.info(f"{user.email} is now admin")
    return user


def main():
    parser = argparse.ArgumentParser(description="Grant the admin role to an account")
    parser.add_argument("email")
    parser.add_argument("--name", default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        promote_to_admin(db, args.email, args.name)
    finally:
        db.close()


if __name__ == "__main__":
    main()
