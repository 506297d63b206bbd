"""Pytest configuration for the parcel delivery API tests."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PAYMENT_SECRET_KEY"] = "sk_test_dummy"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.config.database import build_engine, get_db
from app.core.auth.dependencies import get_identity_verifier
from app.core.auth.schemas import VerifiedIdentity
from app.core.auth.service import TokenVerificationError
from app.main import app
from app.shared.database.models import (
    Base, User, RiderApplication, Parcel, ApplicationStatus, WorkStatus
)
from app.shared.services.payment_intent_client import get_payment_intent_client


ADMIN_EMAIL = "admin@example.com"
USER_EMAIL = "sender@example.com"
OTHER_EMAIL = "other@example.com"
RIDER_EMAIL = "rider@example.com"


class FakeVerifier:
    """Accepts `valid:<email>` tokens, rejects anything else."""

    async def verify(self, token):
        if not token.startswith("valid:"):
            raise TokenVerificationError("bad signature")
        email = token[len("valid:"):].lower()
        return VerifiedIdentity(email=email, uid=email, name=email.split("@")[0])


class FakePaymentIntentClient:
    def __init__(self):
        self.calls = []

    async def create_payment_intent(self, amount_in_cents):
        self.calls.append(amount_in_cents)
        return {"id": "pi_test_1", "client_secret": "pi_test_1_secret_abc"}


def auth(email):
    return {"Authorization": f"Bearer valid:{email}"}


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    """Session used by tests to seed and inspect the store."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def payment_client():
    return FakePaymentIntentClient()


@pytest.fixture
def client(session_factory, payment_client):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_verifier] = lambda: FakeVerifier()
    app.dependency_overrides[get_payment_intent_client] = lambda: payment_client
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(db, email, role="user"):
    user = User(email=email, name=email.split("@")[0], role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_rider(db, email=RIDER_EMAIL, status=ApplicationStatus.APPROVED.value,
               work_status=WorkStatus.AVAILABLE.value, region="Dhaka", district="Mirpur"):
    rider = RiderApplication(
        name="Rider One",
        email=email,
        phone="01700000000",
        national_id="NID-1",
        region=region,
        district=district,
        bike_brand="Honda",
        bike_registration="DHA-123",
        status=status,
        work_status=work_status,
    )
    db.add(rider)
    db.commit()
    db.refresh(rider)
    return rider


def make_parcel(db, created_by=USER_EMAIL, sender_region="Dhaka", receiver_region="Dhaka",
                total_cost="100", delivery_status="pending", payment_status="unpaid",
                rider=None, is_cashed_out=False, tracking_id=None):
    parcel = Parcel(
        tracking_id=tracking_id or f"PCL-TEST-{db.query(Parcel).count() + 1:04d}",
        parcel_type="document",
        title="Contract papers",
        created_by=created_by,
        sender_name="Sender",
        sender_contact="01800000000",
        sender_region=sender_region,
        receiver_name="Receiver",
        receiver_contact="01900000000",
        receiver_region=receiver_region,
        total_cost=Decimal(total_cost),
        delivery_status=delivery_status,
        payment_status=payment_status,
        is_cashed_out=is_cashed_out,
    )
    if rider is not None:
        parcel.assigned_rider_id = rider.id
        parcel.assigned_rider_name = rider.name
        parcel.assigned_rider_email = rider.email
    db.add(parcel)
    db.commit()
    db.refresh(parcel)
    return parcel


def reload(db, obj):
    """Fresh copy of a row after the API changed it."""
    db.expire_all()
    return db.get(type(obj), obj.id)


@pytest.fixture
def admin(db):
    return make_user(db, ADMIN_EMAIL, role="admin")


@pytest.fixture
def sender(db):
    return make_user(db, USER_EMAIL)


@pytest.fixture
def rider_user(db):
    return make_user(db, RIDER_EMAIL, role="rider")


@pytest.fixture
def rider(db):
    return make_rider(db)
