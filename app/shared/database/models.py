# app/shared/database/models.py
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Text,
    Numeric, ForeignKey,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =====================================================
# STATUSES
# =====================================================

class UserRole(str, Enum):
    USER = "user"
    RIDER = "rider"
    ADMIN = "admin"


class DeliveryStatus(str, Enum):
    PENDING = "pending"
    RIDER_ASSIGNED = "rider_assigned"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    SERVICE_CENTER_DELIVERED = "service_center_delivered"


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    INACTIVE = "inactive"


class WorkStatus(str, Enum):
    AVAILABLE = "available"
    IN_DELIVERY = "in-delivery"


TERMINAL_DELIVERY_STATUSES = (
    DeliveryStatus.DELIVERED.value,
    DeliveryStatus.SERVICE_CENTER_DELIVERED.value,
)


# =====================================================
# TIMESTAMP MIXIN
# =====================================================
class TimestampMixin:
    """Adds created_at and updated_at columns"""
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


# =====================================================
# COLLECTIONS
# =====================================================

class User(Base, TimestampMixin):
    """Platform account, unique by email"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255))
    photo_url = Column(Text)
    role = Column(String(20), nullable=False, default=UserRole.USER.value)
    last_login_at = Column(DateTime(timezone=True), default=utcnow)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"


class RiderApplication(Base, TimestampMixin):
    """Rider application and, once approved, the rider roster entry"""
    __tablename__ = "rider_applications"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    age = Column(Integer)
    phone = Column(String(50), nullable=False)
    national_id = Column(String(100), nullable=False)
    region = Column(String(100), nullable=False)
    district = Column(String(100), nullable=False, index=True)
    bike_brand = Column(String(100), nullable=False)
    bike_registration = Column(String(100), nullable=False)
    identity_document_url = Column(Text)

    status = Column(String(20), nullable=False, default=ApplicationStatus.PENDING.value, index=True)
    work_status = Column(String(20))
    reviewed_at = Column(DateTime(timezone=True))

    parcels = relationship("Parcel", back_populates="assigned_rider")

    def __repr__(self):
        return f"<RiderApplication(id={self.id}, email='{self.email}', status='{self.status}')>"


class Parcel(Base, TimestampMixin):
    """Shipment tracked through the delivery lifecycle"""
    __tablename__ = "parcels"

    id = Column(Integer, primary_key=True, index=True)
    tracking_id = Column(String(50), unique=True, nullable=False, index=True)
    parcel_type = Column(String(30), nullable=False)
    title = Column(String(255), nullable=False)
    weight = Column(Numeric(10, 2))

    # Sender
    created_by = Column(String(255), nullable=False, index=True)
    sender_name = Column(String(255), nullable=False)
    sender_contact = Column(String(50), nullable=False)
    sender_region = Column(String(100), nullable=False)
    sender_center = Column(String(100))
    sender_address = Column(Text)
    pickup_instruction = Column(Text)

    # Receiver
    receiver_name = Column(String(255), nullable=False)
    receiver_contact = Column(String(50), nullable=False)
    receiver_region = Column(String(100), nullable=False)
    receiver_center = Column(String(100))
    receiver_address = Column(Text)
    delivery_instruction = Column(Text)

    total_cost = Column(Numeric(10, 2), nullable=False)
    delivery_status = Column(String(30), nullable=False, default=DeliveryStatus.PENDING.value, index=True)
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.UNPAID.value, index=True)

    # Assignment
    assigned_rider_id = Column(Integer, ForeignKey("rider_applications.id"))
    assigned_rider_name = Column(String(255))
    assigned_rider_email = Column(String(255), index=True)

    is_cashed_out = Column(Boolean, nullable=False, default=False)

    paid_at = Column(DateTime(timezone=True))
    assigned_at = Column(DateTime(timezone=True))
    picked_at = Column(DateTime(timezone=True))
    delivered_at = Column(DateTime(timezone=True))
    cashed_out_at = Column(DateTime(timezone=True))

    assigned_rider = relationship("RiderApplication", back_populates="parcels")
    payments = relationship("Payment", back_populates="parcel")

    @property
    def is_delivered(self) -> bool:
        return self.delivery_status in TERMINAL_DELIVERY_STATUSES

    def __repr__(self):
        return f"<Parcel(id={self.id}, tracking_id='{self.tracking_id}', status='{self.delivery_status}')>"


class TrackingEvent(Base):
    """Append-only status/location observation"""
    __tablename__ = "tracking_events"

    id = Column(Integer, primary_key=True, index=True)
    tracking_id = Column(String(50), nullable=False, index=True)
    parcel_id = Column(Integer, ForeignKey("parcels.id", ondelete="SET NULL"))
    status = Column(String(100), nullable=False)
    location = Column(String(255), nullable=False)
    updated_by = Column(String(255), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class Payment(Base):
    """Append-only record of a completed payment"""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    parcel_id = Column(Integer, ForeignKey("parcels.id"), nullable=False, index=True)
    email = Column(String(255), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    transaction_id = Column(String(255), unique=True, nullable=False)
    payment_method = Column(String(50), nullable=False)
    paid_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    parcel = relationship("Parcel", back_populates="payments")
