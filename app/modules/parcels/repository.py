# app/modules/parcels/repository.py
import secrets
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional

from app.shared.database.models import Parcel, DeliveryStatus, PaymentStatus, utcnow


class ParcelsRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, parcel_id: int) -> Optional[Parcel]:
        return self.db.query(Parcel).filter(Parcel.id == parcel_id).first()

    def locked_query(self, parcel_id: int):
        return self.db.query(Parcel).filter(Parcel.id == parcel_id).with_for_update()

    def get_for_update(self, parcel_id: int) -> Optional[Parcel]:
        """Read a parcel and hold its row lock until the transaction ends"""
        return self.locked_query(parcel_id).first()

    def list(
        self,
        created_by: Optional[str] = None,
        delivery_status: Optional[str] = None,
        payment_status: Optional[str] = None
    ) -> List[Parcel]:
        """Parcels matching the filters, latest first"""
        query = self.db.query(Parcel)
        if created_by:
            query = query.filter(Parcel.created_by == created_by.lower())
        if delivery_status:
            query = query.filter(Parcel.delivery_status == delivery_status)
        if payment_status:
            query = query.filter(Parcel.payment_status == payment_status)
        return query.order_by(Parcel.id.desc()).all()

    def list_for_rider(self, rider_email: str, statuses: List[str]) -> List[Parcel]:
        return self.db.query(Parcel).filter(
            Parcel.assigned_rider_email == rider_email.lower(),
            Parcel.delivery_status.in_(statuses)
        ).order_by(Parcel.id.desc()).all()

    def tracking_id_exists(self, tracking_id: str) -> bool:
        return self.db.query(Parcel.id).filter(Parcel.tracking_id == tracking_id).first() is not None

    def generate_tracking_id(self) -> str:
        while True:
            tracking_id = f"PCL-{utcnow():%Y%m%d}-{secrets.token_hex(3).upper()}"
            if not self.tracking_id_exists(tracking_id):
                return tracking_id

    def create(self, parcel_data: Dict[str, Any], created_by: str, tracking_id: str) -> Parcel:
        parcel = Parcel(
            **parcel_data,
            tracking_id=tracking_id,
            created_by=created_by.lower(),
            delivery_status=DeliveryStatus.PENDING.value,
            payment_status=PaymentStatus.UNPAID.value,
            is_cashed_out=False
        )
        self.db.add(parcel)
        self.db.flush()
        return parcel

    def delete(self, parcel: Parcel) -> None:
        self.db.delete(parcel)
        self.db.flush()

    def set_delivery_status(self, parcel: Parcel, status: str) -> Parcel:
        now = utcnow()
        parcel.delivery_status = status
        if status == DeliveryStatus.IN_TRANSIT.value:
            parcel.picked_at = now
        elif parcel.is_delivered:
            parcel.delivered_at = now
        self.db.flush()
        return parcel

    def assign_rider(self, parcel: Parcel, rider_id: int, rider_name: str, rider_email: str) -> Parcel:
        parcel.assigned_rider_id = rider_id
        parcel.assigned_rider_name = rider_name
        parcel.assigned_rider_email = rider_email.lower()
        parcel.assigned_at = utcnow()
        parcel.delivery_status = DeliveryStatus.RIDER_ASSIGNED.value
        self.db.flush()
        return parcel

    def clear_assignment(self, parcel: Parcel) -> Parcel:
        parcel.assigned_rider_id = None
        parcel.assigned_rider_name = None
        parcel.assigned_rider_email = None
        parcel.assigned_at = None
        self.db.flush()
        return parcel

    def mark_paid(self, parcel: Parcel) -> Parcel:
        parcel.payment_status = PaymentStatus.PAID.value
        parcel.paid_at = utcnow()
        self.db.flush()
        return parcel

    def mark_cashed_out(self, parcel: Parcel) -> Parcel:
        parcel.is_cashed_out = True
        parcel.cashed_out_at = utcnow()
        self.db.flush()
        return parcel
