# app/modules/payments/repository.py
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional

from app.shared.database.models import Payment, utcnow


class PaymentsRepository:
    def __init__(self, db: Session):
        self.db = db

    def append(self, payment_data: Dict[str, Any]) -> Payment:
        payment = Payment(**payment_data, paid_at=utcnow())
        self.db.add(payment)
        self.db.flush()
        return payment

    def transaction_exists(self, transaction_id: str) -> bool:
        return self.db.query(Payment.id).filter(Payment.transaction_id == transaction_id).first() is not None

    def list(self, email: Optional[str] = None) -> List[Payment]:
        """Payment history, latest first"""
        query = self.db.query(Payment)
        if email:
            query = query.filter(Payment.email == email.lower())
        return query.order_by(Payment.paid_at.desc(), Payment.id.desc()).all()
