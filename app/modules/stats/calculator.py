# app/modules/stats/calculator.py
"""
Rider earnings rule.

A delivered parcel pays the rider a share of its declared cost: the
same-region rate when sender and receiver share a region, the cross-region
rate otherwise.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable

from app.shared.database.models import TERMINAL_DELIVERY_STATUSES

CENT = Decimal("0.01")


def _to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    return value if isinstance(value, Decimal) else Decimal(str(value))


def earning_rate(sender_region: str, receiver_region: str, same_region_rate: float, cross_region_rate: float) -> Decimal:
    rate = same_region_rate if sender_region == receiver_region else cross_region_rate
    return _to_decimal(rate)


def parcel_earning(parcel: Any, same_region_rate: float, cross_region_rate: float) -> Decimal:
    """Earning for one parcel, regardless of its status"""
    rate = earning_rate(parcel.sender_region, parcel.receiver_region, same_region_rate, cross_region_rate)
    return (_to_decimal(parcel.total_cost) * rate).quantize(CENT, rounding=ROUND_HALF_UP)


def summarize_parcels(parcels: Iterable[Any], same_region_rate: float, cross_region_rate: float) -> Dict[str, Any]:
    total = 0
    delivered = 0
    earnings = Decimal("0")
    cashed_out = Decimal("0")

    for parcel in parcels:
        total += 1
        if parcel.delivery_status not in TERMINAL_DELIVERY_STATUSES:
            continue
        delivered += 1
        earning = parcel_earning(parcel, same_region_rate, cross_region_rate)
        earnings += earning
        if parcel.is_cashed_out:
            cashed_out += earning

    return {
        "total": total,
        "delivered": delivered,
        "pending": total - delivered,
        "earnings": float(earnings.quantize(CENT)),
        "cashed_out": float(cashed_out.quantize(CENT)),
    }
