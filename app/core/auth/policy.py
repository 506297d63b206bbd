"""
Authorization rules.

Pure functions over (identity, stored role, resource); they know nothing about
HTTP so the same rules back the FastAPI dependencies and the services.
"""
from typing import Any, Iterable, Optional

from app.shared.database.models import UserRole


def is_allowed(role: Optional[str], allowed_roles: Iterable[str]) -> bool:
    """A caller without a stored role is never allowed"""
    if role is None:
        return False
    return role in set(allowed_roles)


def is_admin(role: Optional[str]) -> bool:
    return role == UserRole.ADMIN.value


def can_act_for(email: str, role: Optional[str], target_email: Optional[str]) -> bool:
    """Admins may act for anyone; everybody else only for themselves"""
    if is_admin(role):
        return True
    return target_email is None or target_email.lower() == email.lower()


def is_parcel_owner(email: str, parcel: Any) -> bool:
    return (parcel.created_by or "").lower() == email.lower()


def is_assigned_rider(email: str, parcel: Any) -> bool:
    return (parcel.assigned_rider_email or "").lower() == email.lower()


def can_view_parcel(email: str, role: Optional[str], parcel: Any) -> bool:
    return is_admin(role) or is_parcel_owner(email, parcel) or is_assigned_rider(email, parcel)


def can_manage_parcel(email: str, role: Optional[str], parcel: Any) -> bool:
    return is_admin(role) or is_parcel_owner(email, parcel)


def can_update_delivery(email: str, role: Optional[str], parcel: Any) -> bool:
    if is_admin(role):
        return True
    return role == UserRole.RIDER.value and is_assigned_rider(email, parcel)
