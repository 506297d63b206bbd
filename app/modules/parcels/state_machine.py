# app/modules/parcels/state_machine.py
from typing import Dict, FrozenSet

from app.shared.database.models import DeliveryStatus, TERMINAL_DELIVERY_STATUSES

PENDING = DeliveryStatus.PENDING.value
RIDER_ASSIGNED = DeliveryStatus.RIDER_ASSIGNED.value
IN_TRANSIT = DeliveryStatus.IN_TRANSIT.value
DELIVERED = DeliveryStatus.DELIVERED.value
SERVICE_CENTER_DELIVERED = DeliveryStatus.SERVICE_CENTER_DELIVERED.value

DELIVERY_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    PENDING: frozenset({RIDER_ASSIGNED}),
    # A rider may hand an assignment back before pickup
    RIDER_ASSIGNED: frozenset({IN_TRANSIT, PENDING}),
    IN_TRANSIT: frozenset({DELIVERED, SERVICE_CENTER_DELIVERED}),
    DELIVERED: frozenset(),
    SERVICE_CENTER_DELIVERED: frozenset(),
}

# rider_assigned is only reachable through the assignment operation
ASSIGNMENT_ONLY = frozenset({RIDER_ASSIGNED})


def can_transition(current: str, target: str) -> bool:
    return target in DELIVERY_TRANSITIONS.get(current, frozenset())


def is_terminal(status: str) -> bool:
    return status in TERMINAL_DELIVERY_STATUSES


def releases_rider(current: str, target: str) -> bool:
    """Leaving the rider's hands frees the rider for the next assignment"""
    return is_terminal(target) or (current == RIDER_ASSIGNED and target == PENDING)
