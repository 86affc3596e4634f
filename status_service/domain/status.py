"""Order status state machine.

Each named transition has exactly one required predecessor and one resulting
status. The machine is a DAG: the only branch is ``accept``/``reject`` out of
``PENDING`` and both ``REJECTED`` and ``DELIVERED`` are terminal.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Status(str, Enum):
    """Operational state of a delivery order."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    PREPARING = "preparing"
    GIVEN_TO_COURIER = "given_to_courier"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"

    def __str__(self) -> str:
        return self.value


class ExceptionType(str, Enum):
    """Kinds of delivery exception that can be recorded against an order."""

    REJECTED = "rejected"
    LATE_DELIVERY = "late_delivery"
    DAMAGED_ORDER = "damaged_order"
    DELIVERY_UNSUCCESSFUL = "delivery_unsuccessful"
    OTHER = "other"


@dataclass(frozen=True)
class Transition:
    """A named status change with its single predecessor."""

    name: str
    action: str
    required_previous: Status
    new_status: Status
    timestamp_field: str


ACCEPT = Transition("accept", "updateToAccepted", Status.PENDING, Status.ACCEPTED, "accepted_at")
REJECT = Transition("reject", "updateToRejected", Status.PENDING, Status.REJECTED, "rejected_at")
PREPARE = Transition("prepare", "updateToPreparing", Status.ACCEPTED, Status.PREPARING, "preparing_at")
GIVE_TO_COURIER = Transition(
    "give_to_courier", "updateToGivenToCourier", Status.PREPARING, Status.GIVEN_TO_COURIER, "given_to_courier_at"
)
IN_TRANSIT = Transition("in_transit", "updateToInTransit", Status.GIVEN_TO_COURIER, Status.IN_TRANSIT, "in_transit_at")
DELIVER = Transition("deliver", "updateToDelivered", Status.IN_TRANSIT, Status.DELIVERED, "delivered_at")

TRANSITIONS: dict[str, Transition] = {
    transition.name: transition
    for transition in (ACCEPT, REJECT, PREPARE, GIVE_TO_COURIER, IN_TRANSIT, DELIVER)
}

QUERY_STATUS_ACTION: str = "getStatus"
QUERY_EXCEPTIONS_ACTION: str = "getDeliveryExceptions"

ALLOWED_TRANSITIONS: dict[Status, set[Status]] = {status: set() for status in Status}
for _transition in TRANSITIONS.values():
    ALLOWED_TRANSITIONS[_transition.required_previous].add(_transition.new_status)

TERMINAL_STATUSES: frozenset[Status] = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)

REJECTION_MESSAGE: str = "Order was rejected by the vendor"


def can_transition(current: Status, new: Status) -> bool:
    """Return whether an order can move from current to new status."""
    return new in ALLOWED_TRANSITIONS.get(current, set())


def parse_status(raw: str) -> Status:
    """Parse a stored or user-supplied status, accepting names or values."""
    candidate = str(raw or "").strip()
    try:
        return Status(candidate.lower())
    except ValueError:
        try:
            return Status[candidate.upper()]
        except KeyError as exc:
            raise ValueError(f"Unknown order status: {raw!r}") from exc
