"""Result variants returned by the status transition engine.

Callers branch on the variant type; none of these are raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

from status_service.domain.status import Status


@dataclass(frozen=True)
class OrderSnapshot:
    """Order state as reported by the store right after a write."""

    order_id: int
    status: Status
    status_updated_at: datetime | None = None


@dataclass(frozen=True)
class Success:
    order: OrderSnapshot


@dataclass(frozen=True)
class NotFound:
    order_id: int


@dataclass(frozen=True)
class InvalidPreviousState:
    order_id: int
    expected: Status
    actual: Status


@dataclass(frozen=True)
class Unauthorized:
    reason: str


@dataclass(frozen=True)
class ValidationFailed:
    order_id: int
    errors: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class StatusFound:
    """Read-only answer of the status query."""

    order_id: int
    status: Status


TransitionOutcome = Union[Success, NotFound, InvalidPreviousState, Unauthorized, ValidationFailed]
StatusQueryOutcome = Union[StatusFound, NotFound, Unauthorized]


@dataclass(frozen=True)
class ExceptionsFound:
    """Delivery exceptions recorded for an order, oldest first."""

    order_id: int
    records: tuple = ()


ExceptionsQueryOutcome = Union[ExceptionsFound, NotFound, Unauthorized]
