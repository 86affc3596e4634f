"""Collaborator contracts consumed by the status transition engine.

The engine only talks to these protocols; SQL-backed and in-memory
implementations live in ``status_service.services``.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, Union

from status_service.domain.outcomes import OrderSnapshot
from status_service.domain.roles import Role
from status_service.domain.status import ExceptionType, Status


@dataclass(frozen=True)
class Allowed:
    role: Role


@dataclass(frozen=True)
class Denied:
    reason: str


AuthorizationDecision = Union[Allowed, Denied]


@dataclass(frozen=True)
class Updated:
    order: OrderSnapshot


@dataclass(frozen=True)
class Mismatch:
    actual: Status


@dataclass(frozen=True)
class Missing:
    pass


CompareAndSetResult = Union[Updated, Mismatch, Missing]


@dataclass(frozen=True)
class DeliveryExceptionRecord:
    """A delivery exception to persist, or one read back from storage."""

    order_id: int
    exception_type: ExceptionType
    message: str
    is_resolved: bool = False
    id: int | None = None
    created_at: datetime | None = None


class AuthorizationGate(Protocol):
    def check(self, requester_id: int, action: str, order_id: int) -> AuthorizationDecision:
        ...


class OrderStore(Protocol):
    def get_status(self, order_id: int) -> Status | None:
        ...

    def exists(self, order_id: int) -> bool:
        ...

    def compare_and_set_status(
        self,
        order_id: int,
        expected: Status,
        new: Status,
        timestamps: dict[str, datetime],
    ) -> CompareAndSetResult:
        ...

    def atomic(self) -> AbstractContextManager[None]:
        """Unit of work shared with the exception recorder."""
        ...


class ExceptionRecorder(Protocol):
    def insert(self, record: DeliveryExceptionRecord) -> DeliveryExceptionRecord:
        ...

    def list_for_order(self, order_id: int) -> list[DeliveryExceptionRecord]:
        ...
