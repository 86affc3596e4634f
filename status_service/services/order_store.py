"""SQLAlchemy-backed order store and exception recorder.

Both share one ``Session``; ``SqlOrderStore.atomic`` commits or rolls back the
status write together with any exception inserted by the recorder.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from status_service.domain.exceptions import StorageFailure
from status_service.domain.outcomes import OrderSnapshot
from status_service.domain.ports import CompareAndSetResult, DeliveryExceptionRecord, Mismatch, Missing, Updated
from status_service.domain.status import ExceptionType, Status, parse_status
from status_service.models import DeliveryException, Order

logger = logging.getLogger(__name__)

STATUS_TIMESTAMP_COLUMNS: frozenset[str] = frozenset(
    {
        "status_updated_at",
        "accepted_at",
        "rejected_at",
        "preparing_at",
        "estimated_ready_at",
        "given_to_courier_at",
        "in_transit_at",
        "delivered_at",
    }
)


class SqlOrderStore:
    """Reads and conditionally updates order status rows."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def get_status(self, order_id: int) -> Status | None:
        try:
            raw = self._db.scalar(select(Order.status).where(Order.id == order_id))
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Could not read status of order {order_id}") from exc
        return None if raw is None else parse_status(raw)

    def exists(self, order_id: int) -> bool:
        try:
            found = self._db.scalar(select(Order.id).where(Order.id == order_id))
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Could not look up order {order_id}") from exc
        return found is not None

    def compare_and_set_status(
        self,
        order_id: int,
        expected: Status,
        new: Status,
        timestamps: dict[str, datetime],
    ) -> CompareAndSetResult:
        """Write ``new`` only if the row still holds ``expected``."""
        unknown = set(timestamps) - STATUS_TIMESTAMP_COLUMNS
        if unknown:
            raise ValueError(f"Not a status timestamp column: {sorted(unknown)}")

        try:
            result = self._db.execute(
                update(Order)
                .where(Order.id == order_id, Order.status == expected.value)
                .values(status=new.value, **timestamps)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 1:
                row = self._db.execute(
                    select(Order.id, Order.status, Order.status_updated_at).where(Order.id == order_id)
                ).one()
                return Updated(
                    order=OrderSnapshot(order_id=row.id, status=parse_status(row.status), status_updated_at=row.status_updated_at)
                )
            actual = self._db.scalar(select(Order.status).where(Order.id == order_id))
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Could not update status of order {order_id}") from exc

        if actual is None:
            return Missing()
        return Mismatch(actual=parse_status(actual))

    @contextmanager
    def atomic(self) -> Iterator[None]:
        try:
            yield
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("[STATUS] unit of work failed; rolled back")
            raise StorageFailure("Status update could not be committed") from exc
        except Exception:
            self._db.rollback()
            raise


class SqlExceptionRecorder:
    """Persists and lists delivery exceptions."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def insert(self, record: DeliveryExceptionRecord) -> DeliveryExceptionRecord:
        row = DeliveryException(
            order_id=record.order_id,
            exception_type=record.exception_type.value,
            message=record.message,
            is_resolved=record.is_resolved,
        )
        try:
            self._db.add(row)
            self._db.flush()
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Could not record delivery exception for order {record.order_id}") from exc
        return _to_record(row)

    def list_for_order(self, order_id: int) -> list[DeliveryExceptionRecord]:
        try:
            rows = self._db.scalars(
                select(DeliveryException)
                .where(DeliveryException.order_id == order_id)
                .order_by(DeliveryException.id.asc())
            ).all()
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Could not list delivery exceptions for order {order_id}") from exc
        return [_to_record(row) for row in rows]


def _to_record(row: DeliveryException) -> DeliveryExceptionRecord:
    return DeliveryExceptionRecord(
        id=row.id,
        order_id=row.order_id,
        exception_type=ExceptionType(row.exception_type),
        message=row.message,
        is_resolved=row.is_resolved,
        created_at=row.created_at,
    )
