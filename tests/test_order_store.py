"""SQLAlchemy order store and exception recorder tests."""

from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from status_service.db.base import Base
from status_service.domain.exceptions import StorageFailure
from status_service.domain.ports import DeliveryExceptionRecord, Mismatch, Missing, Updated
from status_service.domain.status import ExceptionType, Status
from status_service.models import DeliveryException, Order, User
from status_service.services.order_store import SqlExceptionRecorder, SqlOrderStore

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def _session_with_order(status: str = "pending") -> tuple[Session, int]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(bind=engine)
    session = Session(engine)
    vendor = User(username="vendor", password_hash="hash", role="VENDOR", is_active=True)
    customer = User(username="customer", password_hash="hash", role="CUSTOMER", is_active=True)
    session.add_all([vendor, customer])
    session.flush()
    order = Order(customer_id=customer.id, vendor_id=vendor.id, status=status)
    session.add(order)
    session.commit()
    return session, order.id


def test_get_status_and_exists() -> None:
    session, order_id = _session_with_order("preparing")
    store = SqlOrderStore(session)

    assert store.get_status(order_id) is Status.PREPARING
    assert store.exists(order_id)
    assert store.get_status(order_id + 1) is None
    assert not store.exists(order_id + 1)


def test_compare_and_set_updates_status_and_timestamps() -> None:
    session, order_id = _session_with_order()
    store = SqlOrderStore(session)

    with store.atomic():
        result = store.compare_and_set_status(
            order_id, Status.PENDING, Status.ACCEPTED, {"status_updated_at": NOW, "accepted_at": NOW}
        )

    assert isinstance(result, Updated)
    assert result.order.order_id == order_id
    assert result.order.status is Status.ACCEPTED
    session.expire_all()
    order = session.get(Order, order_id)
    assert order.status == "accepted"
    assert order.accepted_at is not None
    assert order.status_updated_at is not None


def test_compare_and_set_reports_mismatch_and_missing() -> None:
    session, order_id = _session_with_order("accepted")
    store = SqlOrderStore(session)

    mismatch = store.compare_and_set_status(order_id, Status.PENDING, Status.REJECTED, {})
    missing = store.compare_and_set_status(order_id + 100, Status.PENDING, Status.REJECTED, {})

    assert mismatch == Mismatch(actual=Status.ACCEPTED)
    assert missing == Missing()
    session.expire_all()
    assert session.get(Order, order_id).status == "accepted"


def test_compare_and_set_refuses_non_status_columns() -> None:
    session, order_id = _session_with_order()
    store = SqlOrderStore(session)

    with pytest.raises(ValueError, match="Not a status timestamp column"):
        store.compare_and_set_status(order_id, Status.PENDING, Status.ACCEPTED, {"vendor_id": NOW})


def test_atomic_rolls_back_status_and_exception_together() -> None:
    session, order_id = _session_with_order()
    store = SqlOrderStore(session)
    recorder = SqlExceptionRecorder(session)

    with pytest.raises(RuntimeError):
        with store.atomic():
            store.compare_and_set_status(order_id, Status.PENDING, Status.REJECTED, {"rejected_at": NOW})
            recorder.insert(
                DeliveryExceptionRecord(order_id=order_id, exception_type=ExceptionType.REJECTED, message="boom")
            )
            raise RuntimeError("simulated failure after both writes")

    session.expire_all()
    assert session.get(Order, order_id).status == "pending"
    assert session.query(DeliveryException).count() == 0


def test_recorder_insert_and_list_for_order() -> None:
    session, order_id = _session_with_order()
    recorder = SqlExceptionRecorder(session)
    store = SqlOrderStore(session)

    with store.atomic():
        first = recorder.insert(
            DeliveryExceptionRecord(order_id=order_id, exception_type=ExceptionType.REJECTED, message="first")
        )
        recorder.insert(
            DeliveryExceptionRecord(order_id=order_id, exception_type=ExceptionType.OTHER, message="second")
        )

    records = recorder.list_for_order(order_id)

    assert first.id is not None
    assert [record.message for record in records] == ["first", "second"]
    assert records[0].exception_type is ExceptionType.REJECTED
    assert records[0].is_resolved is False
    assert recorder.list_for_order(order_id + 1) == []


def test_database_errors_surface_as_storage_failure() -> None:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    session = Session(engine)
    store = SqlOrderStore(session)

    with pytest.raises(StorageFailure):
        store.get_status(1)
