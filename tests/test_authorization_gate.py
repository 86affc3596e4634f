"""Role and ownership authorization gate tests."""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from status_service.db.base import Base
from status_service.domain.ports import Allowed, Denied
from status_service.domain.roles import Role
from status_service.models import Order, User
from status_service.services.authorization import RoleAuthorizationGate


def _seed() -> tuple[Session, dict[str, int]]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(bind=engine)
    session = Session(engine)
    users = {
        "vendor": User(username="vendor", password_hash="hash", role="VENDOR", is_active=True),
        "other_vendor": User(username="other-vendor", password_hash="hash", role="VENDOR", is_active=True),
        "courier": User(username="courier", password_hash="hash", role="COURIER", is_active=True),
        "customer": User(username="customer", password_hash="hash", role="CUSTOMER", is_active=True),
        "admin": User(username="admin", password_hash="hash", role="ADMIN", is_active=True),
        "inactive": User(username="inactive", password_hash="hash", role="VENDOR", is_active=False),
    }
    session.add_all(users.values())
    session.flush()
    order = Order(
        customer_id=users["customer"].id,
        vendor_id=users["vendor"].id,
        courier_id=users["courier"].id,
        status="pending",
    )
    session.add(order)
    session.commit()
    ids = {name: user.id for name, user in users.items()}
    ids["order"] = order.id
    return session, ids


def test_owning_vendor_is_allowed() -> None:
    session, ids = _seed()
    gate = RoleAuthorizationGate(session)

    assert gate.check(ids["vendor"], "updateToAccepted", ids["order"]) == Allowed(role=Role.VENDOR)


def test_other_vendor_is_denied() -> None:
    session, ids = _seed()
    gate = RoleAuthorizationGate(session)

    assert isinstance(gate.check(ids["other_vendor"], "updateToAccepted", ids["order"]), Denied)


def test_wrong_role_is_denied_for_existing_and_missing_orders() -> None:
    session, ids = _seed()
    gate = RoleAuthorizationGate(session)

    on_existing = gate.check(ids["vendor"], "updateToDelivered", ids["order"])
    on_missing = gate.check(ids["vendor"], "updateToDelivered", 999)

    assert isinstance(on_existing, Denied)
    assert on_existing == on_missing


def test_missing_order_is_denied_like_a_foreign_one() -> None:
    session, ids = _seed()
    gate = RoleAuthorizationGate(session)

    missing = gate.check(ids["vendor"], "updateToAccepted", 999)
    foreign = gate.check(ids["other_vendor"], "updateToAccepted", ids["order"])

    assert isinstance(missing, Denied)
    assert missing == foreign
    assert gate.check(ids["admin"], "updateToAccepted", 999) == Allowed(role=Role.ADMIN)


def test_order_parties_may_query_status() -> None:
    session, ids = _seed()
    gate = RoleAuthorizationGate(session)

    for name, role in (("customer", Role.CUSTOMER), ("vendor", Role.VENDOR), ("courier", Role.COURIER)):
        assert gate.check(ids[name], "getStatus", ids["order"]) == Allowed(role=role)
    assert isinstance(gate.check(ids["other_vendor"], "getStatus", ids["order"]), Denied)


def test_admin_unknown_and_inactive_users() -> None:
    session, ids = _seed()
    gate = RoleAuthorizationGate(session)

    assert gate.check(ids["admin"], "updateToDelivered", ids["order"]) == Allowed(role=Role.ADMIN)
    assert isinstance(gate.check(12345, "getStatus", ids["order"]), Denied)
    assert isinstance(gate.check(ids["inactive"], "updateToAccepted", ids["order"]), Denied)
    assert isinstance(gate.check(ids["admin"], "deleteOrder", ids["order"]), Denied)
