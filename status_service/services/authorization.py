"""Role and ownership based authorization gate."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from status_service.domain.exceptions import StorageFailure
from status_service.domain.ports import Allowed, AuthorizationDecision, Denied
from status_service.domain.roles import ACTION_ROLES, Role, normalize_role, role_may_perform
from status_service.models import Order, User

logger = logging.getLogger(__name__)

OWNERSHIP_COLUMNS = {
    Role.CUSTOMER: Order.customer_id,
    Role.VENDOR: Order.vendor_id,
    Role.COURIER: Order.courier_id,
}


class RoleAuthorizationGate:
    """Decide whether a user may run an action against an order.

    Role is checked before the order is touched. Non-admins must own the
    order; a missing order is denied with the same reason as a foreign one so
    callers cannot learn which ids exist. Only the ownership column is read.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def check(self, requester_id: int, action: str, order_id: int) -> AuthorizationDecision:
        if action not in ACTION_ROLES:
            return Denied(reason=f"Unknown action {action}")

        try:
            user: User | None = self._db.get(User, requester_id)
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Could not load user {requester_id}") from exc
        if user is None or not user.is_active:
            return Denied(reason="Unknown or inactive user")

        try:
            role = normalize_role(user.role)
        except ValueError:
            logger.exception("[AUTH] Role misconfigured for user_id=%s", user.id)
            return Denied(reason="Invalid role")

        if not role_may_perform(role, action):
            return Denied(reason=f"Role {role.value} may not perform {action}")
        if role is Role.ADMIN:
            return Allowed(role=role)

        try:
            owner_id = self._db.execute(
                select(OWNERSHIP_COLUMNS[role]).where(Order.id == order_id)
            ).one_or_none()
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Could not check ownership of order {order_id}") from exc

        if owner_id is None or owner_id[0] != requester_id:
            return Denied(reason=f"Order does not belong to this {role.value.lower()}")
        return Allowed(role=role)
