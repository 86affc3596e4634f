"""Requester roles and the roles each action name admits."""

from __future__ import annotations

from enum import Enum

from status_service.domain.status import QUERY_EXCEPTIONS_ACTION, QUERY_STATUS_ACTION, TRANSITIONS


class Role(str, Enum):
    CUSTOMER = "CUSTOMER"
    VENDOR = "VENDOR"
    COURIER = "COURIER"
    ADMIN = "ADMIN"


def normalize_role(value: str) -> Role:
    """Normalize role input to the canonical uppercase member."""
    normalized = str(value or "").strip().upper()
    try:
        return Role(normalized)
    except ValueError as exc:
        raise ValueError(f"Invalid role: {value}") from exc


_VENDOR_ONLY: frozenset[Role] = frozenset({Role.VENDOR})
_COURIER_ONLY: frozenset[Role] = frozenset({Role.COURIER})
_ORDER_PARTIES: frozenset[Role] = frozenset({Role.CUSTOMER, Role.VENDOR, Role.COURIER})

ACTION_ROLES: dict[str, frozenset[Role]] = {
    TRANSITIONS["accept"].action: _VENDOR_ONLY,
    TRANSITIONS["reject"].action: _VENDOR_ONLY,
    TRANSITIONS["prepare"].action: _VENDOR_ONLY,
    TRANSITIONS["give_to_courier"].action: _VENDOR_ONLY,
    TRANSITIONS["in_transit"].action: _COURIER_ONLY,
    TRANSITIONS["deliver"].action: _COURIER_ONLY,
    QUERY_STATUS_ACTION: _ORDER_PARTIES,
    QUERY_EXCEPTIONS_ACTION: _ORDER_PARTIES,
}


def role_may_perform(role: Role, action: str) -> bool:
    """Admins may do anything; everyone else needs the action's role."""
    if role is Role.ADMIN:
        return action in ACTION_ROLES
    return role in ACTION_ROLES.get(action, frozenset())
