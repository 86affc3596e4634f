"""Action payloads carried by the preparing, given-to-courier and delivered transitions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class PreparingPayload:
    estimated_ready_at: datetime


@dataclass(frozen=True)
class GivenToCourierPayload:
    handed_over_at: datetime | None = None


@dataclass(frozen=True)
class DeliveredPayload:
    delivered_at: datetime


def _is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None


def validate_preparing(payload: PreparingPayload, *, now: datetime, max_minutes: int) -> list[str]:
    """Return validation errors for a preparing payload; empty means valid."""
    errors: list[str] = []
    ready_at = payload.estimated_ready_at
    if not _is_aware(ready_at):
        errors.append("estimated_ready_at must include a timezone offset")
        return errors
    if ready_at < now:
        errors.append("estimated_ready_at must not be in the past")
    elif ready_at > now + timedelta(minutes=max_minutes):
        errors.append(f"estimated_ready_at must be within {max_minutes} minutes")
    return errors


def validate_given_to_courier(
    payload: GivenToCourierPayload | None, *, now: datetime, clock_skew_seconds: int
) -> list[str]:
    """Return validation errors for an optional hand-over time; no time means the server clock is used."""
    if payload is None or payload.handed_over_at is None:
        return []
    handed_over_at = payload.handed_over_at
    if not _is_aware(handed_over_at):
        return ["handed_over_at must include a timezone offset"]
    if handed_over_at > now + timedelta(seconds=clock_skew_seconds):
        return ["handed_over_at must not be in the future"]
    return []


def validate_delivered(payload: DeliveredPayload, *, now: datetime, clock_skew_seconds: int) -> list[str]:
    """Return validation errors for a delivered payload; empty means valid."""
    delivered_at = payload.delivered_at
    if not _is_aware(delivered_at):
        return ["delivered_at must include a timezone offset"]
    if delivered_at > now + timedelta(seconds=clock_skew_seconds):
        return ["delivered_at must not be in the future"]
    return []
