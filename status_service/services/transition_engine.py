"""Order status transition engine.

Every mutating transition runs the same sequence:

1. ask the authorization gate; a denial ends the call before any store read,
2. read the current status (``NotFound`` when the order is absent),
3. require the transition's single predecessor status,
4. validate the action payload, if the transition has one,
5. compare-and-set the new status inside the store's unit of work, together
   with any derived record (the rejection exception).

A compare-and-set mismatch at step 5 means another request won the race and is
reported as ``InvalidPreviousState``; an order that disappeared in between is
reported as ``NotFound``. Only ``StorageFailure`` is raised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from status_service.core.config import settings
from status_service.domain.outcomes import (
    ExceptionsFound,
    ExceptionsQueryOutcome,
    InvalidPreviousState,
    NotFound,
    OrderSnapshot,
    StatusFound,
    StatusQueryOutcome,
    Success,
    TransitionOutcome,
    Unauthorized,
    ValidationFailed,
)
from status_service.domain.payloads import (
    DeliveredPayload,
    GivenToCourierPayload,
    PreparingPayload,
    validate_delivered,
    validate_given_to_courier,
    validate_preparing,
)
from status_service.domain.ports import (
    AuthorizationGate,
    Denied,
    DeliveryExceptionRecord,
    ExceptionRecorder,
    Mismatch,
    Missing,
    OrderStore,
    Updated,
)
from status_service.domain.status import (
    ACCEPT,
    DELIVER,
    GIVE_TO_COURIER,
    IN_TRANSIT,
    PREPARE,
    QUERY_EXCEPTIONS_ACTION,
    QUERY_STATUS_ACTION,
    REJECT,
    REJECTION_MESSAGE,
    ExceptionType,
    Transition,
    can_transition,
)

logger = logging.getLogger(__name__)

Validator = Callable[[datetime], list[str]]
SuccessHook = Callable[[OrderSnapshot], None]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StatusTransitionEngine:
    """Guards order status changes behind the gate, the state machine and the store.

    Collaborators are injected so the same engine runs against SQLAlchemy in
    the API and against in-memory fakes in tests. The engine keeps no state
    between calls.
    """

    def __init__(
        self,
        gate: AuthorizationGate,
        store: OrderStore,
        recorder: ExceptionRecorder,
        *,
        clock: Callable[[], datetime] = utc_now,
        max_preparation_minutes: int | None = None,
        clock_skew_seconds: int | None = None,
    ) -> None:
        self._gate = gate
        self._store = store
        self._recorder = recorder
        self._clock = clock
        self._max_preparation_minutes = (
            settings.max_preparation_minutes if max_preparation_minutes is None else max_preparation_minutes
        )
        self._clock_skew_seconds = settings.clock_skew_seconds if clock_skew_seconds is None else clock_skew_seconds

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def accept(self, order_id: int, requester_id: int) -> TransitionOutcome:
        return self._apply(ACCEPT, order_id, requester_id)

    def reject(self, order_id: int, requester_id: int) -> TransitionOutcome:
        """Move PENDING to REJECTED and record the rejection exception in the same unit of work."""
        return self._apply(REJECT, order_id, requester_id, on_success=self._record_rejection)

    def prepare(self, order_id: int, requester_id: int, payload: PreparingPayload) -> TransitionOutcome:
        def _validate(now: datetime) -> list[str]:
            return validate_preparing(payload, now=now, max_minutes=self._max_preparation_minutes)

        return self._apply(
            PREPARE,
            order_id,
            requester_id,
            validate=_validate,
            extra_timestamps={"estimated_ready_at": payload.estimated_ready_at},
        )

    def give_to_courier(
        self,
        order_id: int,
        requester_id: int,
        payload: GivenToCourierPayload | None = None,
    ) -> TransitionOutcome:
        extra: dict[str, datetime] = {}
        if payload is not None and payload.handed_over_at is not None:
            extra[GIVE_TO_COURIER.timestamp_field] = payload.handed_over_at

        def _validate(now: datetime) -> list[str]:
            return validate_given_to_courier(payload, now=now, clock_skew_seconds=self._clock_skew_seconds)

        return self._apply(
            GIVE_TO_COURIER,
            order_id,
            requester_id,
            validate=_validate,
            extra_timestamps=extra,
        )

    def in_transit(self, order_id: int, requester_id: int) -> TransitionOutcome:
        return self._apply(IN_TRANSIT, order_id, requester_id)

    def deliver(self, order_id: int, requester_id: int, payload: DeliveredPayload) -> TransitionOutcome:
        """Move IN_TRANSIT to DELIVERED; existence is checked on its own before the status."""

        def _validate(now: datetime) -> list[str]:
            return validate_delivered(payload, now=now, clock_skew_seconds=self._clock_skew_seconds)

        return self._apply(
            DELIVER,
            order_id,
            requester_id,
            validate=_validate,
            extra_timestamps={DELIVER.timestamp_field: payload.delivered_at},
            require_exists=True,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def query_status(self, order_id: int, requester_id: int) -> StatusQueryOutcome:
        decision = self._gate.check(requester_id, QUERY_STATUS_ACTION, order_id)
        if isinstance(decision, Denied):
            logger.warning("[STATUS] order_id=%s query denied: %s", order_id, decision.reason)
            return Unauthorized(reason=decision.reason)

        current = self._store.get_status(order_id)
        if current is None:
            return NotFound(order_id=order_id)
        return StatusFound(order_id=order_id, status=current)

    def list_exceptions(self, order_id: int, requester_id: int) -> ExceptionsQueryOutcome:
        decision = self._gate.check(requester_id, QUERY_EXCEPTIONS_ACTION, order_id)
        if isinstance(decision, Denied):
            logger.warning("[STATUS] order_id=%s exception lookup denied: %s", order_id, decision.reason)
            return Unauthorized(reason=decision.reason)

        if not self._store.exists(order_id):
            return NotFound(order_id=order_id)
        return ExceptionsFound(order_id=order_id, records=tuple(self._recorder.list_for_order(order_id)))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply(
        self,
        transition: Transition,
        order_id: int,
        requester_id: int,
        *,
        validate: Validator | None = None,
        extra_timestamps: dict[str, datetime] | None = None,
        require_exists: bool = False,
        on_success: SuccessHook | None = None,
    ) -> TransitionOutcome:
        decision = self._gate.check(requester_id, transition.action, order_id)
        if isinstance(decision, Denied):
            logger.warning(
                "[STATUS] order_id=%s transition=%s denied: %s", order_id, transition.name, decision.reason
            )
            return Unauthorized(reason=decision.reason)

        if require_exists and not self._store.exists(order_id):
            return self._finish(transition, NotFound(order_id=order_id))

        current = self._store.get_status(order_id)
        if current is None:
            return self._finish(transition, NotFound(order_id=order_id))
        if not can_transition(current, transition.new_status):
            return self._finish(
                transition,
                InvalidPreviousState(order_id=order_id, expected=transition.required_previous, actual=current),
            )

        now = self._clock()
        if validate is not None:
            errors = validate(now)
            if errors:
                return self._finish(transition, ValidationFailed(order_id=order_id, errors=tuple(errors)))

        timestamps: dict[str, datetime] = {"status_updated_at": now, transition.timestamp_field: now}
        timestamps.update(extra_timestamps or {})

        with self._store.atomic():
            result = self._store.compare_and_set_status(
                order_id, transition.required_previous, transition.new_status, timestamps
            )
            if isinstance(result, Updated) and on_success is not None:
                on_success(result.order)

        if isinstance(result, Mismatch):
            outcome: TransitionOutcome = InvalidPreviousState(
                order_id=order_id, expected=transition.required_previous, actual=result.actual
            )
        elif isinstance(result, Missing):
            outcome = NotFound(order_id=order_id)
        else:
            outcome = Success(order=result.order)
        return self._finish(transition, outcome)

    def _record_rejection(self, order: OrderSnapshot) -> None:
        self._recorder.insert(
            DeliveryExceptionRecord(
                order_id=order.order_id,
                exception_type=ExceptionType.REJECTED,
                message=REJECTION_MESSAGE,
                is_resolved=False,
            )
        )

    @staticmethod
    def _finish(transition: Transition, outcome: TransitionOutcome) -> TransitionOutcome:
        if isinstance(outcome, Success):
            logger.info(
                "[STATUS] order_id=%s transition=%s outcome=success status=%s",
                outcome.order.order_id,
                transition.name,
                outcome.order.status,
            )
        else:
            logger.warning(
                "[STATUS] order_id=%s transition=%s outcome=%s",
                getattr(outcome, "order_id", None),
                transition.name,
                type(outcome).__name__,
            )
        return outcome
