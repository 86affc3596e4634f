"""Order status endpoints.

One PUT entry point per transition plus a GET for the current status.
Mutating success answers with an empty 200.
"""

from fastapi import APIRouter, Body, Depends, Response
from fastapi.responses import PlainTextResponse

from status_service.api.v1.deps import get_engine, raise_for_outcome
from status_service.core.security import get_requester_id
from status_service.domain.outcomes import StatusFound, Success
from status_service.schemas.status import DeliveredRequest, GivenToCourierRequest, PreparingRequest
from status_service.services.transition_engine import StatusTransitionEngine

router: APIRouter = APIRouter()


def _respond(outcome: object) -> Response:
    if isinstance(outcome, Success):
        return Response(status_code=200)
    raise_for_outcome(outcome)
    raise RuntimeError(f"Unhandled outcome {outcome!r}")


@router.put("/{order_id}/accepted", response_class=Response)
def update_to_accepted(
    order_id: int,
    requester_id: int = Depends(get_requester_id),
    engine: StatusTransitionEngine = Depends(get_engine),
) -> Response:
    """Vendor accepts a pending order."""
    return _respond(engine.accept(order_id, requester_id))


@router.put("/{order_id}/rejected", response_class=Response)
def update_to_rejected(
    order_id: int,
    requester_id: int = Depends(get_requester_id),
    engine: StatusTransitionEngine = Depends(get_engine),
) -> Response:
    """Vendor rejects a pending order; a delivery exception is recorded with it."""
    return _respond(engine.reject(order_id, requester_id))


@router.put("/{order_id}/preparing", response_class=Response)
def update_to_preparing(
    order_id: int,
    payload: PreparingRequest,
    requester_id: int = Depends(get_requester_id),
    engine: StatusTransitionEngine = Depends(get_engine),
) -> Response:
    return _respond(engine.prepare(order_id, requester_id, payload.to_payload()))


@router.put("/{order_id}/giventocourier", response_class=Response)
def update_to_given_to_courier(
    order_id: int,
    payload: GivenToCourierRequest | None = Body(default=None),
    requester_id: int = Depends(get_requester_id),
    engine: StatusTransitionEngine = Depends(get_engine),
) -> Response:
    return _respond(
        engine.give_to_courier(order_id, requester_id, payload.to_payload() if payload is not None else None)
    )


@router.put("/{order_id}/intransit", response_class=Response)
def update_to_in_transit(
    order_id: int,
    requester_id: int = Depends(get_requester_id),
    engine: StatusTransitionEngine = Depends(get_engine),
) -> Response:
    """Courier picks the order up."""
    return _respond(engine.in_transit(order_id, requester_id))


@router.put("/{order_id}/delivered", response_class=Response)
def update_to_delivered(
    order_id: int,
    payload: DeliveredRequest,
    requester_id: int = Depends(get_requester_id),
    engine: StatusTransitionEngine = Depends(get_engine),
) -> Response:
    return _respond(engine.deliver(order_id, requester_id, payload.to_payload()))


@router.get("/{order_id}", response_class=PlainTextResponse)
def get_status(
    order_id: int,
    requester_id: int = Depends(get_requester_id),
    engine: StatusTransitionEngine = Depends(get_engine),
) -> PlainTextResponse:
    """Return the current status value as plain text."""
    outcome = engine.query_status(order_id, requester_id)
    if isinstance(outcome, StatusFound):
        return PlainTextResponse(outcome.status.value)
    raise_for_outcome(outcome)
    raise RuntimeError(f"Unhandled outcome {outcome!r}")
