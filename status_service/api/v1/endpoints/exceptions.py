"""Delivery exception lookup endpoints."""

from fastapi import APIRouter, Depends

from status_service.api.v1.deps import get_engine, raise_for_outcome
from status_service.core.security import get_requester_id
from status_service.domain.outcomes import ExceptionsFound
from status_service.schemas.status import DeliveryExceptionResponse
from status_service.services.transition_engine import StatusTransitionEngine

router: APIRouter = APIRouter()


@router.get("/order/{order_id}", response_model=list[DeliveryExceptionResponse])
def list_order_exceptions(
    order_id: int,
    requester_id: int = Depends(get_requester_id),
    engine: StatusTransitionEngine = Depends(get_engine),
) -> list[DeliveryExceptionResponse]:
    """Return the delivery exceptions recorded for an order, oldest first."""
    outcome = engine.list_exceptions(order_id, requester_id)
    if not isinstance(outcome, ExceptionsFound):
        raise_for_outcome(outcome)
    return [
        DeliveryExceptionResponse(
            id=record.id,
            order_id=record.order_id,
            exception_type=record.exception_type.value,
            message=record.message,
            is_resolved=record.is_resolved,
            created_at=record.created_at,
        )
        for record in outcome.records
    ]
