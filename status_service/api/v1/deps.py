"""Shared endpoint dependencies and outcome-to-HTTP mapping."""

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from status_service.db.session import get_db
from status_service.domain.outcomes import InvalidPreviousState, NotFound, Unauthorized, ValidationFailed
from status_service.services.authorization import RoleAuthorizationGate
from status_service.services.order_store import SqlExceptionRecorder, SqlOrderStore
from status_service.services.transition_engine import StatusTransitionEngine


def get_engine(db: Session = Depends(get_db)) -> StatusTransitionEngine:
    """Build a transition engine bound to the request's database session."""
    return StatusTransitionEngine(
        gate=RoleAuthorizationGate(db),
        store=SqlOrderStore(db),
        recorder=SqlExceptionRecorder(db),
    )


def raise_for_outcome(outcome: object) -> None:
    """Translate a non-success engine outcome into an HTTP error."""
    if isinstance(outcome, Unauthorized):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    if isinstance(outcome, NotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    if isinstance(outcome, InvalidPreviousState):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Order is {outcome.actual.value}; expected {outcome.expected.value}",
        )
    if isinstance(outcome, ValidationFailed):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=list(outcome.errors))
