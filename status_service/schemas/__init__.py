"""Schema exports."""

from status_service.schemas.auth import AuthUserResponse, LoginRequest, TokenResponse
from status_service.schemas.status import (
    DeliveredRequest,
    DeliveryExceptionResponse,
    GivenToCourierRequest,
    PreparingRequest,
)

__all__ = [
    "AuthUserResponse",
    "LoginRequest",
    "TokenResponse",
    "DeliveredRequest",
    "DeliveryExceptionResponse",
    "GivenToCourierRequest",
    "PreparingRequest",
]
