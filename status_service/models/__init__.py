"""Application models package."""

from status_service.models.delivery_exception import DeliveryException
from status_service.models.order import Order
from status_service.models.user import User

__all__ = ["DeliveryException", "Order", "User"]
