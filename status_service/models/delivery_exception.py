"""Delivery exception records attached to orders."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from status_service.db.base import Base
from status_service.domain.status import ExceptionType

EXCEPTION_TYPES = tuple(exception_type.value for exception_type in ExceptionType)


class DeliveryException(Base):
    """Problem event recorded against an order, e.g. a vendor rejection."""

    __tablename__ = "delivery_exceptions"

    id: Mapped[int] = mapped_column(primary_key=True)
    order_id: Mapped[int] = mapped_column(ForeignKey("orders.id"), nullable=False, index=True)
    exception_type: Mapped[str] = mapped_column(Enum(*EXCEPTION_TYPES, name="delivery_exception_type"), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_resolved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    order: Mapped["Order"] = relationship(back_populates="exceptions")
