"""Status transition request bodies and delivery exception responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from status_service.domain.payloads import DeliveredPayload, GivenToCourierPayload, PreparingPayload


class PreparingRequest(BaseModel):
    """Body for the accepted -> preparing transition."""

    estimated_ready_at: datetime

    def to_payload(self) -> PreparingPayload:
        return PreparingPayload(estimated_ready_at=self.estimated_ready_at)


class GivenToCourierRequest(BaseModel):
    """Optional body for the preparing -> given_to_courier transition."""

    handed_over_at: datetime | None = None

    def to_payload(self) -> GivenToCourierPayload:
        return GivenToCourierPayload(handed_over_at=self.handed_over_at)


class DeliveredRequest(BaseModel):
    """Body for the in_transit -> delivered transition."""

    delivered_at: datetime

    def to_payload(self) -> DeliveredPayload:
        return DeliveredPayload(delivered_at=self.delivered_at)


class DeliveryExceptionResponse(BaseModel):
    """Serialized delivery exception."""

    id: int | None
    order_id: int
    exception_type: str
    message: str
    is_resolved: bool
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)
