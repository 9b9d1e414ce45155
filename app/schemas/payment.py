"""Payment-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PayHereNotification(BaseModel):
    """Fields PayHere posts to the notify URL.

    Only parsed after the signature has been verified.
    """

    model_config = ConfigDict(extra="ignore")

    merchant_id: str | None = None
    order_id: str = Field(..., min_length=1)
    payment_id: str | None = None
    payhere_amount: str | None = None
    payhere_currency: str | None = None
    status_code: str = Field(..., min_length=1)
    md5sig: str
    # Opaque value passed through from checkout (customer id)
    custom_1: str | None = None
    method: str | None = None
    status_message: str | None = None
    card_holder_name: str | None = None
    card_no: str | None = None
    card_expiry: str | None = None


class PaymentRecord(BaseModel):
    """Last verified notification for an order."""

    order_id: str
    payment_id: str | None = None
    amount: str | None = None
    currency: str | None = None
    status_code: str
    status_message: str | None = None
    method: str | None = None
    card_holder_name: str | None = None
    card_no: str | None = None
    card_expiry: str | None = None
    customer_id: str | None = None
    verified: bool = True
    timestamp: str


class PaymentHashResponse(BaseModel):
    """Signed checkout parameters returned to the storefront."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    order_id: str
    hash: str
    amount: str
    currency: str
    merchant_id: str


class PaymentStatusResponse(BaseModel):
    """Schema for payment status check."""

    success: bool
    status: str
    payment: PaymentRecord | None = None
    message: str | None = None


class NotificationAck(BaseModel):
    """Acknowledgement returned to PayHere."""

    success: bool = True


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "OK"
    timestamp: str
