"""Pydantic schemas for API validation."""

from app.schemas.payment import (
    HealthResponse,
    NotificationAck,
    PayHereNotification,
    PaymentHashResponse,
    PaymentRecord,
    PaymentStatusResponse,
)

__all__ = [
    "HealthResponse",
    "NotificationAck",
    "PayHereNotification",
    "PaymentHashResponse",
    "PaymentRecord",
    "PaymentStatusResponse",
]
