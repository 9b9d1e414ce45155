"""Payment service.

Composes the PayHere gateway adapter with the payment record store.
Notifications are verified before any field is trusted or stored.
"""

import logging
import re
from collections.abc import Mapping
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import SignatureMismatch, ValidationError
from app.domain.payment_state import describe_status, is_success
from app.gateways.base import CheckoutGateway
from app.gateways.payhere import format_amount
from app.schemas.payment import (
    PayHereNotification,
    PaymentHashResponse,
    PaymentRecord,
    PaymentStatusResponse,
)
from app.services.payment_store import PaymentStore

logger = logging.getLogger(__name__)

# Plain decimal notation only: no sign other than "+", no digit grouping
_AMOUNT_PATTERN = re.compile(r"\+?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

MAX_AMOUNT = Decimal("1e15")


def parse_amount(raw_amount: str | None) -> Decimal:
    """Validate a checkout amount from the query string.

    Raises:
        ValidationError: If the amount is missing, not a number, not positive,
            or not below ``MAX_AMOUNT``
    """
    if raw_amount is None or not raw_amount.strip():
        raise ValidationError("Amount is required")

    raw_amount = raw_amount.strip()
    if not _AMOUNT_PATTERN.fullmatch(raw_amount):
        raise ValidationError("Amount must be a positive number")

    try:
        amount = Decimal(raw_amount)
    except InvalidOperation:
        raise ValidationError("Amount must be a positive number")

    if amount >= MAX_AMOUNT:
        raise ValidationError("Amount is too large")

    if Decimal(format_amount(amount)) <= 0:
        raise ValidationError("Amount must be a positive number")

    return amount


def normalize_notification_fields(fields: Mapping[str, Any]) -> dict[str, str]:
    """Coerce a parsed body into string fields, dropping nulls."""
    return {
        str(key): value if isinstance(value, str) else str(value)
        for key, value in fields.items()
        if value is not None
    }


class PaymentService:
    """Checkout signing, notification intake and status lookup."""

    def __init__(self, gateway: CheckoutGateway, store: PaymentStore):
        self.gateway = gateway
        self.store = store

    def init_payment(self, raw_amount: str | None) -> PaymentHashResponse:
        """Sign a checkout request for ``raw_amount``. Stores nothing."""
        amount = parse_amount(raw_amount)
        checkout = self.gateway.create_checkout(amount)

        logger.info(f"Checkout signed for order {checkout.order_id} ({checkout.amount} {checkout.currency})")

        return PaymentHashResponse(
            order_id=checkout.order_id,
            hash=checkout.hash,
            amount=checkout.amount,
            currency=checkout.currency,
            merchant_id=checkout.merchant_id,
        )

    async def handle_notification(self, fields: Mapping[str, Any]) -> PaymentRecord:
        """Verify and record a gateway notification.

        Raises:
            SignatureMismatch: If the signature does not verify
            ValidationError: If a verified notification lacks required fields
        """
        fields = normalize_notification_fields(fields)
        order_id = fields.get("order_id")
        status_code = fields.get("status_code")

        logger.info(f"Payment notification received: order={order_id} status={status_code}")

        verification = self.gateway.verify_notification(fields)
        if not verification.verified:
            logger.warning(
                f"Rejected payment notification for order {order_id}: {verification.reason} "
                f"(received md5sig={verification.received_signature!r})"
            )
            raise SignatureMismatch()

        try:
            notification = PayHereNotification.model_validate(fields)
        except PydanticValidationError as e:
            missing = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
            raise ValidationError(f"Invalid notification fields: {', '.join(missing)}")

        record = PaymentRecord(
            order_id=notification.order_id,
            payment_id=notification.payment_id,
            amount=notification.payhere_amount,
            currency=notification.payhere_currency,
            status_code=notification.status_code,
            status_message=notification.status_message,
            method=notification.method,
            card_holder_name=notification.card_holder_name,
            card_no=notification.card_no,
            card_expiry=notification.card_expiry,
            customer_id=notification.custom_1,
            verified=True,
            timestamp=datetime.now(UTC).isoformat(),
        )

        existing = await self.store.get(record.order_id)
        if existing is not None and _same_notification(existing, record):
            logger.info(f"Duplicate notification for order {record.order_id} ignored")
            return existing

        await self.store.upsert(record.order_id, record)
        logger.info(
            f"Payment {record.payment_id} for order {record.order_id} recorded as "
            f"{describe_status(record.status_code)}"
        )
        return record

    async def get_status(self, order_id: str) -> PaymentStatusResponse:
        """Report the recorded outcome for an order.

        An order never notified and an unknown order look the same: pending.
        """
        record = await self.store.get(order_id)
        if record is None:
            return PaymentStatusResponse(
                success=False,
                status="pending",
                message="Payment not found",
            )

        return PaymentStatusResponse(
            success=is_success(record.status_code),
            status=record.status_code,
            payment=record,
        )


def _same_notification(a: PaymentRecord, b: PaymentRecord) -> bool:
    return a.model_dump(exclude={"timestamp"}) == b.model_dump(exclude={"timestamp"})
