"""PayHere payment gateway adapter.

PayHere hosted checkout for the Sri Lankan market.
Documentation: https://support.payhere.lk/api-&-mobile-sdk/checkout-api
"""

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, localcontext

from app.core.security import chained_signature, signatures_match
from app.gateways.base import (
    CheckoutGateway,
    CheckoutRequest,
    NotificationVerification,
)
from app.utils.order_number import generate_order_id

CURRENCY = "LKR"

_TWO_PLACES = Decimal("0.01")


def format_amount(amount: Decimal | str | float) -> str:
    """Format an amount with exactly two decimals, as PayHere signs it."""
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    with localcontext() as ctx:
        # quantize needs every integer digit plus the two decimals
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return f"{value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP):.2f}"


class PayHereGateway(CheckoutGateway):
    """PayHere checkout signing and notification verification."""

    def __init__(self, merchant_id: str, merchant_secret: str, currency: str = CURRENCY):
        self.merchant_id = merchant_id
        self._merchant_secret = merchant_secret
        self.currency = currency

    def __repr__(self) -> str:
        return f"PayHereGateway(merchant_id={self.merchant_id!r}, currency={self.currency!r})"

    def checkout_hash(self, order_id: str, amount: str) -> str:
        """Hash for the checkout form. ``amount`` must already be formatted."""
        return chained_signature(
            self.merchant_id,
            order_id,
            amount,
            self.currency,
            secret=self._merchant_secret,
        )

    def notification_signature(
        self,
        merchant_id: str,
        order_id: str,
        payhere_amount: str,
        payhere_currency: str,
        status_code: str,
    ) -> str:
        """Expected ``md5sig`` for a notification with these fields."""
        return chained_signature(
            merchant_id,
            order_id,
            payhere_amount,
            payhere_currency,
            status_code,
            secret=self._merchant_secret,
        )

    def create_checkout(self, amount: Decimal) -> CheckoutRequest:
        """Create a signed PayHere checkout request."""
        order_id = generate_order_id()
        formatted_amount = format_amount(amount)

        return CheckoutRequest(
            order_id=order_id,
            hash=self.checkout_hash(order_id, formatted_amount),
            amount=formatted_amount,
            currency=self.currency,
            merchant_id=self.merchant_id,
        )

    def verify_notification(self, fields: Mapping[str, str | None]) -> NotificationVerification:
        """Verify a PayHere notification (``md5sig``)."""

        def field(name: str) -> str:
            return fields.get(name) or ""

        order_id = fields.get("order_id")
        received = fields.get("md5sig")
        expected = self.notification_signature(
            field("merchant_id"),
            field("order_id"),
            field("payhere_amount"),
            field("payhere_currency"),
            field("status_code"),
        )

        if not signatures_match(expected, received):
            return NotificationVerification(
                verified=False,
                order_id=order_id,
                expected_signature=expected,
                received_signature=received,
                reason="signature_mismatch",
            )

        # Signed correctly, but for another merchant account
        if field("merchant_id") != self.merchant_id:
            return NotificationVerification(
                verified=False,
                order_id=order_id,
                expected_signature=expected,
                received_signature=received,
                reason="merchant_mismatch",
            )

        return NotificationVerification(
            verified=True,
            order_id=order_id,
            expected_signature=expected,
            received_signature=received,
        )
