"""Base checkout gateway interface.

Gateway adapters only sign and verify gateway messages.
Storage and response shaping live in the payment service.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class CheckoutRequest:
    """Signed parameters for the gateway's hosted checkout form."""

    order_id: str
    hash: str
    amount: str
    currency: str
    merchant_id: str


@dataclass(frozen=True)
class NotificationVerification:
    """Outcome of checking an inbound notification's signature."""

    verified: bool
    order_id: str | None = None
    expected_signature: str | None = None
    received_signature: str | None = None
    reason: str | None = None


class CheckoutGateway(ABC):
    """Abstract base class for hosted checkout gateways."""

    @abstractmethod
    def create_checkout(self, amount: Decimal) -> CheckoutRequest:
        """Sign a new checkout request.

        Args:
            amount: Positive amount in major currency units

        Returns:
            CheckoutRequest with a fresh order id and its signature
        """
        pass

    @abstractmethod
    def verify_notification(self, fields: Mapping[str, str | None]) -> NotificationVerification:
        """Verify the signature of a gateway notification.

        Must not have side effects; the caller decides what to do with
        the result.

        Args:
            fields: Raw, untrusted notification fields

        Returns:
            NotificationVerification describing the outcome
        """
        pass
