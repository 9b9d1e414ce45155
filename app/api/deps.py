"""API dependencies for the payment endpoints."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.config import settings
from app.gateways.payhere import PayHereGateway
from app.services.payment_service import PaymentService
from app.services.payment_store import PaymentStore, build_payment_store


@lru_cache
def get_gateway() -> PayHereGateway:
    """PayHere adapter for the configured merchant account."""
    return PayHereGateway(
        merchant_id=settings.merchant_id,
        merchant_secret=settings.merchant_secret,
    )


@lru_cache
def get_payment_store() -> PaymentStore:
    """Process-wide payment store for the configured backend."""
    return build_payment_store(settings.payment_store, redis_url=settings.redis_url)


def get_payment_service(
    gateway: Annotated[PayHereGateway, Depends(get_gateway)],
    store: Annotated[PaymentStore, Depends(get_payment_store)],
) -> PaymentService:
    """Payment service bound to the current gateway and store."""
    return PaymentService(gateway=gateway, store=store)
