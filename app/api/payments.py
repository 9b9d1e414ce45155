"""Payment endpoints."""

import json
import logging
from typing import Annotated
from urllib.parse import parse_qs

from fastapi import APIRouter, Depends, Query, Request, status

from app.api.deps import get_payment_service
from app.core.exceptions import AppException, InternalError, ValidationError
from app.schemas.payment import NotificationAck, PaymentHashResponse, PaymentStatusResponse
from app.services.payment_service import PaymentService

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_notification_body(request: Request) -> dict:
    """Parse a notification body. PayHere posts form data; JSON is accepted too."""
    payload = await request.body()
    content_type = request.headers.get("content-type", "")

    if "application/json" in content_type:
        try:
            data = json.loads(payload or b"{}")
        except ValueError:
            raise ValidationError("Invalid JSON body")
        if not isinstance(data, dict):
            raise ValidationError("Notification body must be an object")
        return data

    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError:
        raise ValidationError("Notification body must be UTF-8")

    return {k: v[0] for k, v in parse_qs(text, keep_blank_values=True).items()}


@router.get("/hash", response_model=PaymentHashResponse)
async def generate_payment_hash(
    service: Annotated[PaymentService, Depends(get_payment_service)],
    amount: Annotated[str | None, Query()] = None,
) -> PaymentHashResponse:
    """Sign a PayHere checkout request for the storefront."""
    try:
        return service.init_payment(amount)
    except AppException:
        raise
    except Exception:
        logger.exception("Hash generation error")
        raise InternalError("Failed to generate hash")


@router.post("/notify", response_model=NotificationAck, status_code=status.HTTP_200_OK)
async def payment_notification(
    request: Request,
    service: Annotated[PaymentService, Depends(get_payment_service)],
) -> NotificationAck:
    """PayHere server-to-server notification. Must be publicly reachable."""
    try:
        fields = await _read_notification_body(request)
        await service.handle_notification(fields)
    except AppException:
        raise
    except Exception:
        logger.exception("Notification processing error")
        raise InternalError("Failed to process notification")

    return NotificationAck(success=True)


@router.get(
    "/status/{order_id}",
    response_model=PaymentStatusResponse,
    response_model_exclude_none=True,
)
async def get_payment_status(
    order_id: str,
    service: Annotated[PaymentService, Depends(get_payment_service)],
) -> PaymentStatusResponse:
    """Poll the recorded outcome of a payment."""
    try:
        return await service.get_status(order_id)
    except AppException:
        raise
    except Exception:
        logger.exception("Status check error")
        raise InternalError("Failed to check payment status")
