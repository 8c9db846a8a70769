from fastapi import APIRouter, Depends, HTTPException, Request
from typing import Any, Dict
from urllib.parse import parse_qsl
import structlog
from ..providers.cloudpayments.adapter import CloudPaymentsAdapter
from ..schemas.payment import RESPONSE_ERROR, RESPONSE_SUCCESS
from .dependencies import get_adapter

router = APIRouter()

logger = structlog.get_logger(__name__)

# CloudPayments notification kinds; "check" is sent before the charge
NOTIFICATION_TYPES = {"check", "pay", "fail", "confirm", "refund", "recurrent", "cancel"}


async def _read_payload(request: Request) -> Dict[str, Any]:
    """
    CloudPayments posts notifications form-encoded by default,
    JSON when the site is configured for it.
    """
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            payload = await request.json()
        except Exception:
            raise HTTPException(status_code=400, detail="Invalid JSON")
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Notification body must be an object")
        return payload
    try:
        body = (await request.body()).decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Invalid form body")
    return dict(parse_qsl(body, keep_blank_values=True))


@router.post("/provider/cloudpayments/{notification}")
async def cloudpayments_notification(
    notification: str,
    request: Request,
    adapter: CloudPaymentsAdapter = Depends(get_adapter),
):
    if notification not in NOTIFICATION_TYPES:
        raise HTTPException(status_code=404, detail="Unknown notification type")

    payload = await _read_payload(request)
    adapter.set_response(payload)

    if not adapter.validate(payload):
        logger.warning("notification_rejected", notification=notification)
        return adapter.get_notification_response(RESPONSE_ERROR)

    logger.info(
        "notification_received",
        notification=notification,
        order_id=adapter.get_order_id(),
        payment_id=adapter.get_payment_id(),
        transaction_id=adapter.get_transaction_id(),
        status=adapter.get_status(),
        amount=adapter.get_amount(),
    )

    if notification == "check":
        return adapter.get_check_response(RESPONSE_SUCCESS)
    return adapter.get_notification_response(RESPONSE_SUCCESS)
