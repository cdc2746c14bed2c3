from __future__ import annotations

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.api.errors import error_response
from app.application.dto.payment_webhook import PaymentWebhookDTO
from app.application.exceptions import BookingNotFoundError
from app.application.use_cases.booking import BookingUseCase
from app.core.config import settings
from app.infrastructure.payments.webhook_verify import verify_x_sign
from app.wiring.dependencies import get_booking_use_case


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/payment-webhook")
async def payment_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    uc: BookingUseCase = Depends(get_booking_use_case),
) -> Response:
    body = await request.body()
    signature = request.headers.get("X-Sign")
    if not verify_x_sign(body, signature, settings.MONOBANK_PUBLIC_KEY, settings.ENV):
        logger.warning("Payment webhook signature rejected")
        return Response(status_code=403)

    try:
        payload = json.loads(body.decode("utf-8")) if body else {}
        event = PaymentWebhookDTO.model_validate(payload)
    except (ValueError, ValidationError):
        logger.exception("Failed to parse payment webhook body")
        return error_response(400, "Malformed webhook body")

    logger.info("Payment webhook received", extra={"invoice_id": event.invoiceId, "status": event.status})

    try:
        resolution = await run_in_threadpool(uc.resolve_webhook, event.invoiceId, event.status)
    except BookingNotFoundError:
        logger.warning("Payment webhook for unknown invoice", extra={"invoice_id": event.invoiceId})
        return error_response(404, "Booking not found")
    except Exception as e:
        logger.exception("Webhook processing error", extra={"invoice_id": event.invoiceId, "error": str(e)})
        return error_response(500, "Internal server error", str(e))

    if resolution.side_effects is not None:
        background_tasks.add_task(resolution.run_side_effects)

    return JSONResponse({"success": True, "outcome": resolution.outcome})
