"""Webhook de callbacks de pagamento (Stripe).

O gateway só verifica, classifica e confirma o recebimento; tipos
desconhecidos são aceitos e ignorados.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status

from api.connectors.stripe.signature import SIGNATURE_HEADER
from api.connectors.transport import TransportKind
from api.connectors.whatsapp.webhook.receive import InvalidJsonError, parse_json_object
from api.normalizers.stripe import classify_payment_event
from api.routes.dependencies import get_runtime
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", response_model=None)
async def receive_payment_webhook(request: Request) -> Response | dict[str, Any]:
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        runtime = get_runtime(request)
        raw_body = await request.body()

        if not runtime.verifier.verify(
            TransportKind.STRIPE, request.headers.get(SIGNATURE_HEADER), raw_body
        ):
            logger.warning(
                "webhook_signature_invalid",
                extra={"channel": "stripe", "correlation_id": get_correlation_id()},
            )
            return Response(
                content="Unauthorized",
                media_type="text/plain",
                status_code=status.HTTP_401_UNAUTHORIZED,
            )

        try:
            payload = parse_json_object(raw_body)
        except InvalidJsonError as exc:
            logger.warning(
                "webhook_json_invalid",
                extra={
                    "channel": "stripe",
                    "correlation_id": get_correlation_id(),
                    "error": str(exc),
                },
            )
            return Response(
                content="Bad Request",
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        event = classify_payment_event(payload)
        logger.info(
            "payment_event_handled" if event.handled else "payment_event_ignored",
            extra={
                "channel": "stripe",
                "correlation_id": get_correlation_id(),
                "event_type": event.event_type,
                "event_id": event.event_id,
                "object_id": event.object_id,
            },
        )
        return {
            "status": "received",
            "event_type": event.event_type,
            "handled": event.handled,
        }
    finally:
        reset_correlation_id(token)
