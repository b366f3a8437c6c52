"""Endpoints de webhook do WhatsApp.

Endpoints:
- GET /webhook/whatsapp: verificação de webhook (Meta challenge)
- POST /webhook/whatsapp: recebimento de mensagens inbound

Fluxo do POST:
1. Verifica assinatura sobre o corpo bruto (401 se inválida)
2. Parseia JSON e decodifica o envelope (400 se inválido ou sem mensagem)
3. Despacha o pipeline (inline ou em background) e responde 200

Nada é auditado antes da assinatura e do envelope serem válidos.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status

from api.connectors.transport import TransportKind, decode
from api.connectors.whatsapp.signature import SIGNATURE_HEADER
from api.connectors.whatsapp.webhook.receive import InvalidJsonError, parse_json_object
from api.connectors.whatsapp.webhook.verify import (
    WebhookChallengeError,
    verify_webhook_challenge,
)
from api.routes.dependencies import get_runtime
from api.routes.whatsapp.webhook_runtime import dispatch_inbound_processing
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
async def verify_webhook(request: Request) -> Response:
    """Verificação de webhook — responde ao challenge da Meta.

    Returns:
        Texto do challenge ou erro 403.
    """
    settings = get_runtime(request).whatsapp_settings
    hub_mode = request.query_params.get("hub.mode")

    try:
        challenge = verify_webhook_challenge(
            hub_mode=hub_mode,
            hub_verify_token=request.query_params.get("hub.verify_token"),
            hub_challenge=request.query_params.get("hub.challenge"),
            expected_token=settings.verify_token,
        )
    except WebhookChallengeError as exc:
        logger.warning(
            "webhook_verification_failed",
            extra={"channel": "whatsapp", "error": str(exc)},
        )
        return Response(
            content="Forbidden",
            media_type="text/plain",
            status_code=status.HTTP_403_FORBIDDEN,
        )

    logger.info("webhook_verified", extra={"channel": "whatsapp", "hub_mode": hub_mode})
    # Meta espera o challenge como texto puro
    return Response(
        content=challenge,
        media_type="text/plain",
        status_code=status.HTTP_200_OK,
    )


@router.post("/", response_model=None)
async def receive_webhook(request: Request) -> Response | dict[str, Any]:
    """Recebimento de mensagens inbound do WhatsApp.

    Returns:
        {"status": "received", "correlation_id": ...} ou Response de erro.
    """
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        runtime = get_runtime(request)
        raw_body = await request.body()

        signature_ok = runtime.verifier.verify(
            TransportKind.WHATSAPP,
            request.headers.get(SIGNATURE_HEADER),
            raw_body,
        )
        if not signature_ok:
            logger.warning(
                "webhook_signature_invalid",
                extra={"channel": "whatsapp", "correlation_id": get_correlation_id()},
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
                    "channel": "whatsapp",
                    "correlation_id": get_correlation_id(),
                    "error": str(exc),
                },
            )
            return Response(
                content="Bad Request",
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        envelope = decode(TransportKind.WHATSAPP, payload)
        if envelope is None:
            logger.info(
                "webhook_without_message",
                extra={"channel": "whatsapp", "correlation_id": get_correlation_id()},
            )
            return Response(
                content="Bad Request",
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        logger.info(
            "webhook_received",
            extra={
                "channel": "whatsapp",
                "correlation_id": get_correlation_id(),
                "payload_size": len(raw_body),
                "has_media": envelope.media_url is not None,
            },
        )
        await dispatch_inbound_processing(
            envelope=envelope,
            correlation_id=get_correlation_id(),
            runtime=runtime,
        )
        return {
            "status": "received",
            "correlation_id": get_correlation_id(),
        }
    finally:
        reset_correlation_id(token)
