"""API direta de agentes — POST /agent/{role}.

O papel vem da URL (não é resolvido pelo diretório); o dispatcher ainda
exige registro ativo para papéis restritos. As ações da resposta voltam
ao chamador: este caminho não aciona o Delivery Executor.
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from api.routes.agent.models import INVALID_BODY_MESSAGE, AgentRequest
from api.routes.dependencies import get_runtime
from app.domain.envelope import MessageEnvelope
from app.domain.response import UNAUTHORIZED_REPLY
from app.domain.roles import parse_role
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

router = APIRouter()

DIRECT_TRANSPORT = "direct"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        content={"success": False, "message": message},
        status_code=status_code,
    )


@router.post("/{role_name}")
async def handle_agent_message(role_name: str, request: Request) -> JSONResponse:
    """Despacha uma mensagem para o handler do papel informado."""
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        runtime = get_runtime(request)
        role = parse_role(role_name)
        if role is None:
            return _error(status.HTTP_404_NOT_FOUND, "Unknown agent type")

        try:
            body = json.loads(await request.body() or b"null")
            agent_request = AgentRequest.model_validate(body)
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as exc:
            logger.warning(
                "agent_request_invalid",
                extra={"role": role.value, "error_type": type(exc).__name__},
            )
            return _error(status.HTTP_400_BAD_REQUEST, INVALID_BODY_MESSAGE)

        envelope = MessageEnvelope(
            sender_id=agent_request.sender_id,
            body=agent_request.message,
            received_at=agent_request.received_at,
            media_url=agent_request.media_url,
            transport=DIRECT_TRANSPORT,
        )

        try:
            result = await runtime.dispatcher.run(envelope, role)
        except Exception:
            logger.exception(
                "agent_request_failed",
                extra={"role": role.value, "correlation_id": get_correlation_id()},
            )
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

        if result.rejected:
            return _error(status.HTTP_403_FORBIDDEN, UNAUTHORIZED_REPLY)

        return JSONResponse(
            content={"success": True, "data": result.response.to_dict()},
            status_code=status.HTTP_200_OK,
            headers={"x-correlation-id": get_correlation_id()},
        )
    finally:
        reset_correlation_id(token)
