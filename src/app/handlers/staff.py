"""Handler padrão da equipe (estoque, pedidos e etiquetas)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.constants.agent_replies import STAFF_MEDIA_REPLY, STAFF_MENU, STAFF_RULES, match_rule
from app.domain.response import ActionTag, AgentResponse

if TYPE_CHECKING:
    from app.domain.envelope import MessageEnvelope

logger = logging.getLogger(__name__)


class StaffHandler:
    """Mídia tem prioridade sobre o texto: toda imagem é tratada como etiqueta."""

    async def handle(self, envelope: MessageEnvelope) -> AgentResponse:
        if envelope.media_url:
            return AgentResponse.of(STAFF_MEDIA_REPLY, ActionTag.NOTIFY_CHANNEL)
        rule = match_rule(envelope.body, STAFF_RULES)
        if rule is None:
            return AgentResponse(reply=STAFF_MENU)
        logger.debug("staff_rule_matched", extra={"rule": rule.key})
        return AgentResponse(reply=rule.reply, actions=rule.actions)
