"""Handler padrão do papel aberto (clientes)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.constants.agent_replies import CUSTOMER_GREETING, CUSTOMER_RULES, match_rule
from app.domain.response import AgentResponse

if TYPE_CHECKING:
    from app.domain.envelope import MessageEnvelope

logger = logging.getLogger(__name__)


class CustomerHandler:
    """Status de pedido, ajuda e relato de problema (notifica a equipe por email)."""

    async def handle(self, envelope: MessageEnvelope) -> AgentResponse:
        rule = match_rule(envelope.body, CUSTOMER_RULES)
        if rule is None:
            return AgentResponse(reply=CUSTOMER_GREETING)
        logger.debug("customer_rule_matched", extra={"rule": rule.key})
        return AgentResponse(reply=rule.reply, actions=rule.actions)
