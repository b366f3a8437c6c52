"""Resolução de papel para mensagens vindas do canal.

Papéis restritos são testados do mais privilegiado para o menos; o
primeiro autorizado vence. Sem acesso (ou com o diretório indisponível)
o remetente cai no papel aberto, nunca em um papel elevado.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.roles import OPEN_ROLE, RESTRICTED_ROLES_BY_PRIORITY

if TYPE_CHECKING:
    from app.domain.roles import Role
    from app.protocols.access_directory import AccessDirectoryProtocol

logger = logging.getLogger(__name__)


class RoleResolver:
    """Resolve o papel efetivo de um remetente."""

    def __init__(self, directory: AccessDirectoryProtocol) -> None:
        self._directory = directory

    async def resolve(self, sender_id: str) -> Role:
        """Retorna o papel mais privilegiado autorizado para o remetente."""
        try:
            for role in RESTRICTED_ROLES_BY_PRIORITY:
                if await self._directory.is_authorized(sender_id, role):
                    return role
        except Exception as exc:
            logger.warning(
                "role_resolution_failed",
                extra={"fallback_role": OPEN_ROLE.value, "error_type": type(exc).__name__},
            )
        return OPEN_ROLE
