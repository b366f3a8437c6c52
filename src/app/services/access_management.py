"""Gestão de acesso — concessão, revogação e (des)ativação de papéis.

Regras:
    - Só concede quem tem papel acima do concedido; o papel mais alto pode
      conceder a si mesmo (ex: admin adiciona outro admin).
    - Revogar/(des)ativar exige o mesmo privilégio sobre cada papel afetado.
    - Listar membros de um papel exige o mesmo privilégio que concedê-lo.

Erros sobem apenas para o chamador da gestão, nunca para o dispatcher.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.roles import OPEN_ROLE, RESTRICTED_ROLES_BY_PRIORITY, TOP_ROLE
from utils.errors import GrantNotFoundError, PermissionDeniedError

if TYPE_CHECKING:
    from app.domain.authorization import AuthorizationRecord
    from app.domain.roles import Role
    from app.protocols.access_directory import AccessDirectoryProtocol

logger = logging.getLogger(__name__)


class AccessManagementService:
    """Operações de gestão sobre o diretório de acesso."""

    def __init__(self, directory: AccessDirectoryProtocol) -> None:
        self._directory = directory

    async def actor_role(self, actor_sender_id: str) -> Role:
        """Papel mais alto ativo do ator (papel aberto se nenhum)."""
        for role in RESTRICTED_ROLES_BY_PRIORITY:
            if await self._directory.is_authorized(actor_sender_id, role):
                return role
        return OPEN_ROLE

    async def _require_privilege(self, actor_sender_id: str, role: Role) -> None:
        actor = await self.actor_role(actor_sender_id)
        if actor.outranks(role) or (actor == TOP_ROLE and role == TOP_ROLE):
            return
        logger.warning(
            "access_management_denied",
            extra={"actor_role": actor.value, "target_role": role.value},
        )
        raise PermissionDeniedError(f"papel {actor} não pode gerenciar {role}")

    async def grant_role(
        self,
        actor_sender_id: str,
        sender_id: str,
        role: Role,
        *,
        account_id: str | None = None,
    ) -> AuthorizationRecord:
        """Concede papel restrito a um remetente.

        Raises:
            PermissionDeniedError: Ator sem privilégio.
            DuplicateGrantError: Registro ativo já existe.
            ValueError: Papel aberto.
        """
        await self._require_privilege(actor_sender_id, role)
        return await self._directory.grant(
            sender_id, role, granted_by=actor_sender_id, account_id=account_id
        )

    async def get_access(self, sender_id: str, role: Role) -> AuthorizationRecord | None:
        """Registro atual (ativo ou não) do remetente para o papel."""
        return await self._directory.get_record(sender_id, role)

    async def list_members(
        self,
        actor_sender_id: str,
        role: Role,
        *,
        active_only: bool = True,
    ) -> list[AuthorizationRecord]:
        """Registros do papel, se o ator puder gerenciá-lo.

        Raises:
            PermissionDeniedError: Ator sem privilégio.
        """
        await self._require_privilege(actor_sender_id, role)
        return await self._directory.list_records(role, active_only=active_only)

    async def revoke_access(
        self,
        actor_sender_id: str,
        sender_id: str,
        role: Role | None = None,
    ) -> None:
        """Remove registros do remetente (todos os papéis se role=None).

        Raises:
            PermissionDeniedError: Ator sem privilégio.
            GrantNotFoundError: Nada foi removido.
        """
        for target in await self._affected_roles(sender_id, role):
            await self._require_privilege(actor_sender_id, target)
        if not await self._directory.revoke(sender_id, role):
            raise GrantNotFoundError("nenhum registro para o remetente")
        logger.info(
            "access_revoked",
            extra={"role": role.value if role else "all"},
        )

    async def set_access_active(
        self,
        actor_sender_id: str,
        sender_id: str,
        active: bool,
        role: Role | None = None,
    ) -> None:
        """Ativa/desativa registros do remetente.

        Raises:
            PermissionDeniedError: Ator sem privilégio.
            GrantNotFoundError: Nenhum registro existe (ou já no estado pedido).
        """
        for target in await self._affected_roles(sender_id, role):
            await self._require_privilege(actor_sender_id, target)
        if not await self._directory.set_active(sender_id, active, role):
            raise GrantNotFoundError("nenhum registro alterado para o remetente")
        logger.info(
            "access_active_changed",
            extra={"role": role.value if role else "all", "active": active},
        )

    async def _affected_roles(self, sender_id: str, role: Role | None) -> list[Role]:
        if role is not None:
            return [role]
        affected = []
        for candidate in RESTRICTED_ROLES_BY_PRIORITY:
            if await self._directory.get_record(sender_id, candidate) is not None:
                affected.append(candidate)
        return affected
