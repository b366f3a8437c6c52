"""Protocolo do diretório de controle de acesso.

Mapeia remetente → registro de autorização por papel. Implementações
devem normalizar o remetente (normalize_sender_id) antes de qualquer
leitura ou escrita e suportar acesso concorrente via o próprio backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.authorization import AuthorizationRecord
    from app.domain.roles import Role


class AccessDirectoryProtocol(ABC):
    """Contrato assíncrono do diretório de acesso.

    Métodos canônicos:
    - is_authorized: papel aberto sempre True; restritos exigem registro ativo
    - resolve_account_id: conta associada a um registro ativo
    - grant / revoke / set_active: gestão de registros
    - list_records: registros de um papel, ordenados por remetente
    """

    @abstractmethod
    async def is_authorized(self, sender_id: str, role: Role) -> bool:
        """Retorna True se o remetente pode usar o papel."""

    @abstractmethod
    async def resolve_account_id(self, sender_id: str, role: Role) -> str | None:
        """Conta associada ao registro ativo (None se não houver)."""

    @abstractmethod
    async def get_record(self, sender_id: str, role: Role) -> AuthorizationRecord | None:
        """Registro (ativo ou não) para (remetente, papel)."""

    @abstractmethod
    async def list_records(
        self, role: Role, *, active_only: bool = True
    ) -> list[AuthorizationRecord]:
        """Registros do papel ordenados por sender_id (só ativos por padrão)."""

    @abstractmethod
    async def grant(
        self,
        sender_id: str,
        role: Role,
        granted_by: str,
        *,
        account_id: str | None = None,
    ) -> AuthorizationRecord:
        """Concede papel restrito ao remetente.

        Raises:
            DuplicateGrantError: Se já existe registro ativo para (remetente, papel).
            ValueError: Se o papel for o aberto (não exige registro).
        """

    @abstractmethod
    async def revoke(self, sender_id: str, role: Role | None = None) -> bool:
        """Remove registros (hard delete). role=None remove todos os papéis.

        Returns:
            True se algum registro foi removido.
        """

    @abstractmethod
    async def set_active(
        self,
        sender_id: str,
        active: bool,
        role: Role | None = None,
    ) -> bool:
        """Ativa/desativa registros (soft delete). role=None afeta todos.

        Returns:
            True se algum registro mudou.
        """


def ensure_restricted(role: Role) -> None:
    """Recusa concessão do papel aberto.

    Raises:
        ValueError: Se role for o papel aberto.
    """
    if role.is_open:
        raise ValueError(f"papel {role} é aberto e não exige registro")
