"""Stores em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.authorization import AuthorizationRecord, normalize_sender_id, record_key
from app.protocols.access_directory import AccessDirectoryProtocol, ensure_restricted
from app.protocols.audit_sink import AuditSinkProtocol
from utils.errors import DuplicateGrantError

if TYPE_CHECKING:
    from app.domain.audit import AuditEvent
    from app.domain.roles import Role

logger = logging.getLogger(__name__)


class MemoryAuditStore(AuditSinkProtocol):
    """Sink de auditoria em memória — apenas para dev/test."""

    def __init__(self, max_records: int = 10000) -> None:
        self._events: list[AuditEvent] = []
        self._max_records = max_records

    async def append(self, event: AuditEvent) -> None:
        """Append de evento de auditoria."""
        self._events.append(event)
        # Limita tamanho para evitar memory leak em dev
        if len(self._events) > self._max_records:
            self._events = self._events[-self._max_records:]

    def get_events(self) -> list[AuditEvent]:
        """Retorna todos os eventos (apenas para testes)."""
        return list(self._events)

    def get_records(self) -> list[dict[str, object]]:
        """Retorna eventos serializados (apenas para testes)."""
        return [event.to_record() for event in self._events]


class MemoryAccessDirectory(AccessDirectoryProtocol):
    """Diretório de acesso em memória — apenas para dev/test.

    Operações não fazem await entre leitura e escrita, logo são atômicas
    no event loop.
    """

    def __init__(self) -> None:
        self._records: dict[str, AuthorizationRecord] = {}  # "<papel>:<remetente>" -> registro

    async def is_authorized(self, sender_id: str, role: Role) -> bool:
        if role.is_open:
            return True
        record = self._records.get(record_key(sender_id, role))
        return record is not None and record.active

    async def resolve_account_id(self, sender_id: str, role: Role) -> str | None:
        record = self._records.get(record_key(sender_id, role))
        if record is None or not record.active:
            return None
        return record.account_id

    async def get_record(self, sender_id: str, role: Role) -> AuthorizationRecord | None:
        return self._records.get(record_key(sender_id, role))

    async def list_records(
        self, role: Role, *, active_only: bool = True
    ) -> list[AuthorizationRecord]:
        records = [
            record
            for record in self._records.values()
            if record.role == role and (record.active or not active_only)
        ]
        return sorted(records, key=lambda record: record.sender_id)

    async def grant(
        self,
        sender_id: str,
        role: Role,
        granted_by: str,
        *,
        account_id: str | None = None,
    ) -> AuthorizationRecord:
        ensure_restricted(role)
        key = record_key(sender_id, role)
        existing = self._records.get(key)
        if existing is not None and existing.active:
            raise DuplicateGrantError(f"registro ativo já existe para {role}")
        record = AuthorizationRecord(
            sender_id=normalize_sender_id(sender_id),
            role=role,
            granted_by=granted_by,
            account_id=account_id,
        )
        self._records[key] = record
        logger.info("access_granted", extra={"backend": "memory", "role": role.value})
        return record

    async def revoke(self, sender_id: str, role: Role | None = None) -> bool:
        keys = self._keys_for(sender_id, role)
        for key in keys:
            del self._records[key]
        return bool(keys)

    async def set_active(
        self,
        sender_id: str,
        active: bool,
        role: Role | None = None,
    ) -> bool:
        changed = False
        for key in self._keys_for(sender_id, role):
            record = self._records[key]
            if record.active != active:
                self._records[key] = record.with_active(active)
                changed = True
        return changed

    def _keys_for(self, sender_id: str, role: Role | None) -> list[str]:
        normalized = normalize_sender_id(sender_id)
        return [
            key
            for key, record in self._records.items()
            if record.sender_id == normalized and (role is None or record.role == role)
        ]
