"""Protocolo do sink de auditoria (append-only)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.audit import AuditEvent


class AuditSinkProtocol(ABC):
    """Contrato do sink de auditoria.

    append() é fire-and-forget: falhas do backend são logadas pela
    implementação e nunca propagadas ao chamador.
    """

    @abstractmethod
    async def append(self, event: AuditEvent) -> None:
        """Acrescenta evento à trilha."""
