"""Envelope normalizado de mensagem inbound.

Representação única de uma mensagem, independente do transporte de origem.
Criado por requisição e descartado ao fim do processamento; apenas o que
vai para a trilha de auditoria sobrevive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from utils.errors import RoleAlreadyAssignedError

if TYPE_CHECKING:
    from datetime import datetime

    from app.domain.roles import Role


@dataclass(slots=True)
class MessageEnvelope:
    """Mensagem inbound normalizada.

    Attributes:
        sender_id: Endereço do remetente no canal (ex: telefone WhatsApp)
        body: Texto da mensagem (vazio para subtipos sem texto)
        received_at: Momento informado pelo provedor (UTC)
        media_url: URI única de mídia (image/video/document), se houver
        message_id: ID da mensagem no provedor, se houver
        transport: Transporte de origem (ex: "whatsapp", "direct")
    """

    sender_id: str
    body: str
    received_at: datetime
    media_url: str | None = None
    message_id: str | None = None
    transport: str = "direct"
    _role: Role | None = field(default=None, init=False, repr=False)

    @property
    def role(self) -> Role | None:
        """Papel atribuído (None até a resolução)."""
        return self._role

    def assign_role(self, role: Role) -> None:
        """Atribui o papel do envelope uma única vez.

        Reatribuir o mesmo papel é no-op; um papel diferente é erro.

        Raises:
            RoleAlreadyAssignedError: Se já existe outro papel atribuído.
        """
        if self._role is None:
            self._role = role
            return
        if self._role != role:
            raise RoleAlreadyAssignedError(
                f"envelope já atribuído a {self._role}, recebido {role}"
            )

    def to_audit_details(self) -> dict[str, Any]:
        """Campos da mensagem registrados no evento de recebimento."""
        return {
            "sender_id": self.sender_id,
            "message": self.body,
            "media_url": self.media_url,
            "timestamp": self.received_at.isoformat(),
            "message_id": self.message_id,
            "transport": self.transport,
        }
