"""Protocolos de envio outbound usados pelo Delivery Executor."""

from __future__ import annotations

from typing import Protocol


class ChannelSenderProtocol(Protocol):
    """Envia texto ao remetente pelo canal de mensagens."""

    async def send_text(self, to: str, body: str) -> str | None:
        """Envia texto e retorna o ID da mensagem no provedor, se houver."""
        ...


class EmailSenderProtocol(Protocol):
    """Envia notificação por email relacionada a um remetente."""

    async def send_notification(self, sender_id: str, subject: str, body: str) -> str | None:
        """Envia email e retorna o ID no provedor, se houver."""
        ...
