"""Protocolos e contratos do core da aplicação."""

from .access_directory import AccessDirectoryProtocol, ensure_restricted
from .agent_handler import AgentHandlerProtocol
from .audit_sink import AuditSinkProtocol
from .outbound_sender import ChannelSenderProtocol, EmailSenderProtocol

__all__ = [
    "AccessDirectoryProtocol",
    "AgentHandlerProtocol",
    "AuditSinkProtocol",
    "ChannelSenderProtocol",
    "EmailSenderProtocol",
    "ensure_restricted",
]
