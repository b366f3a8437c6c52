"""Domínio — modelos puros do gateway (sem IO).

Papéis, envelope de mensagem, registros de autorização, eventos de
auditoria e respostas de handler.
"""

from app.domain.audit import AuditAction, AuditEvent
from app.domain.authorization import AuthorizationRecord, normalize_sender_id, record_key
from app.domain.envelope import MessageEnvelope
from app.domain.response import (
    FALLBACK_RESPONSE,
    UNAUTHORIZED_RESPONSE,
    ActionTag,
    AgentResponse,
)
from app.domain.roles import (
    OPEN_ROLE,
    RESTRICTED_ROLES_BY_PRIORITY,
    TOP_ROLE,
    Role,
    parse_role,
)

__all__ = [
    "FALLBACK_RESPONSE",
    "OPEN_ROLE",
    "RESTRICTED_ROLES_BY_PRIORITY",
    "TOP_ROLE",
    "UNAUTHORIZED_RESPONSE",
    "ActionTag",
    "AgentResponse",
    "AuditAction",
    "AuditEvent",
    "AuthorizationRecord",
    "MessageEnvelope",
    "Role",
    "normalize_sender_id",
    "parse_role",
    "record_key",
]
