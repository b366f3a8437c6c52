"""Registro de autorização por remetente e normalização de identificadores.

Toda leitura ou escrita no diretório de acesso passa por
normalize_sender_id: dois formatos que normalizam igual são o mesmo
remetente.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any

from app.domain.roles import Role

_NON_SENDER_CHARS = re.compile(r"[^0-9+]")


def _utcnow() -> datetime:
    return datetime.now(UTC)


def normalize_sender_id(raw: str) -> str:
    """Normaliza identificador de remetente para a chave canônica.

    Remove tudo que não for dígito ou "+" inicial e garante o prefixo "+".

    Exemplos:
        "+1 (234) 567-8900" -> "+12345678900"
        "12345678900"       -> "+12345678900"
    """
    cleaned = _NON_SENDER_CHARS.sub("", raw or "")
    digits = cleaned.replace("+", "")
    return f"+{digits}"


@dataclass(frozen=True, slots=True)
class AuthorizationRecord:
    """Concessão persistida de um papel restrito a um remetente.

    Attributes:
        sender_id: Identificador normalizado do remetente
        role: Papel concedido (nunca o papel aberto)
        active: False quando desativado (soft-delete)
        granted_by: Referência de quem concedeu o papel
        account_id: Conta interna associada ao remetente, se houver
        created_at: Momento da concessão (UTC)
        updated_at: Última alteração (UTC)
    """

    sender_id: str
    role: Role
    granted_by: str
    active: bool = True
    account_id: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def key(self) -> str:
        """Chave única (papel + remetente) usada pelos stores."""
        return record_key(self.sender_id, self.role)

    def with_active(self, active: bool) -> AuthorizationRecord:
        """Cópia com flag active alterada e updated_at renovado."""
        return replace(self, active=active, updated_at=_utcnow())

    def to_dict(self) -> dict[str, Any]:
        return {
            "sender_id": self.sender_id,
            "role": self.role.value,
            "granted_by": self.granted_by,
            "active": self.active,
            "account_id": self.account_id,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuthorizationRecord:
        return cls(
            sender_id=str(data["sender_id"]),
            role=Role(data["role"]),
            granted_by=str(data.get("granted_by") or ""),
            active=bool(data.get("active", True)),
            account_id=data.get("account_id"),
            created_at=_parse_datetime(data.get("created_at")),
            updated_at=_parse_datetime(data.get("updated_at")),
        )


def record_key(sender_id: str, role: Role) -> str:
    """Chave canônica de um registro: "<papel>:<remetente normalizado>"."""
    return f"{role.value}:{normalize_sender_id(sender_id)}"


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value)
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return _utcnow()
