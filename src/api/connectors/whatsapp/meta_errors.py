"""Erros da Graph API (Meta/WhatsApp) e classificação permanente vs transitório."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Códigos HTTP/Meta que não adianta retentar
PERMANENT_CODES = frozenset({
    400,
    401,
    403,
    404,
    413,
    131026,  # mensagem não entregável ao destinatário
    131047,  # janela de 24h expirada
})
PERMANENT_TYPES = frozenset({"OAuthException", "InvalidRequest"})


@dataclass(frozen=True)
class WhatsAppApiError:
    """Erro retornado pela API Meta/WhatsApp."""

    error_type: str
    error_code: int
    error_message: str
    is_permanent: bool
    trace_id: str | None = None


def is_permanent_error(error_code: int, error_type: str) -> bool:
    """Erros permanentes não são retentados (400/401/403/404/413, 1310xx, OAuth)."""
    return error_code in PERMANENT_CODES or error_type in PERMANENT_TYPES


def parse_meta_error(response_data: dict[str, Any]) -> WhatsAppApiError | None:
    """Extrai o objeto `error` do response da Meta (None se sucesso)."""
    error_obj = response_data.get("error")
    if not error_obj or not isinstance(error_obj, dict):
        return None

    error_type = str(error_obj.get("type", "unknown"))
    raw_code = error_obj.get("code", 0)
    error_code = raw_code if isinstance(raw_code, int) else 0
    return WhatsAppApiError(
        error_type=error_type,
        error_code=error_code,
        error_message=str(error_obj.get("message", "Erro desconhecido")),
        is_permanent=is_permanent_error(error_code, error_type),
        trace_id=error_obj.get("fbtrace_id"),
    )
