"""Settings de notificação por email.

Envio via API HTTP transacional (Resend por padrão). Sem API key o
gateway usa o sender de log (dev/test).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

RESEND_API_URL = "https://api.resend.com/emails"


@dataclass(frozen=True)
class EmailSettings:
    """Configurações de email.

    Attributes:
        api_key: Chave da API de email
        api_url: Endpoint de envio
        from_email: Remetente das notificações
        notify_to: Destinatário das notificações internas (equipe)
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em caso de erro
    """

    api_key: str = ""
    api_url: str = RESEND_API_URL
    from_email: str = ""
    notify_to: str = ""
    request_timeout_seconds: float = 15.0
    max_retries: int = 2

    @property
    def can_send(self) -> bool:
        """True se há credenciais e endereços para envio."""
        return bool(self.api_key and self.from_email and self.notify_to)

    def validate(self) -> list[str]:
        """Valida configurações de email (só quando api_key presente)."""
        errors: list[str] = []
        if not self.api_key:
            return errors
        if not self.from_email:
            errors.append("EMAIL_FROM não configurado")
        if not self.notify_to:
            errors.append("EMAIL_NOTIFY_TO não configurado")
        if self.request_timeout_seconds <= 0:
            errors.append("EMAIL_REQUEST_TIMEOUT_SECONDS deve ser > 0")
        return errors


def _load_from_env() -> EmailSettings:
    """Carrega EmailSettings de variáveis de ambiente."""
    return EmailSettings(
        api_key=os.getenv("EMAIL_API_KEY", ""),
        api_url=os.getenv("EMAIL_API_URL", RESEND_API_URL),
        from_email=os.getenv("EMAIL_FROM", ""),
        notify_to=os.getenv("EMAIL_NOTIFY_TO", ""),
        request_timeout_seconds=float(os.getenv("EMAIL_REQUEST_TIMEOUT_SECONDS", "15")),
        max_retries=int(os.getenv("EMAIL_MAX_RETRIES", "2")),
    )


@lru_cache(maxsize=1)
def get_email_settings() -> EmailSettings:
    """Retorna instância cacheada de EmailSettings."""
    return _load_from_env()
