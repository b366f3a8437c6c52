"""Settings do canal WhatsApp (Graph API).

Dois grupos independentes:
- inbound: challenge do webhook, secret HMAC e modo de processamento
- outbound: credenciais e limites para envio de texto
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

GRAPH_API_VERSION: str = "v24.0"
GRAPH_API_BASE_URL: str = "https://graph.facebook.com"

PROCESSING_MODES = ("async", "inline")

# Ambientes em que o webhook responde só depois de processar
_INLINE_ENVIRONMENTS = ("development", "dev", "test")


@dataclass(frozen=True)
class WhatsAppSettings:
    """Configurações do canal WhatsApp.

    Attributes:
        verify_token: Valor esperado em hub.verify_token
        webhook_secret: Secret do header X-Hub-Signature-256
        access_token: Bearer token da Graph API
        phone_number_id: Número remetente no Meta Business
        api_version: Versão da Graph API
        api_base_url: Host da Graph API
        request_timeout_seconds: Timeout por requisição de envio
        max_retries: Tentativas extras em erro transitório
        webhook_processing_mode: "async" (ack antes) ou "inline" (ack depois)
    """

    verify_token: str = ""
    webhook_secret: str = ""
    webhook_processing_mode: str = "async"

    access_token: str = ""
    phone_number_id: str = ""
    api_version: str = GRAPH_API_VERSION
    api_base_url: str = GRAPH_API_BASE_URL
    request_timeout_seconds: float = 30.0
    max_retries: int = 3

    @property
    def api_endpoint(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/{self.api_version}"

    @property
    def can_send(self) -> bool:
        """True se há credenciais para envio outbound."""
        return bool(self.access_token and self.phone_number_id)

    def get_messages_endpoint(self, phone_number_id: str | None = None) -> str:
        """URL de POST /messages para o número informado (ou o configurado).

        Raises:
            ValueError: Se nenhum phone_number_id estiver disponível.
        """
        number_id = phone_number_id or self.phone_number_id
        if not number_id:
            raise ValueError("phone_number_id é obrigatório")
        return f"{self.api_endpoint}/{number_id}/messages"

    def inbound_errors(self) -> list[str]:
        errors = [
            f"{env_name} não configurado"
            for env_name, value in (
                ("WHATSAPP_WEBHOOK_SECRET", self.webhook_secret),
                ("WHATSAPP_VERIFY_TOKEN", self.verify_token),
            )
            if not value
        ]
        if self.webhook_processing_mode not in PROCESSING_MODES:
            errors.append("WHATSAPP_WEBHOOK_PROCESSING_MODE deve ser 'async' ou 'inline'")
        return errors

    def outbound_errors(self) -> list[str]:
        errors = [
            f"{env_name} não configurado"
            for env_name, value in (
                ("WHATSAPP_PHONE_NUMBER_ID", self.phone_number_id),
                ("WHATSAPP_ACCESS_TOKEN", self.access_token),
            )
            if not value
        ]
        if self.request_timeout_seconds <= 0:
            errors.append("WHATSAPP_REQUEST_TIMEOUT_SECONDS deve ser > 0")
        if self.max_retries < 0:
            errors.append("WHATSAPP_MAX_RETRIES deve ser >= 0")
        return errors

    def validate(self) -> list[str]:
        """Erros de inbound seguidos dos de outbound (vazia = OK)."""
        return self.inbound_errors() + self.outbound_errors()


def _default_processing_mode() -> str:
    environment = os.getenv("ENVIRONMENT", "").lower()
    return "inline" if environment in _INLINE_ENVIRONMENTS else "async"


def _load_from_env() -> WhatsAppSettings:
    env = os.environ
    return WhatsAppSettings(
        verify_token=env.get("WHATSAPP_VERIFY_TOKEN", ""),
        webhook_secret=env.get("WHATSAPP_WEBHOOK_SECRET", ""),
        webhook_processing_mode=env.get(
            "WHATSAPP_WEBHOOK_PROCESSING_MODE", _default_processing_mode()
        ).lower(),
        access_token=env.get("WHATSAPP_ACCESS_TOKEN", ""),
        phone_number_id=env.get("WHATSAPP_PHONE_NUMBER_ID", ""),
        api_version=env.get("WHATSAPP_API_VERSION", GRAPH_API_VERSION),
        api_base_url=env.get("WHATSAPP_API_BASE_URL", GRAPH_API_BASE_URL),
        request_timeout_seconds=float(env.get("WHATSAPP_REQUEST_TIMEOUT_SECONDS", "30")),
        max_retries=int(env.get("WHATSAPP_MAX_RETRIES", "3")),
    )


@lru_cache(maxsize=1)
def get_whatsapp_settings() -> WhatsAppSettings:
    """Instância cacheada (limpar com get_whatsapp_settings.cache_clear())."""
    return _load_from_env()
