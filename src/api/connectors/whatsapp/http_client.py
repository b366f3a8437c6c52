"""Cliente HTTP especializado para WhatsApp/Meta Graph API.

Estende o HttpClient genérico com:
- Validação de access_token antes de usar
- Tratamento de erros Meta (error.type, error.code) como permanente/transitório
- Logging estruturado sem tokens nem números de telefone
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.whatsapp.meta_errors import parse_meta_error
from app.infra.http import HttpClient, HttpClientConfig, HttpError

if TYPE_CHECKING:
    import httpx

    from config.settings import WhatsAppSettings

logger: logging.Logger = logging.getLogger(__name__)


def build_text_payload(to: str, body: str) -> dict[str, Any]:
    """Payload de mensagem de texto da Cloud API."""
    return {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": to.lstrip("+"),
        "type": "text",
        "text": {"preview_url": False, "body": body},
    }


class WhatsAppHttpClient(HttpClient):
    """Cliente HTTP para a Graph API.

    Rate limiting (429) e 5xx são retentados pelo HttpClient base; erros
    Meta no corpo viram HttpError com is_retryable conforme classificação.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        phone_number_id: str | None = None,
    ) -> None:
        super().__init__(config)
        self.phone_number_id = phone_number_id

    async def send_message(
        self,
        endpoint: str,
        access_token: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """Envia mensagem via Graph API e retorna o JSON de resposta.

        Raises:
            ValueError: Se access_token está vazio.
            HttpError: Se erro HTTP ou Meta.
        """
        if not access_token or not access_token.strip():
            logger.error("whatsapp_access_token_missing", extra={"endpoint": endpoint})
            raise ValueError(
                "access_token é obrigatório para envio de mensagens. "
                "Verifique se WHATSAPP_ACCESS_TOKEN está configurado."
            )

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {access_token}",
        }
        response = await self.post(endpoint, json=payload, headers=headers)
        return self._process_response(response, endpoint)

    def _process_response(self, response: httpx.Response, endpoint: str) -> dict[str, Any]:
        try:
            response_data = response.json()
        except json.JSONDecodeError as e:
            logger.error("whatsapp_invalid_response_json", extra={"endpoint": endpoint})
            raise HttpError("Response JSON inválido", status_code=response.status_code) from e

        meta_error = parse_meta_error(response_data) if isinstance(response_data, dict) else None
        if meta_error:
            logger.warning(
                "whatsapp_api_error",
                extra={
                    "endpoint": endpoint,
                    "error_type": meta_error.error_type,
                    "error_code": meta_error.error_code,
                    "is_permanent": meta_error.is_permanent,
                    "trace_id": meta_error.trace_id,
                },
            )
            raise HttpError(
                f"Meta API error: {meta_error.error_type} ({meta_error.error_code})",
                status_code=meta_error.error_code,
                is_retryable=not meta_error.is_permanent,
            )

        if response.status_code >= 400:
            raise HttpError("whatsapp_http_error", status_code=response.status_code)

        logger.debug(
            "whatsapp_send_ok",
            extra={"endpoint": endpoint, "status_code": response.status_code},
        )
        return response_data


def create_whatsapp_http_client(
    settings: WhatsAppSettings | None = None,
) -> WhatsAppHttpClient:
    """Factory para criar cliente WhatsApp com config das settings."""
    # Import local para evitar dependência circular
    from config.settings import get_whatsapp_settings

    whatsapp = settings or get_whatsapp_settings()
    config = HttpClientConfig(
        timeout_seconds=whatsapp.request_timeout_seconds,
        max_retries=whatsapp.max_retries,
    )
    return WhatsAppHttpClient(
        config=config,
        phone_number_id=whatsapp.phone_number_id,
    )
