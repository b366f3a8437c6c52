"""Cliente HTTP com retry/backoff para chamadas outbound.

Usado pelos senders de canal (Graph API) e de email. Retenta 429, 5xx,
timeouts e falhas de conexão; qualquer outro status volta ao chamador.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = frozenset({429})


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP.

    transport permite injetar httpx.MockTransport em testes.
    """

    timeout_seconds: float = 30.0
    max_retries: int = 3
    backoff_base_seconds: float = 2.0
    backoff_max_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True
    transport: httpx.AsyncBaseTransport | None = None


class HttpError(Exception):
    """Erro de requisição HTTP sem dados sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


def _is_retryable_status(status_code: int) -> bool:
    return status_code in RETRYABLE_STATUS or status_code >= 500


class HttpClient:
    """Cliente HTTP assíncrono com retry exponencial."""

    def __init__(self, config: HttpClientConfig | None = None) -> None:
        self._config = config or HttpClientConfig()

    def _client(self) -> httpx.AsyncClient:
        if self._config.transport is not None:
            return httpx.AsyncClient(transport=self._config.transport)
        return httpx.AsyncClient(verify=self._config.verify_ssl)

    async def post(
        self,
        url: str,
        json: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """POST JSON com retry.

        Raises:
            HttpError: Status retentável esgotado ou falha de conexão persistente.
        """
        merged_headers = {**self._config.default_headers, **(headers or {})}
        for attempt in range(self._config.max_retries + 1):
            try:
                async with self._client() as client:
                    response = await client.post(
                        url,
                        json=json,
                        headers=merged_headers,
                        timeout=self._config.timeout_seconds,
                    )
                if _is_retryable_status(response.status_code):
                    raise HttpError(
                        "http_retryable_status",
                        status_code=response.status_code,
                        is_retryable=True,
                    )
                return response
            except HttpError as exc:
                if not exc.is_retryable or attempt >= self._config.max_retries:
                    raise
            except (httpx.TimeoutException, httpx.ConnectError) as exc:
                if attempt >= self._config.max_retries:
                    raise HttpError("http_connection_error", is_retryable=True) from exc
            await _backoff_sleep(
                attempt,
                self._config.backoff_base_seconds,
                self._config.backoff_max_seconds,
            )
        raise HttpError("http_retry_exhausted", is_retryable=True)


async def _backoff_sleep(attempt: int, base: float, max_seconds: float) -> None:
    backoff = min((2**attempt) * base, max_seconds)
    logger.info("http_backoff", extra={"attempt": attempt + 1, "backoff_seconds": backoff})
    await asyncio.sleep(backoff)
