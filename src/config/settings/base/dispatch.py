"""Settings do despacho: timeout de handler e backends de persistência."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

AccessDirectoryBackend = Literal["memory", "firestore", "redis"]
AuditSinkBackend = Literal["memory", "firestore"]

DEFAULT_HANDLER_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True)
class DispatchSettings:
    """Configurações do dispatcher.

    Attributes:
        handler_timeout_seconds: Prazo máximo de um handler
        access_directory_backend: Backend do diretório (memory|firestore|redis)
        audit_sink_backend: Backend da auditoria (memory|firestore)
    """

    handler_timeout_seconds: float = DEFAULT_HANDLER_TIMEOUT_SECONDS
    access_directory_backend: AccessDirectoryBackend = "memory"
    audit_sink_backend: AuditSinkBackend = "memory"

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações de despacho.

        Args:
            base: BaseSettings para verificar ambiente e conexões.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.handler_timeout_seconds <= 0:
            errors.append("DISPATCH_HANDLER_TIMEOUT_SECONDS deve ser > 0")

        if self.access_directory_backend not in ("memory", "firestore", "redis"):
            errors.append(
                f"ACCESS_DIRECTORY_BACKEND inválido: {self.access_directory_backend}"
            )
        if self.audit_sink_backend not in ("memory", "firestore"):
            errors.append(f"AUDIT_SINK_BACKEND inválido: {self.audit_sink_backend}")

        if not base.is_development:
            if self.access_directory_backend == "memory":
                errors.append(
                    "ACCESS_DIRECTORY_BACKEND=memory proibido em staging/production. "
                    "Use Firestore ou Redis."
                )
            if self.audit_sink_backend == "memory":
                errors.append(
                    "AUDIT_SINK_BACKEND=memory proibido em staging/production. "
                    "Use Firestore."
                )

        if self.access_directory_backend == "redis" and not base.redis_url:
            errors.append("ACCESS_DIRECTORY_BACKEND=redis requer REDIS_URL configurado")

        return errors


def _load_dispatch_from_env() -> DispatchSettings:
    """Carrega DispatchSettings de variáveis de ambiente."""
    return DispatchSettings(
        handler_timeout_seconds=float(
            os.getenv(
                "DISPATCH_HANDLER_TIMEOUT_SECONDS", str(DEFAULT_HANDLER_TIMEOUT_SECONDS)
            )
        ),
        access_directory_backend=os.getenv(  # type: ignore[arg-type]
            "ACCESS_DIRECTORY_BACKEND", "memory"
        ).lower(),
        audit_sink_backend=os.getenv(  # type: ignore[arg-type]
            "AUDIT_SINK_BACKEND", "memory"
        ).lower(),
    )


@lru_cache(maxsize=1)
def get_dispatch_settings() -> DispatchSettings:
    """Retorna instância cacheada de DispatchSettings."""
    return _load_dispatch_from_env()
