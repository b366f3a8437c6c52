"""Settings comuns ao processo: ambiente, identidade do serviço e logs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

ENVIRONMENTS: tuple[Environment, ...] = ("development", "staging", "production")

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_SERVICE_NAME = "agent-gateway"

_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "prod": "production",
    "production": "production",
    "stage": "staging",
    "staging": "staging",
}

_TRUTHY = frozenset({"true", "1", "yes"})


@dataclass(frozen=True)
class BaseSettings:
    """Configurações base do gateway.

    Attributes:
        environment: development | staging | production
        service_name: Identificador do serviço nos logs
        log_level: Nível do root logger
        debug: Modo debug
        gcp_project: Projeto GCP (fallback do Firestore)
        redis_url: URL do Redis, obrigatória só com backend redis
    """

    environment: Environment = "development"
    service_name: str = DEFAULT_SERVICE_NAME
    log_level: str = "INFO"
    debug: bool = False
    gcp_project: str = ""
    redis_url: str = ""

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def validate(self) -> list[str]:
        errors: list[str] = []
        if self.environment not in ENVIRONMENTS:
            errors.append(f"ENVIRONMENT inválido: {self.environment}")
        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL inválido: {self.log_level}")
        return errors


def parse_environment(raw: str) -> Environment:
    """Normaliza o nome do ambiente; valores desconhecidos viram development."""
    return _ENVIRONMENT_ALIASES.get(raw.strip().lower(), "development")


def _load_base_from_env() -> BaseSettings:
    env = os.environ
    return BaseSettings(
        environment=parse_environment(env.get("ENVIRONMENT", "development")),
        service_name=env.get("SERVICE_NAME", DEFAULT_SERVICE_NAME),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
        debug=env.get("DEBUG", "").lower() in _TRUTHY,
        gcp_project=env.get("GCP_PROJECT") or env.get("GOOGLE_CLOUD_PROJECT", ""),
        redis_url=env.get("REDIS_URL", ""),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
