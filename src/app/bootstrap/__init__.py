"""Bootstrap da aplicação — inicialização e wiring.

Configura logging, valida settings no startup e monta o runtime
(diretório de acesso, auditoria, dispatcher, senders).

Uso:
    from app.bootstrap import initialize_app, build_runtime

    initialize_app()
    runtime = build_runtime()
"""

from __future__ import annotations

import logging

from app.bootstrap.runtime import GatewayRuntime, build_runtime
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_dispatch_settings,
    get_email_settings,
    get_firestore_settings,
    get_payment_settings,
    get_whatsapp_settings,
)

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging estruturado JSON com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    base = get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
    )


def collect_settings_errors() -> list[str]:
    """Erros de todas as settings, prefixados pelo domínio."""
    base = get_base_settings()
    dispatch = get_dispatch_settings()
    errors: list[str] = []
    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"dispatch: {error}" for error in dispatch.validate(base))
    errors.extend(f"whatsapp: {error}" for error in get_whatsapp_settings().validate())
    errors.extend(f"payments: {error}" for error in get_payment_settings().validate())
    errors.extend(f"email: {error}" for error in get_email_settings().validate())

    uses_firestore = "firestore" in (
        dispatch.access_directory_backend,
        dispatch.audit_sink_backend,
    )
    if uses_firestore:
        firestore_errors = get_firestore_settings().validate(base.gcp_project)
        errors.extend(f"firestore: {error}" for error in firestore_errors)
    return errors


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    environment = get_base_settings().environment
    errors = collect_settings_errors()

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if environment in STRICT_VALIDATION_ENVS:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


__all__ = [
    "GatewayRuntime",
    "build_runtime",
    "collect_settings_errors",
    "initialize_app",
    "validate_runtime_settings",
]
