"""Formatter JSON com campos obrigatórios.

Todo record sai com asctime, level, logger, message, correlation_id e
service; campos passados via `extra` são anexados ao JSON.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

# ISO-8601 em UTC-naive; o coletor aplica o fuso
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {"asctime": "2026-02-02T10:30:00", "level": "INFO",
         "logger": "app.services.dispatcher", "message": "dispatch_completed",
         "correlation_id": "abc-123", "service": "agent_gateway"}
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(
        format_string,
        datefmt=DATE_FORMAT,
        rename_fields=FIELD_RENAME_MAP,
    )
