"""Formatters de logging estruturado.

Campos obrigatórios em todo log JSON:
- asctime, level, logger, message
- correlation_id, service

Nunca incluir tokens, API keys ou números de telefone nos campos extras.
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


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-02-02 10:30:00,123",
            "level": "DEBUG",
            "logger": "kapso_client.client",
            "message": "whatsapp_api_request",
            "correlation_id": "abc-123",
            "service": "kapso_client",
            "method": "POST"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
