"""Configuração de logging estruturado (python-json-logger).

Uso:
    from kapso_client.config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="meu_servico")
    logger = get_logger(__name__)
    logger.info("whatsapp_message_sent", extra={"latency_ms": 42})
"""

from kapso_client.config.logging.config import (
    DEFAULT_SERVICE_NAME,
    LIBRARY_LOGGER_NAME,
    configure_logging,
    get_logger,
)
from kapso_client.config.logging.filters import CorrelationIdFilter
from kapso_client.config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "DEFAULT_SERVICE_NAME",
    "FIELD_RENAME_MAP",
    "LIBRARY_LOGGER_NAME",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
]
