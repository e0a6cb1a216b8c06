"""Configuração centralizada de logging.

A biblioteca só cria loggers (`logging.getLogger(__name__)`); quem decide
handlers e formato é a aplicação. configure_logging() é um atalho opcional
para obter logs JSON estruturados.

Uso:
    from kapso_client.config.logging import configure_logging

    configure_logging(level="DEBUG", service_name="meu_servico")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kapso_client.app.observability import get_correlation_id
from kapso_client.config.logging.filters import CorrelationIdFilter
from kapso_client.config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "kapso_client"

LIBRARY_LOGGER_NAME = "kapso_client"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    logger_name: str | None = None,
) -> logging.Logger:
    """Configura logging JSON estruturado.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Padrão: ContextVar de kapso_client.app.observability.
        logger_name: Logger a configurar. None configura o root logger.

    Returns:
        O logger configurado.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(
        CorrelationIdFilter(service_name, correlation_id_getter or get_correlation_id)
    )

    target = logging.getLogger(logger_name)
    target.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    target.handlers = [handler]
    return target


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado."""
    return logging.getLogger(name)
