"""Observabilidade: correlation_id para logs estruturados.

Uso:
    from kapso_client.app.observability import correlation_scope, get_correlation_id
"""

from kapso_client.app.observability.correlation import (
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)

__all__ = [
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "reset_correlation_id",
    "set_correlation_id",
]
