"""Conector WhatsApp - adapter de borda para Meta Graph API / Kapso Proxy.

Responsabilidades:
- Montagem de URLs versionadas
- Transporte HTTP com retry para falhas de rede
- Normalização de respostas (JSON, 204, texto cru)
- Classificação de erros com retry hint
- Modelos tipados de resposta
"""

from .endpoints import build_url, deep_snake_case_keys, flatten_query, to_snake_case
from .http_base import HttpClient, HttpClientConfig, HttpError, RawResponse
from .meta_errors import (
    ErrorCategory,
    RetryAction,
    RetryHint,
    WhatsAppApiError,
    classify,
    derive_retry_hint,
    parse_retry_after,
)
from .response import EMPTY_SUCCESS, EmptySuccess, normalize_response

__all__ = [
    "EMPTY_SUCCESS",
    "EmptySuccess",
    "ErrorCategory",
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
    "RawResponse",
    "RetryAction",
    "RetryHint",
    "WhatsAppApiError",
    "build_url",
    "classify",
    "deep_snake_case_keys",
    "derive_retry_hint",
    "flatten_query",
    "normalize_response",
    "parse_retry_after",
    "to_snake_case",
]
