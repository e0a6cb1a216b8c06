"""Helpers de logging para API Meta/WhatsApp (sem credenciais nem PII)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .meta_errors import WhatsAppApiError

logger = logging.getLogger(__name__)

BODY_PREVIEW_LIMIT = 1000

_SENSITIVE_HEADERS = frozenset({"authorization", "x-api-key"})


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Substitui valores de headers de autenticação por `[REDACTED]`."""
    return {
        key: "[REDACTED]" if key.lower() in _SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def body_preview(body: Any) -> str | None:
    if body is None:
        return None
    if isinstance(body, bytes | bytearray):
        text = bytes(body).decode("utf-8", errors="replace")
    elif isinstance(body, str):
        text = body
    else:
        text = repr(body)
    if len(text) > BODY_PREVIEW_LIMIT:
        return f"{text[:BODY_PREVIEW_LIMIT]}..."
    return text


def log_request(method: str, url: str, headers: Mapping[str, str], body: Any = None) -> None:
    logger.debug(
        "whatsapp_api_request",
        extra={
            "method": method,
            "url": url,
            "headers": redact_headers(headers),
            "body_preview": body_preview(body),
        },
    )


def log_response(
    method: str,
    url: str,
    status_code: int,
    headers: Mapping[str, str],
    body: Any = None,
) -> None:
    logger.debug(
        "whatsapp_api_response",
        extra={
            "method": method,
            "url": url,
            "status_code": status_code,
            "headers": dict(headers),
            "body_preview": body_preview(body),
        },
    )


def log_meta_error(meta_error: WhatsAppApiError, method: str, path: str) -> None:
    """Loga erro classificado da Meta sem expor dados sensíveis."""
    logger.warning(
        "whatsapp_api_error",
        extra={
            "method": method,
            "path": path,
            "http_status": meta_error.http_status,
            "error_code": meta_error.code,
            "error_type": meta_error.error_type,
            "category": meta_error.category.value,
            "retry_action": meta_error.retry_hint.action.value,
            "fbtrace_id": meta_error.fbtrace_id,
        },
    )


def log_success(method: str, path: str, status_code: int) -> None:
    logger.debug(
        "whatsapp_api_success",
        extra={"method": method, "path": path, "status_code": status_code},
    )
