"""Normalização de respostas HTTP da API (direta ou via Kapso Proxy).

Qualquer status fora de 2xx vira WhatsAppApiError, independente do
content-type. Respostas de sucesso são decodificadas conforme response_type.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, Final, Literal

from kapso_client.api.connectors.whatsapp.endpoints import deep_snake_case_keys
from kapso_client.api.connectors.whatsapp.meta_errors import WhatsAppApiError

ResponseType = Literal["auto", "json", "raw"]


class EmptySuccess:
    """Marcador de sucesso sem corpo (204 ou corpo vazio)."""

    _instance: EmptySuccess | None = None

    def __new__(cls) -> EmptySuccess:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "EMPTY_SUCCESS"


EMPTY_SUCCESS: Final = EmptySuccess()


def is_success_status(status: int) -> bool:
    return 200 <= status < 300


def _content_type(headers: Mapping[str, str] | None) -> str:
    if not headers:
        return ""
    for key, value in headers.items():
        if key.lower() == "content-type":
            return value or ""
    return ""


def _as_text(body: bytes | str | None) -> str:
    if body is None:
        return ""
    if isinstance(body, bytes | bytearray):
        return bytes(body).decode("utf-8", errors="replace")
    return body


def parse_json_body(status: int, body: bytes | str | None) -> Any:
    """Decodifica JSON e normaliza as chaves para snake_case.

    Raises:
        WhatsAppApiError: Se o corpo não for JSON válido (status preservado).
    """
    text = _as_text(body)
    if not text.strip():
        return EMPTY_SUCCESS
    try:
        parsed = json.loads(text)
    except ValueError as exc:
        raise WhatsAppApiError(
            f"Invalid JSON response: {exc}",
            http_status=status,
            raw_response=text,
        ) from exc
    return deep_snake_case_keys(parsed)


def normalize_response(
    status: int,
    headers: Mapping[str, str] | None,
    body: bytes | str | None,
    response_type: ResponseType = "auto",
    *,
    now: Callable[[], datetime] | None = None,
) -> Any:
    """Converte (status, headers, corpo) em valor de sucesso ou levanta erro.

    Args:
        status: Status HTTP
        headers: Headers da resposta
        body: Corpo bruto
        response_type: "auto" (por content-type), "json" ou "raw" (bytes)
        now: Relógio usado para Retry-After em formato de data

    Returns:
        dict/list normalizado, EMPTY_SUCCESS ou o corpo bruto.

    Raises:
        WhatsAppApiError: Para status não-2xx ou JSON inválido.
    """
    if not is_success_status(status):
        raise WhatsAppApiError.from_response(status, headers, body, now=now)

    if response_type == "raw":
        return body
    if response_type == "json":
        return parse_json_body(status, body)

    if "application/json" in _content_type(headers).lower():
        return parse_json_body(status, body)
    if status == 204:
        return EMPTY_SUCCESS
    return _as_text(body)
