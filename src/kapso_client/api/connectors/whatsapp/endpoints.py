"""Montagem de URLs `{base}/{versão}/{path}` com query string.

Puramente sintático: não valida se o recurso existe.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

_CAMEL_BOUNDARY = re.compile(r"([A-Z])")


def to_snake_case(key: str) -> str:
    """Converte camelCase em snake_case (`wabaId` -> `waba_id`)."""
    return _CAMEL_BOUNDARY.sub(r"_\1", key).lower().removeprefix("_")


def deep_snake_case_keys(obj: Any) -> Any:
    """Aplica to_snake_case recursivamente nas chaves de dicts e listas."""
    if isinstance(obj, Mapping):
        return {to_snake_case(str(key)): deep_snake_case_keys(value) for key, value in obj.items()}
    if isinstance(obj, list | tuple):
        return [deep_snake_case_keys(item) for item in obj]
    return obj


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_query(query: Mapping[str, Any], prefix: str | None = None) -> list[tuple[str, str]]:
    """Achata parâmetros aninhados em pares (chave, valor).

    - dict  -> `chave[sub]=valor`
    - lista -> `chave=v1&chave=v2`
    - None  -> omitido
    """
    pairs: list[tuple[str, str]] = []
    for key, value in query.items():
        param_key = f"{prefix}[{key}]" if prefix else str(key)
        if isinstance(value, Mapping):
            pairs.extend(flatten_query(value, param_key))
        elif isinstance(value, list | tuple | set | frozenset):
            pairs.extend((param_key, _render(item)) for item in value if item is not None)
        elif value is not None:
            pairs.append((param_key, _render(value)))
    return pairs


def build_url(
    base_url: str,
    api_version: str,
    path: str,
    query: Mapping[str, Any] | None = None,
) -> str:
    """Monta a URL absoluta do recurso.

    Args:
        base_url: URL base já normalizada (sem barra final)
        api_version: Versão da API (ex: v24.0)
        path: Caminho relativo do recurso; a barra inicial é descartada
        query: Parâmetros opcionais (chaves convertidas para snake_case)

    Returns:
        URL completa, ex: https://graph.facebook.com/v24.0/123/messages?limit=10
    """
    clean_path = str(path).removeprefix("/")
    url = f"{base_url.rstrip('/')}/{api_version}/{clean_path}"

    if query:
        pairs = flatten_query(deep_snake_case_keys(query))
        if pairs:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{urlencode(pairs)}"

    return url
