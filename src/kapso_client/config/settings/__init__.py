"""Agregador de settings do kapso_client."""

from __future__ import annotations

from kapso_client.config.settings.client import (
    GRAPH_API_BASE_URL,
    GRAPH_API_VERSION,
    KAPSO_PROXY_BASE_URL,
    KAPSO_PROXY_PATTERN,
    BearerToken,
    ClientConfig,
    Credential,
    ProxyApiKey,
    get_client_config,
    load_client_config_from_env,
    normalize_base_url,
)

__all__ = [
    "GRAPH_API_BASE_URL",
    "GRAPH_API_VERSION",
    "KAPSO_PROXY_BASE_URL",
    "KAPSO_PROXY_PATTERN",
    "BearerToken",
    "ClientConfig",
    "Credential",
    "ProxyApiKey",
    "get_client_config",
    "load_client_config_from_env",
    "normalize_base_url",
]
