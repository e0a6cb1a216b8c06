"""Settings do cliente WhatsApp Cloud API / Kapso Proxy.

A credencial é um tipo soma (BearerToken | ProxyApiKey) resolvido na
construção: ambas ou nenhuma geram ConfigurationError, então nenhum ponto de
chamada precisa checar flags de modo.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, TypeVar

from kapso_client.utils.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

NumberT = TypeVar("NumberT", int, float)

# Constantes do Graph API
GRAPH_API_VERSION: str = "v24.0"
GRAPH_API_BASE_URL: str = "https://graph.facebook.com"
KAPSO_PROXY_BASE_URL: str = "https://app.kapso.ai/api/meta"
KAPSO_PROXY_PATTERN = re.compile(r"kapso\.ai")

_SCHEME_PATTERN = re.compile(r"^https?://")


@dataclass(frozen=True)
class BearerToken:
    """Access token da Graph API (header Authorization)."""

    token: str

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@dataclass(frozen=True)
class ProxyApiKey:
    """API key do Kapso Proxy (header X-API-Key)."""

    api_key: str

    def auth_headers(self) -> dict[str, str]:
        return {"X-API-Key": self.api_key}


Credential = BearerToken | ProxyApiKey


def normalize_base_url(url: str) -> str:
    """Garante esquema http(s) e remove a barra final."""
    url = str(url).strip()
    if not _SCHEME_PATTERN.match(url):
        url = f"https://{url}"
    return url.rstrip("/")


@dataclass(frozen=True)
class ClientConfig:
    """Configuração imutável do cliente.

    Attributes:
        credential: BearerToken ou ProxyApiKey
        base_url: URL base (Graph API ou Kapso Proxy)
        api_version: Versão da Graph API (ex: v24.0)
        timeout_seconds: Timeout total por requisição
        open_timeout_seconds: Timeout de conexão
        max_retries: Tentativas extras em falhas de transporte
        retry_delay_seconds: Atraso base (linear) entre tentativas
        debug: Loga request/response em DEBUG (sem credenciais)
    """

    credential: Credential
    base_url: str = GRAPH_API_BASE_URL
    api_version: str = GRAPH_API_VERSION
    timeout_seconds: float = 60.0
    open_timeout_seconds: float = 10.0
    max_retries: int = 3
    retry_delay_seconds: float = 1.0
    debug: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.credential, (BearerToken, ProxyApiKey)):
            raise ConfigurationError("credential must be a BearerToken or ProxyApiKey")
        object.__setattr__(self, "base_url", normalize_base_url(self.base_url))
        errors = self.validate()
        if errors:
            raise ConfigurationError("; ".join(errors))

    @classmethod
    def create(
        cls,
        *,
        access_token: str | None = None,
        kapso_api_key: str | None = None,
        base_url: str | None = None,
        api_version: str | None = None,
        timeout_seconds: float = 60.0,
        open_timeout_seconds: float = 10.0,
        max_retries: int = 3,
        retry_delay_seconds: float = 1.0,
        debug: bool = False,
    ) -> ClientConfig:
        """Monta a configuração a partir de credenciais avulsas.

        Raises:
            ConfigurationError: Se nenhuma ou ambas as credenciais forem informadas.
        """
        credential = _resolve_credential(access_token, kapso_api_key)
        return cls(
            credential=credential,
            base_url=base_url or GRAPH_API_BASE_URL,
            api_version=api_version or GRAPH_API_VERSION,
            timeout_seconds=timeout_seconds,
            open_timeout_seconds=open_timeout_seconds,
            max_retries=max_retries,
            retry_delay_seconds=retry_delay_seconds,
            debug=debug,
        )

    @property
    def is_proxy(self) -> bool:
        """True quando a URL base aponta para o Kapso Proxy."""
        return bool(KAPSO_PROXY_PATTERN.search(self.base_url))

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com versão."""
        return f"{self.base_url}/{self.api_version}"

    @property
    def access_token(self) -> str | None:
        if isinstance(self.credential, BearerToken):
            return self.credential.token
        return None

    def auth_headers(self) -> dict[str, str]:
        return self.credential.auth_headers()

    def validate(self) -> list[str]:
        """Valida limites numéricos e credencial.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        secret = (
            self.credential.token
            if isinstance(self.credential, BearerToken)
            else self.credential.api_key
        )
        if not secret or not secret.strip():
            errors.append("credential must not be empty")

        if not self.api_version:
            errors.append("api_version must not be empty")

        if self.timeout_seconds <= 0:
            errors.append("timeout_seconds must be > 0")

        if self.open_timeout_seconds <= 0:
            errors.append("open_timeout_seconds must be > 0")

        if self.max_retries < 0:
            errors.append("max_retries must be >= 0")

        if self.retry_delay_seconds < 0:
            errors.append("retry_delay_seconds must be >= 0")

        return errors


def _resolve_credential(access_token: str | None, kapso_api_key: str | None) -> Credential:
    if access_token and kapso_api_key:
        raise ConfigurationError("Provide either access_token or kapso_api_key, not both")
    if access_token:
        return BearerToken(access_token)
    if kapso_api_key:
        return ProxyApiKey(kapso_api_key)
    raise ConfigurationError("Must provide either access_token or kapso_api_key")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("true", "1", "yes")


def _env_number(name: str, default: str, parse: Callable[[str], NumberT]) -> NumberT:
    raw = os.getenv(name, default)
    try:
        return parse(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


def load_client_config_from_env() -> ClientConfig:
    """Carrega ClientConfig a partir de variáveis de ambiente."""
    return ClientConfig.create(
        access_token=os.getenv("WHATSAPP_ACCESS_TOKEN") or None,
        kapso_api_key=os.getenv("KAPSO_API_KEY") or None,
        base_url=os.getenv("WHATSAPP_API_BASE_URL") or None,
        api_version=os.getenv("WHATSAPP_API_VERSION") or None,
        timeout_seconds=_env_number("WHATSAPP_REQUEST_TIMEOUT_SECONDS", "60", float),
        open_timeout_seconds=_env_number("WHATSAPP_OPEN_TIMEOUT_SECONDS", "10", float),
        max_retries=_env_number("WHATSAPP_MAX_RETRIES", "3", int),
        retry_delay_seconds=_env_number("WHATSAPP_RETRY_DELAY_SECONDS", "1.0", float),
        debug=_env_flag("WHATSAPP_DEBUG"),
    )


@lru_cache(maxsize=1)
def get_client_config() -> ClientConfig:
    """Retorna instância cacheada de ClientConfig carregada do ambiente."""
    return load_client_config_from_env()
