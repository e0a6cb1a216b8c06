"""Testes para kapso_client.config.settings (ClientConfig e carga do ambiente)."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from kapso_client.config.settings import (
    GRAPH_API_BASE_URL,
    GRAPH_API_VERSION,
    BearerToken,
    ClientConfig,
    ProxyApiKey,
    get_client_config,
    load_client_config_from_env,
    normalize_base_url,
)
from kapso_client.utils.errors import ConfigurationError

_ENV_VARS = (
    "WHATSAPP_ACCESS_TOKEN",
    "KAPSO_API_KEY",
    "WHATSAPP_API_BASE_URL",
    "WHATSAPP_API_VERSION",
    "WHATSAPP_REQUEST_TIMEOUT_SECONDS",
    "WHATSAPP_OPEN_TIMEOUT_SECONDS",
    "WHATSAPP_MAX_RETRIES",
    "WHATSAPP_RETRY_DELAY_SECONDS",
    "WHATSAPP_DEBUG",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_client_config.cache_clear()
    yield monkeypatch
    get_client_config.cache_clear()


class TestClientConfigCreate:
    def test_bearer_token_defaults(self) -> None:
        config = ClientConfig.create(access_token="tok")

        assert config.credential == BearerToken("tok")
        assert config.base_url == GRAPH_API_BASE_URL
        assert config.api_version == GRAPH_API_VERSION == "v24.0"
        assert config.api_endpoint == "https://graph.facebook.com/v24.0"
        assert not config.is_proxy
        assert config.access_token == "tok"
        assert config.auth_headers() == {"Authorization": "Bearer tok"}

    def test_proxy_mode_from_base_url(self) -> None:
        config = ClientConfig.create(kapso_api_key="key", base_url="app.kapso.ai/api/meta/")

        assert config.credential == ProxyApiKey("key")
        assert config.base_url == "https://app.kapso.ai/api/meta"
        assert config.is_proxy
        assert config.access_token is None
        assert config.auth_headers() == {"X-API-Key": "key"}

    def test_both_credentials_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="not both"):
            ClientConfig.create(access_token="a", kapso_api_key="b")

    def test_missing_credentials_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Must provide"):
            ClientConfig.create()

    def test_invalid_numbers_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="timeout_seconds must be > 0"):
            ClientConfig.create(access_token="a", timeout_seconds=0)
        with pytest.raises(ConfigurationError, match="max_retries"):
            ClientConfig.create(access_token="a", max_retries=-1)

    def test_blank_credential_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="credential must not be empty"):
            ClientConfig(credential=BearerToken("  "))

    def test_config_is_frozen(self) -> None:
        config = ClientConfig.create(access_token="a")
        with pytest.raises(AttributeError):
            config.debug = True  # type: ignore[misc]

    def test_normalize_base_url(self) -> None:
        assert normalize_base_url("http://localhost:8080/") == "http://localhost:8080"
        assert normalize_base_url("graph.facebook.com") == "https://graph.facebook.com"


class TestLoadFromEnv:
    def test_loads_all_values(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("KAPSO_API_KEY", "env-key")
        clean_env.setenv("WHATSAPP_API_BASE_URL", "https://app.kapso.ai/api/meta")
        clean_env.setenv("WHATSAPP_API_VERSION", "v23.0")
        clean_env.setenv("WHATSAPP_MAX_RETRIES", "5")
        clean_env.setenv("WHATSAPP_RETRY_DELAY_SECONDS", "0.25")
        clean_env.setenv("WHATSAPP_DEBUG", "true")

        config = load_client_config_from_env()

        assert config.is_proxy
        assert config.api_version == "v23.0"
        assert config.max_retries == 5
        assert config.retry_delay_seconds == 0.25
        assert config.debug is True

    def test_missing_credentials(self, clean_env: pytest.MonkeyPatch) -> None:
        with pytest.raises(ConfigurationError):
            load_client_config_from_env()

    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("WHATSAPP_MAX_RETRIES", "abc"),
            ("WHATSAPP_MAX_RETRIES", "2.5"),
            ("WHATSAPP_REQUEST_TIMEOUT_SECONDS", "soon"),
            ("WHATSAPP_RETRY_DELAY_SECONDS", ""),
        ],
    )
    def test_malformed_number_names_variable(
        self, clean_env: pytest.MonkeyPatch, name: str, value: str
    ) -> None:
        clean_env.setenv("WHATSAPP_ACCESS_TOKEN", "tok")
        clean_env.setenv(name, value)

        with pytest.raises(ConfigurationError, match=name):
            load_client_config_from_env()

    def test_get_client_config_is_cached(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("WHATSAPP_ACCESS_TOKEN", "tok")

        assert get_client_config() is get_client_config()
