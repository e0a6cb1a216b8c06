"""Hierarquia de exceções do cliente.

Falhas de entrada (ValidationError) ficam fora da hierarquia de erros de API:
nunca chegam à rede e nunca são reempacotadas como WhatsAppApiError.
"""

from __future__ import annotations


class KapsoClientError(Exception):
    """Base para falhas produzidas pelo cliente."""


class ConfigurationError(KapsoClientError):
    """Configuração inválida (credenciais ausentes, ambíguas, etc.)."""


class ProxyRequiredError(KapsoClientError):
    """Recurso disponível apenas via Kapso Proxy."""

    HELP_URL = "https://kapso.ai/"

    def __init__(self, feature: str) -> None:
        self.feature = feature
        self.help_url = self.HELP_URL
        super().__init__(
            f"{feature} is only available via the Kapso Proxy. "
            "Set base_url to https://app.kapso.ai/api/meta and provide kapso_api_key. "
            f"Create a free account at {self.help_url}"
        )
