"""Base dos recursos da API (messages, media, templates, ...)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kapso_client.utils.errors import ProxyRequiredError

if TYPE_CHECKING:
    from kapso_client.client import WhatsAppClient


class BaseResource:
    """Recurso ligado a um WhatsAppClient.

    Recursos não guardam estado próprio: montam o payload, chamam
    `client.request` e convertem a resposta em modelo tipado.
    """

    def __init__(self, client: WhatsAppClient) -> None:
        self._client = client

    def _require_proxy(self, feature: str) -> None:
        """Levanta ProxyRequiredError fora do modo Kapso Proxy."""
        if not self._client.is_proxy:
            raise ProxyRequiredError(feature)
