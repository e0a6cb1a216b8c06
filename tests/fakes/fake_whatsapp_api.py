"""Fake da Graph API sobre httpx.MockTransport para testes deterministas."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx

from kapso_client.client import WhatsAppClient
from kapso_client.config.settings import ClientConfig

Handler = Callable[[httpx.Request], httpx.Response]


class FakeWhatsAppApi:
    """Responde com uma fila de respostas e guarda as requisições recebidas.

    Itens da fila podem ser httpx.Response ou exceções (levantadas no envio).
    Fila vazia responde `{"success": true}`.
    """

    def __init__(self, *responses: httpx.Response | Exception) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def queue(self, *responses: httpx.Response | Exception) -> None:
        self._responses.extend(responses)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            return httpx.Response(200, json={"success": True})
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


def make_client(
    api: FakeWhatsAppApi,
    *,
    proxy: bool = False,
    sleeps: list[float] | None = None,
    **config_overrides: Any,
) -> WhatsAppClient:
    """Cria WhatsAppClient ligado ao fake (Graph API direta ou Kapso Proxy)."""
    if proxy:
        config = ClientConfig.create(
            kapso_api_key="kapso-key",
            base_url="https://app.kapso.ai/api/meta",
            **config_overrides,
        )
    else:
        config = ClientConfig.create(access_token="token-123", **config_overrides)

    async def _sleep(seconds: float) -> None:
        if sleeps is not None:
            sleeps.append(seconds)

    return WhatsAppClient(config, transport=api.transport, sleep=_sleep)
