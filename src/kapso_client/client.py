"""Cliente async da WhatsApp Cloud API / Kapso Proxy.

Ponto único de I/O: monta a URL, injeta credenciais, executa via HttpClient,
normaliza a resposta e loga o resultado. Os recursos (messages, media, ...)
só montam payloads e convertem respostas em modelos.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from datetime import datetime
from types import TracebackType
from typing import Any, Self

import httpx

from kapso_client.api.connectors.whatsapp.endpoints import build_url
from kapso_client.api.connectors.whatsapp.http_base import (
    HttpClient,
    HttpClientConfig,
    HttpError,
    RawResponse,
)
from kapso_client.api.connectors.whatsapp.meta_errors import WhatsAppApiError
from kapso_client.api.connectors.whatsapp.meta_logging import (
    log_meta_error,
    log_request,
    log_response,
    log_success,
)
from kapso_client.api.connectors.whatsapp.response import ResponseType, normalize_response
from kapso_client.config.settings import ClientConfig, load_client_config_from_env
from kapso_client.resources import (
    CallsResource,
    ContactsResource,
    ConversationsResource,
    FlowsResource,
    MediaResource,
    MessagesResource,
    PhoneNumbersResource,
    TemplatesResource,
)

logger = logging.getLogger(__name__)


class WhatsAppClient:
    """Cliente da API com um recurso por área funcional.

    Exemplo:
        async with WhatsAppClient(ClientConfig.create(access_token="...")) as client:
            await client.messages.send_text("123", to="5511999999999", body="Olá")
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: HttpClient | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config
        self._now = now
        self._http = http_client or HttpClient(
            HttpClientConfig(
                timeout_seconds=config.timeout_seconds,
                connect_timeout_seconds=config.open_timeout_seconds,
                max_retries=config.max_retries,
                retry_delay_seconds=config.retry_delay_seconds,
            ),
            transport=transport,
            sleep=sleep,
        )

        self.messages = MessagesResource(self)
        self.media = MediaResource(self)
        self.templates = TemplatesResource(self)
        self.phone_numbers = PhoneNumbersResource(self)
        self.calls = CallsResource(self)
        self.conversations = ConversationsResource(self)
        self.contacts = ContactsResource(self)
        self.flows = FlowsResource(self)

    @classmethod
    def from_env(cls, **kwargs: Any) -> WhatsAppClient:
        """Cria o cliente a partir das variáveis WHATSAPP_* / KAPSO_API_KEY."""
        return cls(load_client_config_from_env(), **kwargs)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def is_proxy(self) -> bool:
        return self._config.is_proxy

    def build_headers(self, custom: Mapping[str, str | None] | None = None) -> dict[str, str]:
        """Headers de autenticação + customizados (valores None são descartados)."""
        merged: dict[str, str | None] = {**self._config.auth_headers(), **(custom or {})}
        return {key: value for key, value in merged.items() if value is not None}

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        data: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str | None] | None = None,
        response_type: ResponseType = "auto",
    ) -> Any:
        """Executa uma chamada autenticada à API.

        Args:
            method: Verbo HTTP
            path: Caminho relativo à versão (ex: "123/messages")
            json: Corpo JSON
            data: Campos de formulário (multipart quando há `files`)
            files: Arquivos do multipart
            query: Parâmetros de query (None é omitido)
            headers: Headers extras
            response_type: "auto", "json" ou "raw"

        Returns:
            Corpo normalizado (dict/list com chaves snake_case), EMPTY_SUCCESS
            ou bytes quando `response_type="raw"`.

        Raises:
            WhatsAppApiError: Status não-2xx, JSON inválido ou falha de rede
        """
        method = method.upper()
        url = build_url(self._config.base_url, self._config.api_version, path, query)
        request_headers = self.build_headers(headers)
        body = json if json is not None else data

        try:
            response = await self._send(
                method, url, request_headers, body, json=json, data=data, files=files
            )
            result = normalize_response(
                response.status_code,
                response.headers,
                response.content,
                response_type,
                now=self._now,
            )
        except WhatsAppApiError as exc:
            log_meta_error(exc, method, path)
            raise

        log_success(method, path, response.status_code)
        return result

    async def fetch(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str | None] | None = None,
    ) -> RawResponse:
        """Requisição autenticada a uma URL absoluta (ex: download de mídia).

        Raises:
            WhatsAppApiError: Status não-2xx ou falha de rede
        """
        method = method.upper()
        response = await self._send(method, url, self.build_headers(headers), None)
        if not response.is_success:
            error = WhatsAppApiError.from_response(
                response.status_code, response.headers, response.content, now=self._now
            )
            log_meta_error(error, method, url)
            raise error
        return response

    async def raw_request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str | None] | None = None,
    ) -> RawResponse:
        """Requisição sem credenciais e sem tratamento de status."""
        clean_headers = {key: value for key, value in (headers or {}).items() if value is not None}
        return await self._send(method.upper(), url, clean_headers, None)

    async def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        log_body: Any,
        *,
        json: Any = None,
        data: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> RawResponse:
        if self._config.debug:
            log_request(method, url, headers, log_body)
        try:
            response = await self._http.send(
                method, url, headers=headers, json=json, data=data, files=files
            )
        except HttpError as exc:
            raise WhatsAppApiError.from_transport_error(exc) from exc
        if self._config.debug:
            log_response(method, url, response.status_code, response.headers, response.content)
        return response

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
