"""Cliente HTTP base (adapter de transporte sobre httpx).

Executa uma requisição e devolve status/headers/corpo. Só falhas de rede
(timeout, conexão, protocolo) são repetidas, com atraso linear
`retry_delay * tentativa`. Respostas HTTP, inclusive 4xx/5xx, voltam intactas
para quem chamou.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)

RETRYABLE_TRANSPORT_ERRORS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 60.0
    connect_timeout_seconds: float = 10.0
    max_retries: int = 3
    retry_delay_seconds: float = 1.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpError(Exception):
    """Falha de transporte após esgotar as tentativas (sem dados sensíveis)."""

    def __init__(self, message: str, attempts: int = 1) -> None:
        super().__init__(message)
        self.attempts = attempts


@dataclass(frozen=True)
class RawResponse:
    """Resposta HTTP crua: status, headers e corpo."""

    status_code: int
    headers: httpx.Headers
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class HttpClient:
    """Cliente HTTP async com retry linear para falhas de rede."""

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._sleep = sleep
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                self._config.timeout_seconds,
                connect=self._config.connect_timeout_seconds,
            ),
            verify=self._config.verify_ssl,
            transport=transport,
            follow_redirects=True,
        )

    @property
    def config(self) -> HttpClientConfig:
        return self._config

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        json: Any = None,
        data: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> RawResponse:
        """Executa a requisição, repetindo apenas em falha de transporte.

        Raises:
            HttpError: Se todas as tentativas falharem por erro de rede, ou
                imediatamente em outras falhas de requisição (proxy, esquema,
                protocolo local, decodificação).
        """
        merged_headers = {**self._config.default_headers, **(headers or {})}
        attempt = 0
        while True:
            try:
                response = await self._client.request(
                    method.upper(),
                    url,
                    headers=merged_headers,
                    json=json,
                    data=data,
                    files=files,
                )
                return RawResponse(
                    status_code=response.status_code,
                    headers=response.headers,
                    content=response.content,
                )
            except RETRYABLE_TRANSPORT_ERRORS as exc:
                attempt += 1
                if attempt > self._config.max_retries:
                    logger.warning(
                        "http_retry_exhausted",
                        extra={"method": method.upper(), "attempts": attempt},
                    )
                    raise HttpError(f"{type(exc).__name__}: {exc}", attempts=attempt) from exc
                await _linear_backoff(self._sleep, attempt, self._config.retry_delay_seconds)
            except httpx.RequestError as exc:
                logger.warning(
                    "http_request_failed",
                    extra={"method": method.upper(), "error_type": type(exc).__name__},
                )
                raise HttpError(f"{type(exc).__name__}: {exc}", attempts=attempt + 1) from exc

    async def aclose(self) -> None:
        await self._client.aclose()


async def _linear_backoff(
    sleep: Callable[[float], Awaitable[Any]],
    attempt: int,
    delay_seconds: float,
) -> None:
    backoff = delay_seconds * attempt
    logger.info("http_backoff", extra={"backoff_seconds": backoff, "attempt": attempt})
    await sleep(backoff)
