"""Testes para HttpClient (retry linear só em falhas de transporte)."""

from __future__ import annotations

import httpx
import pytest

from kapso_client.api.connectors.whatsapp.http_base import (
    HttpClient,
    HttpClientConfig,
    HttpError,
    RawResponse,
)


def _client(handler, sleeps: list[float], **config) -> HttpClient:
    async def _sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return HttpClient(
        HttpClientConfig(**config),
        transport=httpx.MockTransport(handler),
        sleep=_sleep,
    )


class TestHttpClient:
    @pytest.mark.asyncio
    async def test_returns_raw_response(self) -> None:
        sleeps: list[float] = []
        client = _client(lambda request: httpx.Response(201, content=b"ok"), sleeps)

        response = await client.send("post", "https://example.com/x", json={"a": 1})

        assert isinstance(response, RawResponse)
        assert response.status_code == 201
        assert response.content == b"ok"
        assert response.text == "ok"
        assert response.is_success
        assert sleeps == []
        await client.aclose()

    @pytest.mark.asyncio
    async def test_http_errors_are_not_retried(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503, content=b"down")

        sleeps: list[float] = []
        client = _client(handler, sleeps)

        response = await client.send("GET", "https://example.com/x")

        assert response.status_code == 503
        assert not response.is_success
        assert len(calls) == 1
        await client.aclose()

    @pytest.mark.asyncio
    async def test_transport_failures_retried_with_linear_backoff(self) -> None:
        attempts = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            attempts["count"] += 1
            if attempts["count"] < 3:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, json={"ok": True})

        sleeps: list[float] = []
        client = _client(handler, sleeps, max_retries=3, retry_delay_seconds=0.5)

        response = await client.send("GET", "https://example.com/x")

        assert response.status_code == 200
        assert sleeps == [0.5, 1.0]
        await client.aclose()

    @pytest.mark.asyncio
    async def test_exhaustion_raises_http_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        sleeps: list[float] = []
        client = _client(handler, sleeps, max_retries=2, retry_delay_seconds=1.0)

        with pytest.raises(HttpError) as exc_info:
            await client.send("GET", "https://example.com/x")

        assert exc_info.value.attempts == 3
        assert "ReadTimeout" in str(exc_info.value)
        assert sleeps == [1.0, 2.0]
        await client.aclose()

    @pytest.mark.asyncio
    async def test_default_headers_merged(self) -> None:
        seen: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.headers)
            return httpx.Response(204)

        client = _client(handler, [], default_headers={"User-Agent": "kapso-client"})

        await client.send("GET", "https://example.com/x", headers={"X-Test": "1"})

        assert seen["user-agent"] == "kapso-client"
        assert seen["x-test"] == "1"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_other_request_errors_fail_without_retry(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ProxyError("proxy down")

        sleeps: list[float] = []
        client = _client(handler, sleeps, max_retries=3)

        with pytest.raises(HttpError, match="ProxyError") as exc_info:
            await client.send("GET", "https://example.com/x")

        assert exc_info.value.attempts == 1
        assert len(calls) == 1
        assert sleeps == []
        await client.aclose()
