"""Testes dos recursos de chamadas, conversas, contatos e flows."""

from __future__ import annotations

import json

import httpx
import pytest

from kapso_client.api.connectors.whatsapp.models import (
    CallRecord,
    ContactRecord,
    ConversationRecord,
    FlowDeployResult,
)
from kapso_client.api.validators.whatsapp import ValidationError
from kapso_client.utils.errors import ConfigurationError, KapsoClientError, ProxyRequiredError
from tests.fakes.fake_whatsapp_api import FakeWhatsAppApi, make_client

SESSION = {"sdp_type": "answer", "sdp": "v=0"}


class TestCallsResource:
    @pytest.mark.asyncio
    async def test_connect(self) -> None:
        api = FakeWhatsAppApi(
            httpx.Response(200, json={"messaging_product": "whatsapp", "calls": [{"id": "c1"}]})
        )
        client = make_client(api)

        result = await client.calls.connect("123", "5511", session={"sdp_type": "offer"})

        assert result.calls[0]["id"] == "c1"
        assert api.last_json()["action"] == "connect"

    @pytest.mark.asyncio
    async def test_accept_and_terminate(self) -> None:
        api = FakeWhatsAppApi()
        client = make_client(api)

        accepted = await client.calls.accept("123", "c1", SESSION, biz_opaque_callback_data="t")
        accept_body = api.last_json()
        await client.calls.terminate("123", "c1")

        assert accepted.success
        assert accept_body == {
            "messaging_product": "whatsapp",
            "call_id": "c1",
            "action": "accept",
            "session": SESSION,
            "biz_opaque_callback_data": "t",
        }
        assert api.last_json()["action"] == "terminate"

    @pytest.mark.asyncio
    async def test_pre_accept_requires_session(self) -> None:
        client = make_client(FakeWhatsAppApi())
        with pytest.raises(ValidationError, match="session"):
            await client.calls.pre_accept("123", "c1", None)  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_history_requires_proxy(self) -> None:
        client = make_client(FakeWhatsAppApi())
        with pytest.raises(ProxyRequiredError):
            await client.calls.list("123")
        with pytest.raises(ProxyRequiredError):
            await client.calls.get("123", "c1")

    @pytest.mark.asyncio
    async def test_history_in_proxy(self) -> None:
        api = FakeWhatsAppApi(
            httpx.Response(200, json={"data": [{"id": "c1", "direction": "INBOUND"}]})
        )
        client = make_client(api, proxy=True)

        page = await client.calls.list("123", direction="INBOUND")

        assert isinstance(page.data[0], CallRecord)
        assert page.data[0].direction == "INBOUND"

    @pytest.mark.asyncio
    async def test_permissions(self) -> None:
        api = FakeWhatsAppApi(httpx.Response(200, json={"permission": {"status": "granted"}}))
        client = make_client(api)

        result = await client.calls.permissions.get("123", "5511")

        assert result == {"permission": {"status": "granted"}}
        assert api.last_request.url.params["user_wa_id"] == "5511"


class TestConversationsResource:
    @pytest.mark.asyncio
    async def test_requires_proxy(self) -> None:
        client = make_client(FakeWhatsAppApi())
        with pytest.raises(ProxyRequiredError, match="Conversations API"):
            await client.conversations.list("123")

    @pytest.mark.asyncio
    async def test_get_unwraps_data_envelope(self) -> None:
        api = FakeWhatsAppApi(
            httpx.Response(200, json={"data": {"id": "conv-1", "status": "active"}})
        )
        client = make_client(api, proxy=True)

        conversation = await client.conversations.get("conv-1")

        assert isinstance(conversation, ConversationRecord)
        assert conversation.id == "conv-1"
        assert conversation.status == "active"

    @pytest.mark.asyncio
    async def test_archive_patches_status(self) -> None:
        api = FakeWhatsAppApi()
        client = make_client(api, proxy=True)

        await client.conversations.archive("conv-1")

        assert api.last_request.method == "PATCH"
        assert api.last_request.url.path == "/api/meta/v24.0/conversations/conv-1"
        assert api.last_json() == {"status": "archived"}


class TestContactsResource:
    @pytest.mark.asyncio
    async def test_update_without_fields_sends_nothing(self) -> None:
        api = FakeWhatsAppApi()
        client = make_client(api, proxy=True)

        assert await client.contacts.update("123", "5511") is None
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_add_tags_merges_existing(self) -> None:
        api = FakeWhatsAppApi(
            httpx.Response(200, json={"wa_id": "5511", "metadata": {"tags": ["lead", "vip"]}}),
            httpx.Response(200, json={"success": True}),
        )
        client = make_client(api, proxy=True)

        await client.contacts.add_tags("123", "5511", ["vip", "cliente"])

        assert api.last_request.method == "PATCH"
        assert api.last_json() == {"metadata": {"tags": ["lead", "vip", "cliente"]}}

    @pytest.mark.asyncio
    async def test_remove_tags(self) -> None:
        api = FakeWhatsAppApi(
            httpx.Response(200, json={"data": {"wa_id": "5511", "metadata": {"tags": ["a", "b"]}}}),
            httpx.Response(200, json={"success": True}),
        )
        client = make_client(api, proxy=True)

        await client.contacts.remove_tags("123", "5511", ["a"])

        assert api.last_json() == {"metadata": {"tags": ["b"]}}

    @pytest.mark.asyncio
    async def test_search(self) -> None:
        api = FakeWhatsAppApi(httpx.Response(200, json={"data": [{"wa_id": "5511"}]}))
        client = make_client(api, proxy=True)

        page = await client.contacts.search("123", "ana")

        assert isinstance(page.data[0], ContactRecord)
        assert api.last_request.url.params["q"] == "ana"

        with pytest.raises(ValidationError, match="query"):
            await client.contacts.search("123", "")

    @pytest.mark.asyncio
    async def test_requires_proxy(self) -> None:
        client = make_client(FakeWhatsAppApi())
        with pytest.raises(ProxyRequiredError):
            await client.contacts.export("123")


class TestFlowsResource:
    @pytest.mark.asyncio
    async def test_update_requires_valid_attribute(self) -> None:
        api = FakeWhatsAppApi()
        client = make_client(api)

        with pytest.raises(ValidationError, match="No valid attributes"):
            await client.flows.update("flow-1", color="blue")
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_deploy_creates_when_missing(self) -> None:
        api = FakeWhatsAppApi(
            httpx.Response(200, json={"data": []}),
            httpx.Response(200, json={"id": "flow-9"}),
            httpx.Response(200, json={"success": True, "validation_errors": []}),
            httpx.Response(200, json={"success": True}),
        )
        client = make_client(api)

        result = await client.flows.deploy("waba-1", "agenda", {"version": "6.0", "screens": []})

        assert isinstance(result, FlowDeployResult)
        assert result.id == "flow-9"
        assert result.created is True
        paths = [request.url.path for request in api.requests]
        assert paths == [
            "/v24.0/waba-1/flows",
            "/v24.0/waba-1/flows",
            "/v24.0/flow-9/assets",
            "/v24.0/flow-9/publish",
        ]
        asset_body = json.loads(api.requests[2].content)
        assert asset_body["asset_type"] == "FLOW_JSON"

    @pytest.mark.asyncio
    async def test_deploy_reuses_existing_flow(self) -> None:
        api = FakeWhatsAppApi(
            httpx.Response(200, json={"data": [{"id": "flow-1", "name": "agenda"}]}),
            httpx.Response(200, json={"success": True}),
            httpx.Response(200, json={"success": True}),
            httpx.Response(200, json={"success": True}),
        )
        client = make_client(api)

        result = await client.flows.deploy(
            "waba-1", "agenda", '{"version": "6.0"}', endpoint_uri="https://x.io/flow"
        )

        assert result.created is False
        assert result.id == "flow-1"
        methods_paths = [(r.method, r.url.path) for r in api.requests]
        assert methods_paths == [
            ("GET", "/v24.0/waba-1/flows"),
            ("POST", "/v24.0/flow-1"),
            ("POST", "/v24.0/flow-1/assets"),
            ("POST", "/v24.0/flow-1/publish"),
        ]
        assert json.loads(api.requests[1].content) == {"endpoint_uri": "https://x.io/flow"}

    @pytest.mark.asyncio
    async def test_deploy_without_created_id_raises(self) -> None:
        api = FakeWhatsAppApi(
            httpx.Response(200, json={"data": []}),
            httpx.Response(200, json={}),
        )
        client = make_client(api)

        with pytest.raises(KapsoClientError, match="no id"):
            await client.flows.deploy("waba-1", "agenda", {"screens": []})

    @pytest.mark.asyncio
    async def test_download_flow_media_needs_token_in_proxy(self) -> None:
        client = make_client(FakeWhatsAppApi(), proxy=True)

        with pytest.raises(ConfigurationError, match="Access token"):
            await client.flows.download_flow_media("https://cdn.example.com/f")

    @pytest.mark.asyncio
    async def test_download_flow_media_uses_bearer(self) -> None:
        api = FakeWhatsAppApi(httpx.Response(200, content=b"file"))
        client = make_client(api, proxy=True)

        content = await client.flows.download_flow_media("https://cdn.example.com/f", "tok-x")

        assert content == b"file"
        assert api.last_request.headers["Authorization"] == "Bearer tok-x"
