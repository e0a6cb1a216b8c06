"""Testes para montagem de URL e normalização de respostas."""

from __future__ import annotations

import pytest

from kapso_client.api.connectors.whatsapp.endpoints import (
    build_url,
    deep_snake_case_keys,
    flatten_query,
    to_snake_case,
)
from kapso_client.api.connectors.whatsapp.meta_errors import WhatsAppApiError
from kapso_client.api.connectors.whatsapp.response import (
    EMPTY_SUCCESS,
    EmptySuccess,
    normalize_response,
)

BASE = "https://graph.facebook.com"
JSON_HEADERS = {"Content-Type": "application/json; charset=utf-8"}


class TestBuildUrl:
    def test_joins_version_and_strips_leading_slash(self) -> None:
        assert build_url(BASE, "v24.0", "/123/messages") == f"{BASE}/v24.0/123/messages"

    def test_query_keys_snake_cased_and_none_omitted(self) -> None:
        url = build_url(BASE, "v24.0", "123/contacts", {"phoneNumber": "5511", "limit": None})
        assert url == f"{BASE}/v24.0/123/contacts?phone_number=5511"

    def test_nested_and_list_values(self) -> None:
        url = build_url(BASE, "v24.0", "x", {"filters": {"status": "open"}, "ids": ["a", "b"]})
        assert url == f"{BASE}/v24.0/x?filters%5Bstatus%5D=open&ids=a&ids=b"

    def test_appends_with_ampersand_when_path_has_query(self) -> None:
        url = build_url(BASE, "v24.0", "x?fields=id", {"limit": 10})
        assert url == f"{BASE}/v24.0/x?fields=id&limit=10"

    def test_empty_query_adds_nothing(self) -> None:
        assert build_url(BASE, "v24.0", "x", {"a": None}) == f"{BASE}/v24.0/x"


class TestCaseHelpers:
    def test_to_snake_case(self) -> None:
        assert to_snake_case("wabaId") == "waba_id"
        assert to_snake_case("already_snake") == "already_snake"
        assert to_snake_case("ID") == "i_d"

    def test_deep_snake_case_keys(self) -> None:
        data = {"messagingProduct": "whatsapp", "items": [{"waId": "1"}]}
        assert deep_snake_case_keys(data) == {
            "messaging_product": "whatsapp",
            "items": [{"wa_id": "1"}],
        }

    def test_flatten_query_booleans(self) -> None:
        assert flatten_query({"active": True, "archived": False}) == [
            ("active", "true"),
            ("archived", "false"),
        ]


class TestNormalizeResponse:
    def test_json_content_type_is_parsed_and_snake_cased(self) -> None:
        result = normalize_response(200, JSON_HEADERS, b'{"messagingProduct": "whatsapp"}')
        assert result == {"messaging_product": "whatsapp"}

    def test_204_is_empty_success(self) -> None:
        result = normalize_response(204, {}, b"")

        assert result is EMPTY_SUCCESS
        assert EmptySuccess() is EMPTY_SUCCESS
        assert bool(result)

    def test_non_json_returns_raw_text(self) -> None:
        assert normalize_response(200, {"content-type": "text/plain"}, b"ok") == "ok"

    def test_raw_returns_body_unchanged(self) -> None:
        assert normalize_response(200, JSON_HEADERS, b"\x00\x01", "raw") == b"\x00\x01"

    def test_json_mode_empty_body(self) -> None:
        assert normalize_response(200, {}, b"", "json") is EMPTY_SUCCESS

    def test_invalid_json_raises_with_status_and_body(self) -> None:
        with pytest.raises(WhatsAppApiError) as exc_info:
            normalize_response(200, JSON_HEADERS, b"{not json")

        error = exc_info.value
        assert error.message.startswith("Invalid JSON response")
        assert error.http_status == 200
        assert error.raw_response == "{not json"

    def test_non_2xx_raises_regardless_of_content_type(self) -> None:
        with pytest.raises(WhatsAppApiError) as exc_info:
            normalize_response(400, {"content-type": "text/html"}, b"<h1>bad</h1>")

        assert exc_info.value.http_status == 400
        assert "<h1>bad</h1>" in exc_info.value.message
