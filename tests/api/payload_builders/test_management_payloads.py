"""Testes dos payloads de gerenciamento: upload, templates, chamadas, números,
contatos, flows e status."""

from __future__ import annotations

import json

import pytest

from kapso_client.api.payload_builders.whatsapp.calls import (
    build_call_action_payload,
    build_call_connect_payload,
    build_call_permission_update_payload,
)
from kapso_client.api.payload_builders.whatsapp.contacts import (
    build_contact_search_query,
    build_contact_update_payload,
    merge_tags,
    remove_tags,
    require_tags,
)
from kapso_client.api.payload_builders.whatsapp.flows import (
    build_flow_asset_payload,
    build_flow_create_payload,
    build_flow_update_payload,
    join_fields,
)
from kapso_client.api.payload_builders.whatsapp.media import (
    build_media_upload_form,
    guess_mime_type,
)
from kapso_client.api.payload_builders.whatsapp.phone_numbers import (
    build_register_payload,
    build_request_code_payload,
    build_verify_code_payload,
)
from kapso_client.api.payload_builders.whatsapp.status import (
    build_mark_read_payload,
    build_typing_indicator_payload,
)
from kapso_client.api.payload_builders.whatsapp.template import (
    build_authentication_template,
    build_button,
    build_header_component,
    build_marketing_template,
    build_template_create_payload,
    build_template_delete_query,
    build_template_update_payload,
)
from kapso_client.api.validators.whatsapp import ValidationError
from kapso_client.app.constants.whatsapp import CallAction


class TestMediaUploadForm:
    def test_form_fields_and_file_part(self) -> None:
        data, files = build_media_upload_form(
            "image", b"\x89PNG", "foto.png", upload_strategy="resumable"
        )

        assert data == {
            "messaging_product": "whatsapp",
            "type": "image",
            "upload_strategy": "resumable",
        }
        assert files == {"file": ("foto.png", b"\x89PNG", "image/png")}

    def test_mime_type_fallback_per_media_type(self) -> None:
        assert guess_mime_type("arquivo.semextensao", "audio") == "audio/mpeg"
        assert guess_mime_type(None, "unknown") == "application/octet-stream"

    def test_explicit_mime_type_wins(self) -> None:
        _, files = build_media_upload_form("document", b"x", "a.bin", mime_type="text/csv")
        assert files["file"][2] == "text/csv"

    def test_invalid_upload_raises(self) -> None:
        with pytest.raises(ValidationError, match="Invalid media type"):
            build_media_upload_form("gif", b"x", "a.gif")
        with pytest.raises(ValidationError, match="non-empty bytes"):
            build_media_upload_form("image", b"", "a.png")
        with pytest.raises(ValidationError, match="filename"):
            build_media_upload_form("image", b"x", "")


class TestTemplateManagement:
    def test_create_payload_normalizes_category(self) -> None:
        payload = build_template_create_payload(
            name="promo",
            language="pt_BR",
            category="marketing",
            components=[{"type": "BODY", "text": "Oferta"}],
            allow_category_change=True,
        )

        assert payload == {
            "name": "promo",
            "language": "pt_BR",
            "category": "MARKETING",
            "components": [{"type": "BODY", "text": "Oferta"}],
            "allow_category_change": True,
        }

    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"name": ""}, "Template name cannot be empty"),
            ({"language": ""}, "Language cannot be empty"),
            ({"category": ""}, "Category cannot be empty"),
            ({"components": []}, "Components cannot be empty"),
            ({"category": "SPAM"}, "Invalid category"),
            ({"components": [{"text": "sem tipo"}]}, "index 0"),
        ],
    )
    def test_create_payload_validation(self, overrides: dict, message: str) -> None:
        fields = {
            "name": "promo",
            "language": "pt_BR",
            "category": "UTILITY",
            "components": [{"type": "BODY", "text": "x"}],
        }
        fields.update(overrides)
        with pytest.raises(ValidationError, match=message):
            build_template_create_payload(**fields)

    def test_update_payload_only_given_fields(self) -> None:
        assert build_template_update_payload() == {}
        assert build_template_update_payload(category="utility") == {"category": "UTILITY"}

    def test_delete_query(self) -> None:
        assert build_template_delete_query(template_id="123") is None
        assert build_template_delete_query(name="promo", language="pt_BR", hsm_id="9") == {
            "name": "promo",
            "language": "pt_BR",
            "hsm_id": "9",
        }
        with pytest.raises(ValidationError, match="template_id or name"):
            build_template_delete_query()

    def test_component_helpers(self) -> None:
        assert build_header_component("image", media_handle="h1") == {
            "type": "HEADER",
            "format": "IMAGE",
            "example": {"header_handle": ["h1"]},
        }
        assert build_button("url", text="Ver", url="https://x.io") == {
            "type": "URL",
            "text": "Ver",
            "url": "https://x.io",
        }

    def test_authentication_template(self) -> None:
        definition = build_authentication_template("otp", "pt_BR")

        assert definition["category"] == "AUTHENTICATION"
        assert definition["message_send_ttl_seconds"] == 60
        types = [component["type"] for component in definition["components"]]
        assert types == ["BODY", "FOOTER", "BUTTONS"]
        assert definition["components"][2]["buttons"] == [{"type": "OTP", "otp_type": "COPY_CODE"}]

    def test_marketing_template_component_order(self) -> None:
        definition = build_marketing_template(
            "promo",
            "pt_BR",
            "Oferta {{1}}",
            header={"type": "HEADER", "format": "TEXT", "text": "Oi"},
            footer="Sair: PARAR",
            buttons=[{"type": "QUICK_REPLY", "text": "Quero"}],
        )
        types = [component["type"] for component in definition["components"]]
        assert types == ["HEADER", "BODY", "FOOTER", "BUTTONS"]


class TestCallsPayloads:
    def test_connect(self) -> None:
        payload = build_call_connect_payload("5511999", session={"sdp_type": "offer", "sdp": "v=0"})
        assert payload["action"] == "connect"
        assert payload["session"]["sdp_type"] == "offer"

    def test_accept_requires_session(self) -> None:
        with pytest.raises(ValidationError, match="session"):
            build_call_action_payload(CallAction.ACCEPT, "call-1")

    def test_reject_and_terminate_only_need_call_id(self) -> None:
        assert build_call_action_payload("reject", "call-1") == {
            "messaging_product": "whatsapp",
            "call_id": "call-1",
            "action": "reject",
        }
        with pytest.raises(ValidationError, match="call_id"):
            build_call_action_payload("terminate", "")

    def test_invalid_action(self) -> None:
        with pytest.raises(ValidationError, match="Invalid call action"):
            build_call_action_payload("hold", "call-1")

    def test_permission_update(self) -> None:
        payload = build_call_permission_update_payload("5511", {"status": "granted"})
        assert payload == {"user_wa_id": "5511", "permission": {"status": "granted"}}


class TestPhoneNumberPayloads:
    def test_request_code_method_normalized(self) -> None:
        assert build_request_code_payload("sms", "pt_BR") == {
            "code_method": "SMS",
            "language": "pt_BR",
        }
        with pytest.raises(ValidationError, match="Invalid code method"):
            build_request_code_payload("EMAIL")

    def test_verify_and_register(self) -> None:
        assert build_verify_code_payload(123456) == {"code": "123456"}
        assert build_register_payload("000111") == {
            "messaging_product": "whatsapp",
            "pin": "000111",
        }
        with pytest.raises(ValidationError, match="PIN"):
            build_register_payload("")


class TestContactsAndFlows:
    def test_contact_update_only_given_fields(self) -> None:
        assert build_contact_update_payload() == {}
        assert build_contact_update_payload(notes="VIP") == {"notes": "VIP"}

    def test_tags_helpers(self) -> None:
        assert merge_tags(["a", "b"], ["b", "c"]) == ["a", "b", "c"]
        assert remove_tags(["a", "b", "c"], ["b"]) == ["a", "c"]
        assert require_tags("vip") == ["vip"]
        with pytest.raises(ValidationError, match="tags"):
            require_tags([])

    def test_search_query(self) -> None:
        query = build_contact_search_query("ana", limit=5)
        assert query["q"] == "ana"
        assert query["search_in"] == "profile_name,phone_number"
        with pytest.raises(ValidationError, match="query"):
            build_contact_search_query("  ")

    def test_flow_create_and_update(self) -> None:
        assert build_flow_create_payload("agenda") == {"name": "agenda", "categories": ["OTHER"]}
        assert build_flow_update_payload({"name": "novo", "ignored": 1}) == {"name": "novo"}
        with pytest.raises(ValidationError, match="No valid attributes"):
            build_flow_update_payload({"ignored": 1})

    def test_flow_asset_serializes_mapping(self) -> None:
        payload = build_flow_asset_payload({"version": "6.0", "screens": []})

        assert payload["asset_type"] == "FLOW_JSON"
        assert json.loads(payload["asset"]) == {"version": "6.0", "screens": []}

    def test_join_fields(self) -> None:
        assert join_fields(None) is None
        assert join_fields(["id", "name"]) == "id,name"
        assert join_fields("id") == "id"


class TestStatusPayloads:
    def test_mark_read(self) -> None:
        assert build_mark_read_payload("wamid.1") == {
            "messaging_product": "whatsapp",
            "status": "read",
            "message_id": "wamid.1",
        }

    def test_typing_indicator_requires_to(self) -> None:
        assert build_typing_indicator_payload("5511")["to"] == "5511"
        with pytest.raises(ValidationError):
            build_typing_indicator_payload("")
