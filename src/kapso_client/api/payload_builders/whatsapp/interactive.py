"""Builders para mensagens interativas."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from kapso_client.api.payload_builders.whatsapp.base import wrap_footer
from kapso_client.app.constants.whatsapp import FlowAction, InteractiveType

if TYPE_CHECKING:
    from kapso_client.app.domain.messages import (
        FlowMessage,
        InteractiveButtonsMessage,
        InteractiveCatalogMessage,
        InteractiveCtaUrlMessage,
        InteractiveListMessage,
        InteractiveLocationRequestMessage,
    )

FLOW_MESSAGE_VERSION = "3"


def _interactive(
    interactive_type: InteractiveType,
    action: dict[str, Any],
    *,
    body_text: str | None = None,
    header: Any = None,
    footer: Any = None,
) -> dict[str, Any]:
    interactive_obj: dict[str, Any] = {"type": interactive_type.value}
    if header is not None:
        interactive_obj["header"] = dict(header)
    if body_text is not None:
        interactive_obj["body"] = {"text": body_text}
    if footer:
        interactive_obj["footer"] = wrap_footer(footer)
    interactive_obj["action"] = action
    return {"interactive": interactive_obj}


class ButtonsPayloadBuilder:
    """Builder para botões de resposta (até 3)."""

    def build(self, message: InteractiveButtonsMessage) -> dict[str, Any]:
        return _interactive(
            InteractiveType.BUTTON,
            {"buttons": [dict(button) for button in message.buttons]},
            body_text=message.body_text,
            header=message.header,
            footer=message.footer,
        )


class ListPayloadBuilder:
    """Builder para listas (seções com até 10 linhas no total)."""

    def build(self, message: InteractiveListMessage) -> dict[str, Any]:
        return _interactive(
            InteractiveType.LIST,
            {
                "button": message.button_text,
                "sections": [dict(section) for section in message.sections],
            },
            body_text=message.body_text,
            header=message.header,
            footer=message.footer,
        )


class CtaUrlPayloadBuilder:
    def build(self, message: InteractiveCtaUrlMessage) -> dict[str, Any]:
        return _interactive(
            InteractiveType.CTA_URL,
            {
                "name": "cta_url",
                "parameters": {"display_text": message.display_text, "url": message.url},
            },
            body_text=message.body_text,
            header=message.header,
            footer=message.footer_text,
        )


class CatalogPayloadBuilder:
    def build(self, message: InteractiveCatalogMessage) -> dict[str, Any]:
        return _interactive(
            InteractiveType.CATALOG_MESSAGE,
            {
                "name": "catalog_message",
                "parameters": {
                    "thumbnail_product_retailer_id": message.thumbnail_product_retailer_id,
                },
            },
            body_text=message.body_text,
            footer=message.footer_text,
        )


class LocationRequestPayloadBuilder:
    def build(self, message: InteractiveLocationRequestMessage) -> dict[str, Any]:
        return _interactive(
            InteractiveType.LOCATION_REQUEST_MESSAGE,
            {"name": "send_location"},
            body_text=message.body_text,
            header=message.header,
            footer=message.footer_text,
        )


class FlowPayloadBuilder:
    """Builder para mensagens de Flow.

    `screen` é mesclado em `flow_action_payload` apenas na ação navigate.
    """

    def build(self, message: FlowMessage) -> dict[str, Any]:
        action: dict[str, Any] = {
            "flow_message_version": FLOW_MESSAGE_VERSION,
            "flow_token": message.flow_token,
            "flow_id": message.flow_id,
            "flow_cta": message.flow_cta,
            "flow_action": str(message.flow_action),
            "mode": message.mode,
        }

        action_payload = dict(message.flow_action_payload) if message.flow_action_payload else None
        if str(message.flow_action) == FlowAction.NAVIGATE and message.screen:
            action_payload = {**(action_payload or {}), "screen": message.screen}
        if action_payload is not None:
            action["flow_action_payload"] = action_payload

        return _interactive(
            InteractiveType.FLOW,
            action,
            body_text=message.body_text,
            header=message.header,
            footer=message.footer_text,
        )
