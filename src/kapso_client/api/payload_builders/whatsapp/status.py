"""Payloads de status: confirmação de leitura e indicador de digitação."""

from __future__ import annotations

from typing import Any

from kapso_client.api.validators.whatsapp.common import require_text
from kapso_client.app.constants.whatsapp import MESSAGING_PRODUCT, MessageType, RecipientType


def build_mark_read_payload(message_id: str) -> dict[str, Any]:
    require_text(message_id, "message_id")
    return {
        "messaging_product": MESSAGING_PRODUCT,
        "status": "read",
        "message_id": message_id,
    }


def build_typing_indicator_payload(to: str) -> dict[str, Any]:
    require_text(to, "to")
    return {
        "messaging_product": MESSAGING_PRODUCT,
        "recipient_type": RecipientType.INDIVIDUAL.value,
        "to": to,
        "type": MessageType.TEXT.value,
        "text": {"typing_indicator": {"type": "text"}},
    }
