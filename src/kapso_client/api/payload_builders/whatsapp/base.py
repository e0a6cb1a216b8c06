"""Base comum dos builders de payload WhatsApp."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from kapso_client.api.validators.whatsapp.errors import ValidationError
from kapso_client.api.validators.whatsapp.limits import MEDIA_ID_PATTERN
from kapso_client.app.constants.whatsapp import MESSAGING_PRODUCT


class PayloadBuilder(Protocol):
    """Contrato dos builders: devolvem só a parte específica do tipo."""

    def build(self, message: Any) -> dict[str, Any]: ...


def build_base_payload(message: Any) -> dict[str, Any]:
    """Constrói o envelope comum de envio.

    Args:
        message: Mensagem outbound (qualquer variante)

    Returns:
        `{"messaging_product", "recipient_type", "to", "type"}` mais
        `context` e `biz_opaque_callback_data` quando informados
    """
    payload: dict[str, Any] = {
        "messaging_product": MESSAGING_PRODUCT,
        "recipient_type": str(message.recipient_type),
        "to": message.to,
        "type": str(message.message_type),
    }

    if message.context_message_id:
        payload["context"] = {"message_id": message.context_message_id}

    if message.biz_opaque_callback_data:
        payload["biz_opaque_callback_data"] = message.biz_opaque_callback_data

    return payload


def build_media_object(media: Mapping[str, Any] | str, caption: str | None = None) -> dict[str, Any]:
    """Normaliza referência de mídia para `{id}` ou `{link}`.

    String que casa inteira com `\\w+` vira id; qualquer outra, link.
    Mapping é copiado.
    """
    if isinstance(media, Mapping):
        media_obj = dict(media)
    elif isinstance(media, str):
        media_obj = {"id": media} if MEDIA_ID_PATTERN.fullmatch(media) else {"link": media}
    else:
        raise ValidationError("Media must be a mapping, media ID string, or URL string")

    if caption:
        media_obj["caption"] = caption
    return media_obj


def wrap_footer(footer: Mapping[str, Any] | str) -> dict[str, Any]:
    """Rodapé em string vira `{"text": ...}`."""
    if isinstance(footer, str):
        return {"text": footer}
    return dict(footer)
