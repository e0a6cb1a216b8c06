"""Factory para obter o builder correto por variante de mensagem."""

from __future__ import annotations

from typing import Any

from kapso_client.api.payload_builders.whatsapp.base import (
    PayloadBuilder,
    build_base_payload,
)
from kapso_client.api.payload_builders.whatsapp.interactive import (
    ButtonsPayloadBuilder,
    CatalogPayloadBuilder,
    CtaUrlPayloadBuilder,
    FlowPayloadBuilder,
    ListPayloadBuilder,
    LocationRequestPayloadBuilder,
)
from kapso_client.api.payload_builders.whatsapp.location import (
    ContactsPayloadBuilder,
    LocationPayloadBuilder,
    ReactionPayloadBuilder,
)
from kapso_client.api.payload_builders.whatsapp.media import MediaPayloadBuilder
from kapso_client.api.payload_builders.whatsapp.template import TemplatePayloadBuilder
from kapso_client.api.payload_builders.whatsapp.text import TextPayloadBuilder
from kapso_client.api.validators.whatsapp import validate_outbound_message
from kapso_client.api.validators.whatsapp.errors import ValidationError
from kapso_client.app.domain.messages import (
    ContactsMessage,
    FlowMessage,
    InteractiveButtonsMessage,
    InteractiveCatalogMessage,
    InteractiveCtaUrlMessage,
    InteractiveListMessage,
    InteractiveLocationRequestMessage,
    LocationMessage,
    MediaMessage,
    OutboundMessage,
    ReactionMessage,
    TemplateMessage,
    TextMessage,
)

# Mapeamento de variante de mensagem para builder
_BUILDERS: dict[type, PayloadBuilder] = {
    TextMessage: TextPayloadBuilder(),
    MediaMessage: MediaPayloadBuilder(),
    LocationMessage: LocationPayloadBuilder(),
    ContactsMessage: ContactsPayloadBuilder(),
    TemplateMessage: TemplatePayloadBuilder(),
    ReactionMessage: ReactionPayloadBuilder(),
    InteractiveButtonsMessage: ButtonsPayloadBuilder(),
    InteractiveListMessage: ListPayloadBuilder(),
    InteractiveCtaUrlMessage: CtaUrlPayloadBuilder(),
    InteractiveCatalogMessage: CatalogPayloadBuilder(),
    InteractiveLocationRequestMessage: LocationRequestPayloadBuilder(),
    FlowMessage: FlowPayloadBuilder(),
}


def get_payload_builder(message: OutboundMessage) -> PayloadBuilder | None:
    """Retorna o builder para a variante da mensagem.

    Args:
        message: Mensagem outbound

    Returns:
        Builder apropriado ou None se não suportado
    """
    return _BUILDERS.get(type(message))


def build_full_payload(message: OutboundMessage) -> dict[str, Any]:
    """Valida e constrói o payload completo para a API Meta.

    Args:
        message: Mensagem outbound

    Returns:
        Payload completo pronto para envio

    Raises:
        ValidationError: Se a mensagem for inválida ou não suportada
    """
    validate_outbound_message(message)

    builder = get_payload_builder(message)
    if builder is None:
        raise ValidationError(f"Unsupported message: {type(message).__name__}")

    payload = build_base_payload(message)
    payload.update(builder.build(message))
    return payload
