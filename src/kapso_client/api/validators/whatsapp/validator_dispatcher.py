"""Dispatcher de validação por variante de mensagem."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from kapso_client.api.validators.whatsapp.common import is_blank, validate_recipient_type
from kapso_client.api.validators.whatsapp.errors import ValidationError
from kapso_client.api.validators.whatsapp.interactive import (
    validate_buttons_message,
    validate_catalog_message,
    validate_cta_url_message,
    validate_flow_message,
    validate_list_message,
    validate_location_request_message,
)
from kapso_client.api.validators.whatsapp.location import (
    validate_contacts_message,
    validate_location_message,
    validate_reaction_message,
)
from kapso_client.api.validators.whatsapp.media import validate_media_message
from kapso_client.api.validators.whatsapp.template import validate_template_message
from kapso_client.api.validators.whatsapp.text import validate_text_message
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

_VALIDATORS: dict[type, Callable[[Any], None]] = {
    TextMessage: validate_text_message,
    MediaMessage: validate_media_message,
    LocationMessage: validate_location_message,
    ContactsMessage: validate_contacts_message,
    TemplateMessage: validate_template_message,
    ReactionMessage: validate_reaction_message,
    InteractiveButtonsMessage: validate_buttons_message,
    InteractiveListMessage: validate_list_message,
    InteractiveCtaUrlMessage: validate_cta_url_message,
    InteractiveCatalogMessage: validate_catalog_message,
    InteractiveLocationRequestMessage: validate_location_request_message,
    FlowMessage: validate_flow_message,
}


class WhatsAppMessageValidator:
    """Valida mensagens outbound antes da construção do payload."""

    def validate_outbound_message(self, message: OutboundMessage) -> None:
        """Valida campos comuns e regras específicas da variante.

        Args:
            message: Mensagem outbound

        Raises:
            ValidationError: Se a mensagem violar alguma regra
        """
        validator = _VALIDATORS.get(type(message))
        if validator is None:
            raise ValidationError(f"Unsupported message: {type(message).__name__}")

        if is_blank(message.to):
            raise ValidationError("to is required")
        validate_recipient_type(message.recipient_type)

        validator(message)


_DEFAULT_VALIDATOR = WhatsAppMessageValidator()


def validate_outbound_message(message: OutboundMessage) -> None:
    _DEFAULT_VALIDATOR.validate_outbound_message(message)
