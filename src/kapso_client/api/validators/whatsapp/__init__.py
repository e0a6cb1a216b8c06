"""Validadores de conformidade para mensagens WhatsApp/Meta.

Validadores especializados por tipo de mensagem; todos levantam
ValidationError antes de qualquer chamada de rede.

Uso:
    from kapso_client.api.validators.whatsapp import (
        WhatsAppMessageValidator,
        ValidationError,
    )

    validator = WhatsAppMessageValidator()
    validator.validate_outbound_message(message)
"""

from kapso_client.api.validators.whatsapp.errors import ValidationError
from kapso_client.api.validators.whatsapp.limits import (
    MAX_BUTTONS_PER_MESSAGE,
    MAX_CTA_DISPLAY_TEXT_LENGTH,
    MAX_FOOTER_TEXT_LENGTH,
    MAX_HEADER_TEXT_LENGTH,
    MAX_INTERACTIVE_BODY_LENGTH,
    MAX_LIST_BODY_LENGTH,
    MAX_LIST_ROWS,
)
from kapso_client.api.validators.whatsapp.validator_dispatcher import (
    WhatsAppMessageValidator,
    validate_outbound_message,
)

__all__ = [
    "MAX_BUTTONS_PER_MESSAGE",
    "MAX_CTA_DISPLAY_TEXT_LENGTH",
    "MAX_FOOTER_TEXT_LENGTH",
    "MAX_HEADER_TEXT_LENGTH",
    "MAX_INTERACTIVE_BODY_LENGTH",
    "MAX_LIST_BODY_LENGTH",
    "MAX_LIST_ROWS",
    "ValidationError",
    "WhatsAppMessageValidator",
    "validate_outbound_message",
]
