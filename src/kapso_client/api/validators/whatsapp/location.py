"""Validadores para localização, contatos e reações."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kapso_client.api.validators.whatsapp.common import require_text
from kapso_client.api.validators.whatsapp.errors import ValidationError

if TYPE_CHECKING:
    from kapso_client.app.domain.messages import (
        ContactsMessage,
        LocationMessage,
        ReactionMessage,
    )


def validate_location_message(message: LocationMessage) -> None:
    if message.latitude is None or message.longitude is None:
        raise ValidationError("latitude and longitude are required")


def validate_contacts_message(message: ContactsMessage) -> None:
    if not message.contacts:
        raise ValidationError("At least 1 contact is required")


def validate_reaction_message(message: ReactionMessage) -> None:
    require_text(message.message_id, "message_id")
