"""Builders para localização, contatos e reações."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from kapso_client.app.domain.messages import (
        ContactsMessage,
        LocationMessage,
        ReactionMessage,
    )


class LocationPayloadBuilder:
    """Builder para mensagens de localização."""

    def build(self, message: LocationMessage) -> dict[str, Any]:
        location_obj: dict[str, Any] = {
            "latitude": message.latitude,
            "longitude": message.longitude,
        }
        if message.name:
            location_obj["name"] = message.name
        if message.address:
            location_obj["address"] = message.address
        return {"location": location_obj}


class ContactsPayloadBuilder:
    """Builder para cartões de contato (lista repassada como está)."""

    def build(self, message: ContactsMessage) -> dict[str, Any]:
        return {"contacts": [dict(contact) for contact in message.contacts]}


class ReactionPayloadBuilder:
    """Builder para reações; emoji vazio ou ausente remove a reação."""

    def build(self, message: ReactionMessage) -> dict[str, Any]:
        reaction_obj: dict[str, Any] = {"message_id": message.message_id}
        if message.emoji is not None:
            reaction_obj["emoji"] = message.emoji
        return {"reaction": reaction_obj}
