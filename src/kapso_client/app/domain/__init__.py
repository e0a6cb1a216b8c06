"""Modelos de domínio (mensagens outbound)."""

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

__all__ = [
    "ContactsMessage",
    "FlowMessage",
    "InteractiveButtonsMessage",
    "InteractiveCatalogMessage",
    "InteractiveCtaUrlMessage",
    "InteractiveListMessage",
    "InteractiveLocationRequestMessage",
    "LocationMessage",
    "MediaMessage",
    "OutboundMessage",
    "ReactionMessage",
    "TemplateMessage",
    "TextMessage",
]
