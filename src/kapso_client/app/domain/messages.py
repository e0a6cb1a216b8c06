"""Modelos de domínio para mensagens outbound.

Cada variante é um dataclass imutável com `to` obrigatório e um
discriminador `message_type` coerente com a chave do payload
(`type="image"` implica chave `image`). A validação de regras da Meta fica
em `api.validators.whatsapp`; aqui só há estrutura.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from kapso_client.app.constants.whatsapp import (
    FlowAction,
    InteractiveType,
    MessageType,
    RecipientType,
)

MediaInput = Mapping[str, Any] | str
Footer = Mapping[str, Any] | str


@dataclass(frozen=True, kw_only=True)
class _OutboundBase:
    """Campos comuns a todas as mensagens."""

    to: str
    recipient_type: str = RecipientType.INDIVIDUAL
    context_message_id: str | None = None
    biz_opaque_callback_data: str | None = None


@dataclass(frozen=True, kw_only=True)
class TextMessage(_OutboundBase):
    body: str
    preview_url: bool | None = None

    @property
    def message_type(self) -> MessageType:
        return MessageType.TEXT


@dataclass(frozen=True, kw_only=True)
class MediaMessage(_OutboundBase):
    """Imagem, áudio, vídeo, documento ou sticker.

    Attributes:
        media_type: Um dos tipos de mídia (image, audio, video, document, sticker)
        media: Mapping com `id`/`link` ou string (id se alfanumérica, senão link)
        caption: Legenda (só image/video/document)
        filename: Nome do arquivo (só document)
        voice: Nota de voz (só audio)
    """

    media_type: MessageType
    media: MediaInput
    caption: str | None = None
    filename: str | None = None
    voice: bool = False

    @property
    def message_type(self) -> MessageType:
        return MessageType(self.media_type)


@dataclass(frozen=True, kw_only=True)
class LocationMessage(_OutboundBase):
    latitude: float
    longitude: float
    name: str | None = None
    address: str | None = None

    @property
    def message_type(self) -> MessageType:
        return MessageType.LOCATION


@dataclass(frozen=True, kw_only=True)
class ContactsMessage(_OutboundBase):
    contacts: Sequence[Mapping[str, Any]]

    @property
    def message_type(self) -> MessageType:
        return MessageType.CONTACTS


@dataclass(frozen=True, kw_only=True)
class TemplateMessage(_OutboundBase):
    """Template aprovado; `components` segue sem validação profunda."""

    name: str
    language: str
    components: Sequence[Mapping[str, Any]] | None = None

    @property
    def message_type(self) -> MessageType:
        return MessageType.TEMPLATE


@dataclass(frozen=True, kw_only=True)
class ReactionMessage(_OutboundBase):
    """Reação a uma mensagem; sem emoji remove a reação."""

    message_id: str
    emoji: str | None = None

    @property
    def message_type(self) -> MessageType:
        return MessageType.REACTION


@dataclass(frozen=True, kw_only=True)
class _InteractiveBase(_OutboundBase):
    @property
    def message_type(self) -> MessageType:
        return MessageType.INTERACTIVE


@dataclass(frozen=True, kw_only=True)
class InteractiveButtonsMessage(_InteractiveBase):
    body_text: str
    buttons: Sequence[Mapping[str, Any]]
    header: Mapping[str, Any] | None = None
    footer: Footer | None = None

    @property
    def interactive_type(self) -> InteractiveType:
        return InteractiveType.BUTTON


@dataclass(frozen=True, kw_only=True)
class InteractiveListMessage(_InteractiveBase):
    body_text: str
    button_text: str
    sections: Sequence[Mapping[str, Any]]
    header: Mapping[str, Any] | None = None
    footer: Footer | None = None

    @property
    def interactive_type(self) -> InteractiveType:
        return InteractiveType.LIST


@dataclass(frozen=True, kw_only=True)
class InteractiveCtaUrlMessage(_InteractiveBase):
    body_text: str
    display_text: str
    url: str
    header: Mapping[str, Any] | None = None
    footer_text: str | None = None

    @property
    def interactive_type(self) -> InteractiveType:
        return InteractiveType.CTA_URL


@dataclass(frozen=True, kw_only=True)
class InteractiveCatalogMessage(_InteractiveBase):
    body_text: str
    thumbnail_product_retailer_id: str
    footer_text: str | None = None

    @property
    def interactive_type(self) -> InteractiveType:
        return InteractiveType.CATALOG_MESSAGE


@dataclass(frozen=True, kw_only=True)
class InteractiveLocationRequestMessage(_InteractiveBase):
    body_text: str
    header: Mapping[str, Any] | None = None
    footer_text: str | None = None

    @property
    def interactive_type(self) -> InteractiveType:
        return InteractiveType.LOCATION_REQUEST_MESSAGE


@dataclass(frozen=True, kw_only=True)
class FlowMessage(_InteractiveBase):
    """Mensagem que abre um WhatsApp Flow.

    O `flow_token` é opaco e sua unicidade é responsabilidade de quem chama.
    `screen` só entra no payload quando a ação é `navigate`.
    """

    flow_id: str
    flow_cta: str
    flow_token: str
    screen: str | None = None
    flow_action: str = FlowAction.NAVIGATE
    mode: str = "published"
    flow_action_payload: Mapping[str, Any] | None = None
    header: Mapping[str, Any] | None = None
    body_text: str | None = None
    footer_text: str | None = None

    @property
    def interactive_type(self) -> InteractiveType:
        return InteractiveType.FLOW


OutboundMessage = (
    TextMessage
    | MediaMessage
    | LocationMessage
    | ContactsMessage
    | TemplateMessage
    | ReactionMessage
    | InteractiveButtonsMessage
    | InteractiveListMessage
    | InteractiveCtaUrlMessage
    | InteractiveCatalogMessage
    | InteractiveLocationRequestMessage
    | FlowMessage
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
