"""Enums de domínio para tipos de mensagem WhatsApp."""

from __future__ import annotations

from enum import StrEnum

MESSAGING_PRODUCT = "whatsapp"


class MessageType(StrEnum):
    """Tipos de conteúdo suportados pela API Meta/WhatsApp."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"
    STICKER = "sticker"
    LOCATION = "location"
    CONTACTS = "contacts"
    INTERACTIVE = "interactive"
    TEMPLATE = "template"
    REACTION = "reaction"


class InteractiveType(StrEnum):
    """Tipos de mensagens interativas suportadas."""

    BUTTON = "button"
    LIST = "list"
    FLOW = "flow"
    CTA_URL = "cta_url"
    CATALOG_MESSAGE = "catalog_message"
    LOCATION_REQUEST_MESSAGE = "location_request_message"


class HeaderType(StrEnum):
    """Tipos de header aceitos em mensagens interativas."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "document"


class RecipientType(StrEnum):
    """Destinatário individual ou grupo."""

    INDIVIDUAL = "individual"
    GROUP = "group"


class FlowAction(StrEnum):
    """Ações de abertura de um Flow."""

    NAVIGATE = "navigate"
    DATA_EXCHANGE = "data_exchange"


class TemplateCategory(StrEnum):
    """Categorias de template conforme Meta."""

    MARKETING = "MARKETING"
    UTILITY = "UTILITY"
    AUTHENTICATION = "AUTHENTICATION"
    UNKNOWN = "UNKNOWN"


class TemplateStatus(StrEnum):
    """Status de aprovação de template."""

    APPROVED = "APPROVED"
    PENDING = "PENDING"
    REJECTED = "REJECTED"
    PAUSED = "PAUSED"
    IN_APPEAL = "IN_APPEAL"
    DISABLED = "DISABLED"


class CodeMethod(StrEnum):
    """Canal de envio do código de verificação do número."""

    SMS = "SMS"
    VOICE = "VOICE"


class CallAction(StrEnum):
    """Ações da Calling API."""

    CONNECT = "connect"
    PRE_ACCEPT = "pre_accept"
    ACCEPT = "accept"
    REJECT = "reject"
    TERMINATE = "terminate"


MEDIA_MESSAGE_TYPES = frozenset(
    {
        MessageType.IMAGE,
        MessageType.AUDIO,
        MessageType.VIDEO,
        MessageType.DOCUMENT,
        MessageType.STICKER,
    }
)

# Tipos de mídia que aceitam legenda
CAPTIONED_MEDIA_TYPES = frozenset({MessageType.IMAGE, MessageType.VIDEO, MessageType.DOCUMENT})

# Fallback de content-type quando o nome do arquivo não resolve
DEFAULT_MEDIA_MIME_TYPES: dict[str, str] = {
    "image": "image/jpeg",
    "audio": "audio/mpeg",
    "video": "video/mp4",
    "document": "application/pdf",
    "sticker": "image/webp",
}
