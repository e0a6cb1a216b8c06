"""kapso_client: cliente async da WhatsApp Cloud API e do Kapso Proxy."""

from kapso_client.api.connectors.whatsapp.meta_errors import (
    ErrorCategory,
    RetryAction,
    RetryHint,
    WhatsAppApiError,
)
from kapso_client.api.connectors.whatsapp.models import (
    GraphSuccessResponse,
    MediaUploadResponse,
    PagedResult,
    SendMessageResponse,
)
from kapso_client.api.connectors.whatsapp.response import EMPTY_SUCCESS
from kapso_client.api.validators.whatsapp.errors import ValidationError
from kapso_client.app.constants.whatsapp import InteractiveType, MessageType
from kapso_client.app.domain import (
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
from kapso_client.client import WhatsAppClient
from kapso_client.config.settings import BearerToken, ClientConfig, ProxyApiKey
from kapso_client.utils.errors import ConfigurationError, KapsoClientError, ProxyRequiredError

__version__ = "0.1.0"

__all__ = [
    "EMPTY_SUCCESS",
    "BearerToken",
    "ClientConfig",
    "ConfigurationError",
    "ContactsMessage",
    "ErrorCategory",
    "FlowMessage",
    "GraphSuccessResponse",
    "InteractiveButtonsMessage",
    "InteractiveCatalogMessage",
    "InteractiveCtaUrlMessage",
    "InteractiveListMessage",
    "InteractiveLocationRequestMessage",
    "InteractiveType",
    "KapsoClientError",
    "LocationMessage",
    "MediaMessage",
    "MediaUploadResponse",
    "MessageType",
    "OutboundMessage",
    "PagedResult",
    "ProxyApiKey",
    "ReactionMessage",
    "RetryAction",
    "RetryHint",
    "SendMessageResponse",
    "TemplateMessage",
    "TextMessage",
    "ValidationError",
    "WhatsAppApiError",
    "WhatsAppClient",
]
