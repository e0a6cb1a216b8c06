"""Constantes de domínio do canal WhatsApp."""

from .whatsapp import (
    CAPTIONED_MEDIA_TYPES,
    MEDIA_MESSAGE_TYPES,
    MESSAGING_PRODUCT,
    CallAction,
    CodeMethod,
    FlowAction,
    HeaderType,
    InteractiveType,
    MessageType,
    RecipientType,
    TemplateCategory,
    TemplateStatus,
)

__all__ = [
    "CAPTIONED_MEDIA_TYPES",
    "MEDIA_MESSAGE_TYPES",
    "MESSAGING_PRODUCT",
    "CallAction",
    "CodeMethod",
    "FlowAction",
    "HeaderType",
    "InteractiveType",
    "MessageType",
    "RecipientType",
    "TemplateCategory",
    "TemplateStatus",
]
