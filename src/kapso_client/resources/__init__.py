"""Recursos da API expostos pelo WhatsAppClient."""

from kapso_client.resources.calls import CallPermissionsResource, CallsResource
from kapso_client.resources.contacts import ContactsResource
from kapso_client.resources.conversations import ConversationsResource
from kapso_client.resources.flows import FlowsResource
from kapso_client.resources.media import MediaResource
from kapso_client.resources.messages import MessagesResource
from kapso_client.resources.phone_numbers import PhoneNumbersResource
from kapso_client.resources.templates import TemplatesResource

__all__ = [
    "CallPermissionsResource",
    "CallsResource",
    "ContactsResource",
    "ConversationsResource",
    "FlowsResource",
    "MediaResource",
    "MessagesResource",
    "PhoneNumbersResource",
    "TemplatesResource",
]
