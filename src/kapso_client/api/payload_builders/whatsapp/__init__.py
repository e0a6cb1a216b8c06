"""Builders de payload para API Meta/WhatsApp.

Funções puras: validam a entrada e devolvem o corpo de envio, sem IO.
Mensagens passam por `build_full_payload`; os demais recursos (mídia,
templates, chamadas, números, contatos, flows) têm builders próprios.
"""

from kapso_client.api.payload_builders.whatsapp.base import (
    PayloadBuilder,
    build_base_payload,
    build_media_object,
)
from kapso_client.api.payload_builders.whatsapp.factory import (
    build_full_payload,
    get_payload_builder,
)

__all__ = [
    "PayloadBuilder",
    "build_base_payload",
    "build_full_payload",
    "build_media_object",
    "get_payload_builder",
]
