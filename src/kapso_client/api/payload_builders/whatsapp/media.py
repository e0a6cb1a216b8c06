"""Builders para mensagens de mídia e formulário de upload."""

from __future__ import annotations

import mimetypes
from typing import TYPE_CHECKING, Any

from kapso_client.api.payload_builders.whatsapp.base import build_media_object
from kapso_client.api.validators.whatsapp.media import validate_media_upload
from kapso_client.app.constants.whatsapp import (
    CAPTIONED_MEDIA_TYPES,
    DEFAULT_MEDIA_MIME_TYPES,
    MESSAGING_PRODUCT,
    MessageType,
)

if TYPE_CHECKING:
    from kapso_client.app.domain.messages import MediaMessage


class MediaPayloadBuilder:
    """Builder para image/audio/video/document/sticker.

    Legenda só para image/video/document, filename só para document e
    `voice` só para audio.
    """

    def build(self, message: MediaMessage) -> dict[str, Any]:
        media_type = MessageType(message.media_type)
        caption = message.caption if media_type in CAPTIONED_MEDIA_TYPES else None
        media_obj = build_media_object(message.media, caption)

        if media_type is MessageType.DOCUMENT and message.filename:
            media_obj["filename"] = message.filename
        if media_type is MessageType.AUDIO and message.voice:
            media_obj["voice"] = True

        return {media_type.value: media_obj}


def guess_mime_type(filename: str | None, media_type: str) -> str:
    """Content-type pelo nome do arquivo, com fallback por tipo de mídia."""
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed
    return DEFAULT_MEDIA_MIME_TYPES.get(str(media_type), "application/octet-stream")


def build_media_upload_form(
    media_type: str,
    content: bytes,
    filename: str,
    *,
    mime_type: str | None = None,
    upload_strategy: str | None = None,
    messaging_product: str = MESSAGING_PRODUCT,
) -> tuple[dict[str, str], dict[str, tuple[str, bytes, str]]]:
    """Monta o multipart de POST /{phone_number_id}/media.

    Returns:
        (campos do formulário, arquivos) no formato aceito pelo httpx

    Raises:
        ValidationError: Tipo de mídia inválido, conteúdo vazio ou sem filename
    """
    validate_media_upload(media_type, content, filename)

    data = {"messaging_product": messaging_product, "type": str(media_type)}
    if upload_strategy:
        data["upload_strategy"] = upload_strategy

    content_type = mime_type or guess_mime_type(filename, media_type)
    files = {"file": (filename, bytes(content), content_type)}
    return data, files
