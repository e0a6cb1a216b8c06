"""Validadores para mídia (mensagens e upload)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from kapso_client.api.validators.whatsapp.common import is_blank
from kapso_client.api.validators.whatsapp.errors import ValidationError
from kapso_client.api.validators.whatsapp.limits import VALID_MEDIA_TYPES

if TYPE_CHECKING:
    from kapso_client.app.domain.messages import MediaMessage


def validate_media_type(media_type: Any) -> None:
    if str(media_type) not in VALID_MEDIA_TYPES:
        raise ValidationError(
            f"Invalid media type '{media_type}'. Must be one of: {', '.join(VALID_MEDIA_TYPES)}"
        )


def validate_media_reference(media: Any) -> None:
    """Exige mapping com exatamente um de `id`/`link`, ou string não vazia.

    Raises:
        ValidationError: Se a referência for inválida
    """
    if isinstance(media, str):
        if is_blank(media):
            raise ValidationError("media id or link is required")
        return

    if not isinstance(media, Mapping):
        raise ValidationError("Media must be a mapping, media ID string, or URL string")

    has_id = not is_blank(media.get("id"))
    has_link = not is_blank(media.get("link"))
    if not has_id and not has_link:
        raise ValidationError("Media must have 'id' or 'link'")
    if has_id and has_link:
        raise ValidationError("Media must have only one of 'id' or 'link'")


def validate_media_message(message: MediaMessage) -> None:
    validate_media_type(message.media_type)
    validate_media_reference(message.media)


def validate_media_upload(media_type: Any, content: Any, filename: str | None) -> None:
    """Valida os dados de upload de mídia (bytes em memória)."""
    validate_media_type(media_type)
    if not isinstance(content, bytes | bytearray) or not content:
        raise ValidationError("file content must be non-empty bytes")
    if is_blank(filename):
        raise ValidationError("filename is required")
