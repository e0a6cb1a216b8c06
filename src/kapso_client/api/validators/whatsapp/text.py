"""Validadores para mensagens de texto."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kapso_client.api.validators.whatsapp.common import is_blank
from kapso_client.api.validators.whatsapp.errors import ValidationError

if TYPE_CHECKING:
    from kapso_client.app.domain.messages import TextMessage


def validate_text_message(message: TextMessage) -> None:
    """Valida mensagem de texto.

    Args:
        message: Mensagem de texto

    Raises:
        ValidationError: Se o corpo estiver vazio
    """
    if is_blank(message.body):
        raise ValidationError("body is required for text messages")
