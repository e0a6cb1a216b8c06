"""Checagens compartilhadas entre validadores."""

from __future__ import annotations

from typing import Any

from kapso_client.api.validators.whatsapp.errors import ValidationError
from kapso_client.api.validators.whatsapp.limits import VALID_RECIPIENT_TYPES


def is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def require_text(value: Any, field_name: str) -> None:
    """Exige string não vazia.

    Raises:
        ValidationError: `<field_name> is required`
    """
    if is_blank(value):
        raise ValidationError(f"{field_name} is required")


def require_max_length(value: str | None, max_length: int, field_name: str) -> None:
    if value is not None and len(value) > max_length:
        raise ValidationError(
            f"{field_name} max {max_length} characters (current: {len(value)})"
        )


def validate_recipient_type(recipient_type: Any) -> None:
    if str(recipient_type) not in VALID_RECIPIENT_TYPES:
        raise ValidationError(
            f"recipient_type must be 'individual' or 'group' (received: {recipient_type})"
        )
