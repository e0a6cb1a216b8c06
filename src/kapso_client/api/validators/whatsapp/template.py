"""Validadores para templates (envio e gerenciamento)."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from kapso_client.api.validators.whatsapp.common import is_blank, require_text
from kapso_client.api.validators.whatsapp.errors import ValidationError
from kapso_client.app.constants.whatsapp import TemplateCategory

if TYPE_CHECKING:
    from kapso_client.app.domain.messages import TemplateMessage

TEMPLATE_CATEGORIES = tuple(category.value for category in TemplateCategory)


def validate_template_message(message: TemplateMessage) -> None:
    """Valida envio de template.

    A estrutura de `components` não é inspecionada: a API é a autoridade.
    """
    require_text(message.name, "template name")
    require_text(message.language, "template language")


def validate_template_definition(
    *,
    name: str | None,
    language: str | None,
    category: str | None,
    components: Sequence[Any] | None,
) -> None:
    """Valida criação de template.

    Raises:
        ValidationError: Campo obrigatório vazio, categoria inválida ou
            componente sem `type`
    """
    if is_blank(name):
        raise ValidationError("Template name cannot be empty")
    if is_blank(language):
        raise ValidationError("Language cannot be empty")
    if is_blank(category):
        raise ValidationError("Category cannot be empty")
    if not components:
        raise ValidationError("Components cannot be empty")

    if str(category).upper() not in TEMPLATE_CATEGORIES:
        raise ValidationError(
            f"Invalid category '{category}'. Must be one of: {', '.join(TEMPLATE_CATEGORIES)}"
        )

    for index, component in enumerate(components):
        if not isinstance(component, Mapping) or not component.get("type"):
            raise ValidationError(f"Component at index {index} must be a mapping with 'type' key")


def validate_template_delete(template_id: str | None, name: str | None) -> None:
    if is_blank(template_id) and is_blank(name):
        raise ValidationError("Must provide either template_id or name")
