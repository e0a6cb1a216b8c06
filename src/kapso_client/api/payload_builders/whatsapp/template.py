"""Builders para templates: envio e gerenciamento (criação/edição/remoção)."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from kapso_client.api.validators.whatsapp.template import (
    validate_template_definition,
    validate_template_delete,
)
from kapso_client.app.constants.whatsapp import TemplateCategory

if TYPE_CHECKING:
    from kapso_client.app.domain.messages import TemplateMessage


class TemplatePayloadBuilder:
    """Builder para mensagens de template."""

    def build(self, message: TemplateMessage) -> dict[str, Any]:
        """Constrói payload para mensagem de template.

        Args:
            message: Mensagem com nome, idioma e componentes

        Returns:
            Payload template conforme API Meta
        """
        template_obj: dict[str, Any] = {
            "name": message.name,
            "language": {"code": message.language},
        }
        if message.components is not None:
            template_obj["components"] = [dict(component) for component in message.components]
        return {"template": template_obj}


def _normalize_components(components: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    return [{str(key): value for key, value in component.items()} for component in components]


def build_template_create_payload(
    *,
    name: str,
    language: str,
    category: str,
    components: Sequence[Mapping[str, Any]],
    allow_category_change: bool | None = None,
    message_send_ttl_seconds: int | None = None,
) -> dict[str, Any]:
    """Corpo de POST /{waba_id}/message_templates.

    Raises:
        ValidationError: Campos obrigatórios vazios ou categoria inválida
    """
    validate_template_definition(
        name=name, language=language, category=category, components=components
    )
    payload: dict[str, Any] = {
        "name": name,
        "language": language,
        "category": str(category).upper(),
        "components": _normalize_components(components),
    }
    if allow_category_change is not None:
        payload["allow_category_change"] = allow_category_change
    if message_send_ttl_seconds:
        payload["message_send_ttl_seconds"] = message_send_ttl_seconds
    return payload


def build_template_update_payload(
    *,
    category: str | None = None,
    components: Sequence[Mapping[str, Any]] | None = None,
) -> dict[str, Any]:
    """Só os campos informados; dict vazio significa nada a atualizar."""
    payload: dict[str, Any] = {}
    if category:
        payload["category"] = str(category).upper()
    if components:
        payload["components"] = _normalize_components(components)
    return payload


def build_template_delete_query(
    *,
    name: str | None = None,
    template_id: str | None = None,
    hsm_id: str | None = None,
    language: str | None = None,
) -> dict[str, Any] | None:
    """Query de remoção por nome; None quando a remoção é por template_id.

    Raises:
        ValidationError: Se nem template_id nem name forem informados
    """
    validate_template_delete(template_id, name)
    if template_id:
        return None
    query: dict[str, Any] = {"name": name}
    if language:
        query["language"] = language
    if hsm_id:
        query["hsm_id"] = hsm_id
    return query


# Helpers de componentes


def build_body_component(text: str, example: Mapping[str, Any] | None = None) -> dict[str, Any]:
    component: dict[str, Any] = {"type": "BODY", "text": text}
    if example:
        component["example"] = dict(example)
    return component


def build_header_component(
    header_format: str,
    *,
    text: str | None = None,
    media_handle: str | None = None,
    example: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Header TEXT, IMAGE, VIDEO ou DOCUMENT; mídia usa `example.header_handle`."""
    fmt = header_format.upper()
    component: dict[str, Any] = {"type": "HEADER", "format": fmt}
    if fmt == "TEXT" and text:
        component["text"] = text
    elif fmt in ("IMAGE", "VIDEO", "DOCUMENT") and media_handle:
        component["example"] = {"header_handle": [media_handle]}
    if example:
        component["example"] = dict(example)
    return component


def build_footer_component(
    text: str | None = None,
    code_expiration_minutes: int | None = None,
) -> dict[str, Any]:
    component: dict[str, Any] = {"type": "FOOTER"}
    if text:
        component["text"] = text
    if code_expiration_minutes:
        component["code_expiration_minutes"] = code_expiration_minutes
    return component


def build_button(
    button_type: str,
    *,
    text: str | None = None,
    url: str | None = None,
    phone_number: str | None = None,
    otp_type: str | None = None,
    autofill_text: str | None = None,
    package_name: str | None = None,
    signature_hash: str | None = None,
) -> dict[str, Any]:
    """Botão de template (QUICK_REPLY, URL, PHONE_NUMBER ou OTP)."""
    kind = button_type.upper()
    button: dict[str, Any] = {"type": kind}
    optional: dict[str, Any] = {"text": text}
    if kind == "URL":
        optional["url"] = url
    elif kind == "PHONE_NUMBER":
        optional["phone_number"] = phone_number
    elif kind == "OTP":
        optional.update(
            otp_type=otp_type,
            autofill_text=autofill_text,
            package_name=package_name,
            signature_hash=signature_hash,
        )
    button.update({key: value for key, value in optional.items() if value})
    return button


def build_buttons_component(buttons: Sequence[Mapping[str, Any]]) -> dict[str, Any]:
    return {
        "type": "BUTTONS",
        "buttons": [{str(key): value for key, value in button.items()} for button in buttons],
    }


def _definition(
    name: str,
    language: str,
    category: TemplateCategory,
    components: list[dict[str, Any]],
) -> dict[str, Any]:
    return {
        "name": name,
        "language": language,
        "category": category.value,
        "components": components,
    }


def build_authentication_template(
    name: str,
    language: str,
    *,
    ttl_seconds: int = 60,
    add_security_recommendation: bool = True,
    code_expiration_minutes: int | None = 10,
    otp_type: str = "COPY_CODE",
) -> dict[str, Any]:
    """Definição pronta de template de autenticação (OTP)."""
    components: list[dict[str, Any]] = [
        {"type": "BODY", "add_security_recommendation": add_security_recommendation}
    ]
    if code_expiration_minutes:
        components.append(build_footer_component(code_expiration_minutes=code_expiration_minutes))
    components.append(build_buttons_component([build_button("OTP", otp_type=otp_type)]))

    definition = _definition(name, language, TemplateCategory.AUTHENTICATION, components)
    definition["message_send_ttl_seconds"] = ttl_seconds
    return definition


def _content_components(
    body: str,
    header: Mapping[str, Any] | None,
    footer: str | None,
    buttons: Sequence[Mapping[str, Any]] | None,
    body_example: Mapping[str, Any] | None,
) -> list[dict[str, Any]]:
    components: list[dict[str, Any]] = []
    if header:
        components.append(dict(header))
    components.append(build_body_component(body, body_example))
    if footer:
        components.append(build_footer_component(text=footer))
    if buttons:
        components.append(build_buttons_component(buttons))
    return components


def build_marketing_template(
    name: str,
    language: str,
    body: str,
    *,
    header: Mapping[str, Any] | None = None,
    footer: str | None = None,
    buttons: Sequence[Mapping[str, Any]] | None = None,
    body_example: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    components = _content_components(body, header, footer, buttons, body_example)
    return _definition(name, language, TemplateCategory.MARKETING, components)


def build_utility_template(
    name: str,
    language: str,
    body: str,
    *,
    header: Mapping[str, Any] | None = None,
    footer: str | None = None,
    buttons: Sequence[Mapping[str, Any]] | None = None,
    body_example: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    components = _content_components(body, header, footer, buttons, body_example)
    return _definition(name, language, TemplateCategory.UTILITY, components)
