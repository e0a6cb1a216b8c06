"""Validadores para mensagens interativas (botões, lista, CTA, catálogo, flow)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from kapso_client.api.validators.whatsapp.common import (
    is_blank,
    require_max_length,
    require_text,
)
from kapso_client.api.validators.whatsapp.errors import ValidationError
from kapso_client.api.validators.whatsapp.limits import (
    HTTP_URL_PATTERN,
    MAX_BUTTONS_PER_MESSAGE,
    MAX_CTA_DISPLAY_TEXT_LENGTH,
    MAX_FOOTER_TEXT_LENGTH,
    MAX_HEADER_TEXT_LENGTH,
    MAX_INTERACTIVE_BODY_LENGTH,
    MAX_LIST_BODY_LENGTH,
    MAX_LIST_ROWS,
    VALID_HEADER_TYPES,
)

if TYPE_CHECKING:
    from kapso_client.app.domain.messages import (
        FlowMessage,
        InteractiveButtonsMessage,
        InteractiveCatalogMessage,
        InteractiveCtaUrlMessage,
        InteractiveListMessage,
        InteractiveLocationRequestMessage,
    )


def validate_interactive_header(header: Mapping[str, Any]) -> None:
    """Valida header interativo (text, image, video ou document).

    Raises:
        ValidationError: Tipo ausente/inválido ou conteúdo incompatível
    """
    if not isinstance(header, Mapping):
        raise ValidationError("Header must be a mapping")

    header_type = header.get("type")
    if header_type is None:
        raise ValidationError("Header must have a type field")

    header_type = str(header_type)
    if header_type not in VALID_HEADER_TYPES:
        raise ValidationError(
            f"Invalid header type '{header_type}'. "
            f"Must be one of: {', '.join(VALID_HEADER_TYPES)}"
        )

    if header_type == "text":
        validate_text_header(header)
    else:
        validate_media_header(header)


def validate_text_header(header: Mapping[str, Any]) -> None:
    text = header.get("text")
    if is_blank(text):
        raise ValidationError("Text header requires text field")
    if len(text) > MAX_HEADER_TEXT_LENGTH:
        raise ValidationError(
            f"Header text max {MAX_HEADER_TEXT_LENGTH} characters (current: {len(text)})"
        )


def validate_media_header(header: Mapping[str, Any]) -> None:
    header_type = str(header.get("type"))
    media = header.get(header_type)
    if media is None:
        raise ValidationError(
            f"{header_type.capitalize()} header requires {header_type} field"
        )
    if not isinstance(media, Mapping) or (
        is_blank(media.get("id")) and is_blank(media.get("link"))
    ):
        raise ValidationError(f"{header_type.capitalize()} must have 'id' or 'link'")


def _validate_footer_text(footer_text: str | None) -> None:
    require_max_length(footer_text, MAX_FOOTER_TEXT_LENGTH, "footer_text")


def validate_buttons_message(message: InteractiveButtonsMessage) -> None:
    """Valida mensagem de botões (1 a 3 botões)."""
    require_text(message.body_text, "body_text")

    count = len(message.buttons or ())
    if count > MAX_BUTTONS_PER_MESSAGE:
        raise ValidationError(
            f"Maximum {MAX_BUTTONS_PER_MESSAGE} buttons allowed (current: {count})"
        )
    if count == 0:
        raise ValidationError("At least 1 button is required")

    if message.header is not None:
        validate_interactive_header(message.header)


def count_list_rows(sections: Any) -> int:
    total = 0
    for section in sections or ():
        rows = section.get("rows") if isinstance(section, Mapping) else None
        total += len(rows or ())
    return total


def validate_list_message(message: InteractiveListMessage) -> None:
    """Valida lista interativa (corpo ≤ 4096, 1 a 10 linhas, header só texto)."""
    require_text(message.body_text, "body_text")
    if len(message.body_text) > MAX_LIST_BODY_LENGTH:
        raise ValidationError(
            f"Body text max {MAX_LIST_BODY_LENGTH} characters (current: {len(message.body_text)})"
        )
    require_text(message.button_text, "button_text")

    total_rows = count_list_rows(message.sections)
    if total_rows > MAX_LIST_ROWS:
        raise ValidationError(
            f"Maximum {MAX_LIST_ROWS} rows total across all sections (current: {total_rows})"
        )
    if total_rows == 0:
        raise ValidationError("At least 1 row is required")

    if message.header is not None:
        header_type = message.header.get("type")
        if header_type is not None and str(header_type) != "text":
            raise ValidationError(
                f"List messages only support text headers (received: {header_type})"
            )
        if header_type is not None:
            validate_text_header(message.header)


def validate_cta_url_message(message: InteractiveCtaUrlMessage) -> None:
    """Valida CTA URL (corpo ≤ 1024, texto do botão ≤ 20, URL http(s), rodapé ≤ 60)."""
    require_text(message.body_text, "body_text")
    require_max_length(message.body_text, MAX_INTERACTIVE_BODY_LENGTH, "body_text")

    require_text(message.display_text, "display_text")
    require_max_length(message.display_text, MAX_CTA_DISPLAY_TEXT_LENGTH, "display_text")

    require_text(message.url, "url")
    if not HTTP_URL_PATTERN.match(message.url):
        raise ValidationError("url must start with http:// or https://")

    _validate_footer_text(message.footer_text)

    if message.header is not None:
        validate_interactive_header(message.header)


def validate_catalog_message(message: InteractiveCatalogMessage) -> None:
    require_text(message.body_text, "body_text")
    require_max_length(message.body_text, MAX_INTERACTIVE_BODY_LENGTH, "body_text")
    require_text(message.thumbnail_product_retailer_id, "thumbnail_product_retailer_id")
    _validate_footer_text(message.footer_text)


def validate_location_request_message(message: InteractiveLocationRequestMessage) -> None:
    require_text(message.body_text, "body_text")
    if message.header is not None:
        validate_interactive_header(message.header)


def validate_flow_message(message: FlowMessage) -> None:
    """Valida mensagem de Flow (flow_id, CTA e token obrigatórios)."""
    require_text(message.flow_id, "flow_id")
    require_text(message.flow_cta, "flow_cta")
    require_text(message.flow_token, "flow_token")
    require_text(message.flow_action, "flow_action")
    if message.header is not None:
        validate_interactive_header(message.header)
