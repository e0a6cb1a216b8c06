"""Recurso de templates de mensagem (por WhatsApp Business Account)."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from kapso_client.api.connectors.whatsapp.models import (
    GraphSuccessResponse,
    MessageTemplate,
    PagedResult,
    TemplateCreateResponse,
    parse_paged,
)
from kapso_client.api.payload_builders.whatsapp import template as template_builders
from kapso_client.resources.base import BaseResource


class TemplatesResource(BaseResource):
    """CRUD de templates e helpers de componentes."""

    build_body_component = staticmethod(template_builders.build_body_component)
    build_header_component = staticmethod(template_builders.build_header_component)
    build_footer_component = staticmethod(template_builders.build_footer_component)
    build_buttons_component = staticmethod(template_builders.build_buttons_component)
    build_button = staticmethod(template_builders.build_button)
    build_authentication_template = staticmethod(template_builders.build_authentication_template)
    build_marketing_template = staticmethod(template_builders.build_marketing_template)
    build_utility_template = staticmethod(template_builders.build_utility_template)

    async def list(
        self,
        business_account_id: str,
        *,
        limit: int | None = None,
        after: str | None = None,
        before: str | None = None,
        name: str | None = None,
        status: str | None = None,
        category: str | None = None,
        language: str | None = None,
        name_or_content: str | None = None,
        quality_score: str | None = None,
    ) -> PagedResult[MessageTemplate]:
        query = {
            "limit": limit,
            "after": after,
            "before": before,
            "name": name,
            "status": status,
            "category": category,
            "language": language,
            "name_or_content": name_or_content,
            "quality_score": quality_score,
        }
        response = await self._client.request(
            "GET",
            f"{business_account_id}/message_templates",
            query=query,
            response_type="json",
        )
        return parse_paged(response, MessageTemplate)

    async def get(
        self,
        business_account_id: str,
        template_id: str,
        *,
        fields: str | None = None,
    ) -> MessageTemplate:
        response = await self._client.request(
            "GET",
            f"{business_account_id}/message_templates/{template_id}",
            query={"fields": fields},
            response_type="json",
        )
        return MessageTemplate.from_api(response)

    async def create(
        self,
        business_account_id: str,
        *,
        name: str,
        language: str,
        category: str,
        components: Sequence[Mapping[str, Any]],
        allow_category_change: bool | None = None,
        message_send_ttl_seconds: int | None = None,
    ) -> TemplateCreateResponse:
        """Cria template.

        Raises:
            ValidationError: Campos obrigatórios vazios, categoria inválida ou
                componente sem `type`
        """
        payload = template_builders.build_template_create_payload(
            name=name,
            language=language,
            category=category,
            components=components,
            allow_category_change=allow_category_change,
            message_send_ttl_seconds=message_send_ttl_seconds,
        )
        response = await self._client.request(
            "POST",
            f"{business_account_id}/message_templates",
            json=payload,
            response_type="json",
        )
        return TemplateCreateResponse.from_api(response)

    async def update(
        self,
        business_account_id: str,
        template_id: str,
        *,
        category: str | None = None,
        components: Sequence[Mapping[str, Any]] | None = None,
    ) -> GraphSuccessResponse | None:
        """Atualiza categoria/componentes; sem campos, nenhuma requisição é feita."""
        payload = template_builders.build_template_update_payload(
            category=category, components=components
        )
        if not payload:
            return None
        response = await self._client.request(
            "POST",
            f"{business_account_id}/message_templates/{template_id}",
            json=payload,
            response_type="json",
        )
        return GraphSuccessResponse.from_api(response)

    async def delete(
        self,
        business_account_id: str,
        *,
        name: str | None = None,
        template_id: str | None = None,
        hsm_id: str | None = None,
        language: str | None = None,
    ) -> GraphSuccessResponse:
        """Remove por template_id ou por nome (+ idioma/hsm_id)."""
        query = template_builders.build_template_delete_query(
            name=name, template_id=template_id, hsm_id=hsm_id, language=language
        )
        if query is None:
            path = f"{business_account_id}/message_templates/{template_id}"
        else:
            path = f"{business_account_id}/message_templates"
        response = await self._client.request("DELETE", path, query=query, response_type="json")
        return GraphSuccessResponse.from_api(response)
