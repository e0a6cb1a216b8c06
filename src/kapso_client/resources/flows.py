"""Recurso de WhatsApp Flows: ciclo de vida e deploy idempotente."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from kapso_client.api.connectors.whatsapp.models import (
    FlowAssetResponse,
    FlowData,
    FlowDeployResult,
    FlowPreviewResponse,
    FlowResponse,
    GraphSuccessResponse,
    PagedResult,
    parse_paged,
)
from kapso_client.api.payload_builders.whatsapp.flows import (
    DEFAULT_FLOW_CATEGORIES,
    FLOW_PREVIEW_FIELDS,
    build_flow_asset_payload,
    build_flow_create_payload,
    build_flow_scope_query,
    build_flow_update_payload,
    join_fields,
)
from kapso_client.resources.base import BaseResource
from kapso_client.utils.errors import ConfigurationError, KapsoClientError

logger = logging.getLogger(__name__)


class FlowsResource(BaseResource):
    """Gerenciamento de Flows de uma WhatsApp Business Account."""

    async def create(
        self,
        business_account_id: str,
        name: str,
        categories: Sequence[str] = DEFAULT_FLOW_CATEGORIES,
        *,
        endpoint_uri: str | None = None,
        application_id: str | None = None,
    ) -> FlowResponse:
        payload = build_flow_create_payload(
            name, categories, endpoint_uri=endpoint_uri, application_id=application_id
        )
        response = await self._client.request(
            "POST", f"{business_account_id}/flows", json=payload, response_type="json"
        )
        return FlowResponse.from_api(response)

    async def update(self, flow_id: str, **attributes: Any) -> FlowResponse:
        """Atualiza name, categories, endpoint_uri e/ou application_id.

        Raises:
            ValidationError: Se nenhum atributo editável for informado
        """
        payload = build_flow_update_payload(attributes)
        response = await self._client.request("POST", flow_id, json=payload, response_type="json")
        return FlowResponse.from_api(response)

    async def delete(self, flow_id: str) -> GraphSuccessResponse:
        response = await self._client.request("DELETE", flow_id, response_type="json")
        return GraphSuccessResponse.from_api(response)

    async def get(self, flow_id: str, *, fields: Sequence[str] | None = None) -> FlowData:
        response = await self._client.request(
            "GET", flow_id, query={"fields": join_fields(fields)}, response_type="json"
        )
        return FlowData.from_api(response)

    async def list(
        self, business_account_id: str, *, fields: Sequence[str] | None = None
    ) -> PagedResult[FlowData]:
        response = await self._client.request(
            "GET",
            f"{business_account_id}/flows",
            query={"fields": join_fields(fields)},
            response_type="json",
        )
        return parse_paged(response, FlowData)

    async def publish(
        self,
        flow_id: str,
        *,
        phone_number_id: str | None = None,
        business_account_id: str | None = None,
    ) -> GraphSuccessResponse:
        response = await self._client.request(
            "POST",
            f"{flow_id}/publish",
            query=build_flow_scope_query(phone_number_id, business_account_id),
            json={},
            response_type="json",
        )
        return GraphSuccessResponse.from_api(response)

    async def deprecate(
        self,
        flow_id: str,
        *,
        phone_number_id: str | None = None,
        business_account_id: str | None = None,
    ) -> GraphSuccessResponse:
        response = await self._client.request(
            "POST",
            f"{flow_id}/deprecate",
            query=build_flow_scope_query(phone_number_id, business_account_id),
            json={},
            response_type="json",
        )
        return GraphSuccessResponse.from_api(response)

    async def update_asset(
        self,
        flow_id: str,
        asset: Mapping[str, Any] | str,
        *,
        phone_number_id: str | None = None,
        business_account_id: str | None = None,
    ) -> FlowAssetResponse:
        """Envia o Flow JSON (dict ou string já serializada)."""
        response = await self._client.request(
            "POST",
            f"{flow_id}/assets",
            query=build_flow_scope_query(phone_number_id, business_account_id),
            json=build_flow_asset_payload(asset),
            response_type="json",
        )
        return FlowAssetResponse.from_api(response)

    async def preview(
        self,
        flow_id: str,
        *,
        phone_number_id: str | None = None,
        business_account_id: str | None = None,
    ) -> FlowPreviewResponse:
        query = build_flow_scope_query(phone_number_id, business_account_id)
        query["fields"] = FLOW_PREVIEW_FIELDS
        response = await self._client.request("GET", flow_id, query=query, response_type="json")
        return FlowPreviewResponse.from_api(response)

    async def deploy(
        self,
        business_account_id: str,
        name: str,
        flow_json: Mapping[str, Any] | str,
        *,
        categories: Sequence[str] = DEFAULT_FLOW_CATEGORIES,
        endpoint_uri: str | None = None,
        application_id: str | None = None,
    ) -> FlowDeployResult:
        """Cria ou atualiza o Flow pelo nome, envia o asset e publica.

        Chamar de novo com os mesmos dados reaproveita o Flow existente.
        """
        existing = await self.list(business_account_id)
        flow = next((item for item in existing.data if item.name == name), None)

        if flow is None or not flow.id:
            logger.debug("flow_deploy_create", extra={"flow_name": name})
            created = await self.create(
                business_account_id,
                name,
                categories,
                endpoint_uri=endpoint_uri,
                application_id=application_id,
            )
            if not created.id:
                raise KapsoClientError(f"Flow creation returned no id for {name!r}")
            flow_id = created.id
            was_created = True
        else:
            flow_id = flow.id
            was_created = False
            logger.debug("flow_deploy_reuse", extra={"flow_name": name, "flow_id": flow_id})
            changes: dict[str, Any] = {
                "endpoint_uri": endpoint_uri,
                "application_id": application_id,
            }
            if tuple(categories) != DEFAULT_FLOW_CATEGORIES:
                changes["categories"] = categories
            if any(value is not None for value in changes.values()):
                await self.update(flow_id, **changes)

        logger.debug("flow_deploy_asset", extra={"flow_id": flow_id})
        await self.update_asset(flow_id, flow_json)

        logger.debug("flow_deploy_publish", extra={"flow_id": flow_id})
        await self.publish(flow_id)

        return FlowDeployResult(
            id=flow_id,
            name=name,
            created=was_created,
            message=(
                "Flow created and published" if was_created else "Flow updated and published"
            ),
        )

    async def download_flow_media(self, media_url: str, access_token: str | None = None) -> bytes:
        """Baixa mídia enviada em um Flow usando Bearer token.

        Raises:
            ConfigurationError: Sem token explícito nem access_token no cliente
        """
        token = access_token or self._client.config.access_token
        if not token:
            raise ConfigurationError("Access token required to download Flow media")
        response = await self._client.fetch(
            media_url, headers={"Authorization": f"Bearer {token}"}
        )
        return response.content
