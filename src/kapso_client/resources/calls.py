"""Recurso da Calling API (chamadas de voz) e permissões de chamada."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from kapso_client.api.connectors.whatsapp.models import (
    CallActionResponse,
    CallConnectResponse,
    CallRecord,
    GraphSuccessResponse,
    PagedResult,
    parse_paged,
)
from kapso_client.api.payload_builders.whatsapp.calls import (
    build_call_action_payload,
    build_call_connect_payload,
    build_call_permission_update_payload,
)
from kapso_client.api.validators.whatsapp.common import require_text
from kapso_client.app.constants.whatsapp import CallAction
from kapso_client.resources.base import BaseResource

if TYPE_CHECKING:
    from kapso_client.client import WhatsAppClient


class CallPermissionsResource(BaseResource):
    async def get(self, phone_number_id: str, user_wa_id: str) -> Any:
        require_text(user_wa_id, "user_wa_id")
        return await self._client.request(
            "GET",
            f"{phone_number_id}/call_permissions",
            query={"user_wa_id": user_wa_id},
            response_type="json",
        )

    async def update(
        self,
        phone_number_id: str,
        user_wa_id: str,
        permission: Mapping[str, Any] | str,
    ) -> GraphSuccessResponse:
        response = await self._client.request(
            "POST",
            f"{phone_number_id}/call_permissions",
            json=build_call_permission_update_payload(user_wa_id, permission),
            response_type="json",
        )
        return GraphSuccessResponse.from_api(response)


class CallsResource(BaseResource):
    """Inicia, aceita e encerra chamadas."""

    def __init__(self, client: WhatsAppClient) -> None:
        super().__init__(client)
        self.permissions = CallPermissionsResource(client)

    async def _action(self, phone_number_id: str, payload: dict[str, Any]) -> CallActionResponse:
        response = await self._client.request(
            "POST", f"{phone_number_id}/calls", json=payload, response_type="json"
        )
        return CallActionResponse.from_api(response)

    async def connect(
        self,
        phone_number_id: str,
        to: str,
        *,
        session: Mapping[str, Any] | None = None,
        biz_opaque_callback_data: str | None = None,
    ) -> CallConnectResponse:
        payload = build_call_connect_payload(
            to, session=session, biz_opaque_callback_data=biz_opaque_callback_data
        )
        response = await self._client.request(
            "POST", f"{phone_number_id}/calls", json=payload, response_type="json"
        )
        return CallConnectResponse.from_api(response)

    async def pre_accept(
        self, phone_number_id: str, call_id: str, session: Mapping[str, Any]
    ) -> CallActionResponse:
        payload = build_call_action_payload(CallAction.PRE_ACCEPT, call_id, session=session)
        return await self._action(phone_number_id, payload)

    async def accept(
        self,
        phone_number_id: str,
        call_id: str,
        session: Mapping[str, Any],
        *,
        biz_opaque_callback_data: str | None = None,
    ) -> CallActionResponse:
        payload = build_call_action_payload(
            CallAction.ACCEPT,
            call_id,
            session=session,
            biz_opaque_callback_data=biz_opaque_callback_data,
        )
        return await self._action(phone_number_id, payload)

    async def reject(self, phone_number_id: str, call_id: str) -> CallActionResponse:
        return await self._action(
            phone_number_id, build_call_action_payload(CallAction.REJECT, call_id)
        )

    async def terminate(self, phone_number_id: str, call_id: str) -> CallActionResponse:
        return await self._action(
            phone_number_id, build_call_action_payload(CallAction.TERMINATE, call_id)
        )

    async def list(
        self,
        phone_number_id: str,
        *,
        direction: str | None = None,
        status: str | None = None,
        since: str | None = None,
        until: str | None = None,
        call_id: str | None = None,
        limit: int | None = None,
        after: str | None = None,
        before: str | None = None,
        fields: str | None = None,
    ) -> PagedResult[CallRecord]:
        """Histórico de chamadas (somente Kapso Proxy)."""
        self._require_proxy("Call history API")
        query = {
            "direction": direction,
            "status": status,
            "since": since,
            "until": until,
            "call_id": call_id,
            "limit": limit,
            "after": after,
            "before": before,
            "fields": fields,
        }
        response = await self._client.request(
            "GET", f"{phone_number_id}/calls", query=query, response_type="json"
        )
        return parse_paged(response, CallRecord)

    async def get(
        self, phone_number_id: str, call_id: str, *, fields: str | None = None
    ) -> CallRecord:
        self._require_proxy("Call details API")
        require_text(call_id, "call_id")
        response = await self._client.request(
            "GET",
            f"{phone_number_id}/calls/{call_id}",
            query={"fields": fields},
            response_type="json",
        )
        return CallRecord.from_api(response)
