"""Recurso de conversas (somente Kapso Proxy)."""

from __future__ import annotations

from typing import Any

from kapso_client.api.connectors.whatsapp.models import (
    ConversationRecord,
    GraphSuccessResponse,
    PagedResult,
    parse_paged,
    unwrap_data,
)
from kapso_client.api.payload_builders.whatsapp.contacts import (
    build_conversation_status_payload,
)
from kapso_client.api.validators.whatsapp.common import require_text
from kapso_client.resources.base import BaseResource

_FEATURE = "Conversations API"


class ConversationsResource(BaseResource):
    async def list(
        self,
        phone_number_id: str,
        *,
        status: str | None = None,
        last_active_since: str | None = None,
        last_active_until: str | None = None,
        phone_number: str | None = None,
        limit: int | None = None,
        after: str | None = None,
        before: str | None = None,
        fields: str | None = None,
    ) -> PagedResult[ConversationRecord]:
        self._require_proxy(_FEATURE)
        query = {
            "status": status,
            "last_active_since": last_active_since,
            "last_active_until": last_active_until,
            "phone_number": phone_number,
            "limit": limit,
            "after": after,
            "before": before,
            "fields": fields,
        }
        response = await self._client.request(
            "GET", f"{phone_number_id}/conversations", query=query, response_type="json"
        )
        return parse_paged(response, ConversationRecord)

    async def get(self, conversation_id: str) -> ConversationRecord:
        self._require_proxy(_FEATURE)
        require_text(conversation_id, "conversation_id")
        response = await self._client.request(
            "GET", f"conversations/{conversation_id}", response_type="json"
        )
        return ConversationRecord.from_api(unwrap_data(response))

    async def update_status(self, conversation_id: str, status: str) -> GraphSuccessResponse:
        self._require_proxy(_FEATURE)
        payload = build_conversation_status_payload(conversation_id, status)
        response = await self._client.request(
            "PATCH", f"conversations/{conversation_id}", json=payload, response_type="json"
        )
        return GraphSuccessResponse.from_api(response)

    async def archive(self, conversation_id: str) -> GraphSuccessResponse:
        return await self.update_status(conversation_id, "archived")

    async def unarchive(self, conversation_id: str) -> GraphSuccessResponse:
        return await self.update_status(conversation_id, "active")

    async def end_conversation(self, conversation_id: str) -> GraphSuccessResponse:
        return await self.update_status(conversation_id, "ended")

    async def analytics(
        self,
        phone_number_id: str,
        *,
        conversation_id: str | None = None,
        since: str | None = None,
        until: str | None = None,
        granularity: str = "day",
    ) -> Any:
        self._require_proxy("Conversation Analytics API")
        query = {
            "conversation_id": conversation_id,
            "since": since,
            "until": until,
            "granularity": granularity,
        }
        return await self._client.request(
            "GET",
            f"{phone_number_id}/conversations/analytics",
            query=query,
            response_type="json",
        )
