"""Recurso de contatos (somente Kapso Proxy)."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from kapso_client.api.connectors.whatsapp.models import (
    ContactRecord,
    GraphSuccessResponse,
    PagedResult,
    parse_paged,
    unwrap_data,
)
from kapso_client.api.payload_builders.whatsapp.contacts import (
    DEFAULT_SEARCH_FIELDS,
    build_contact_search_query,
    build_contact_update_payload,
    build_contacts_export_payload,
    merge_tags,
    remove_tags,
    require_tags,
)
from kapso_client.api.validators.whatsapp.common import require_text
from kapso_client.resources.base import BaseResource

_FEATURE = "Contacts API"


class ContactsResource(BaseResource):
    async def list(
        self,
        phone_number_id: str,
        *,
        customer_id: str | None = None,
        phone_number: str | None = None,
        profile_name: str | None = None,
        limit: int | None = None,
        after: str | None = None,
        before: str | None = None,
        fields: str | None = None,
    ) -> PagedResult[ContactRecord]:
        self._require_proxy(_FEATURE)
        query = {
            "customer_id": customer_id,
            "phone_number": phone_number,
            "profile_name": profile_name,
            "limit": limit,
            "after": after,
            "before": before,
            "fields": fields,
        }
        response = await self._client.request(
            "GET", f"{phone_number_id}/contacts", query=query, response_type="json"
        )
        return parse_paged(response, ContactRecord)

    async def get(
        self, phone_number_id: str, wa_id: str, *, fields: str | None = None
    ) -> ContactRecord:
        """Detalhes do contato (aceita objeto direto ou envelope `data`)."""
        self._require_proxy(_FEATURE)
        require_text(wa_id, "wa_id")
        response = await self._client.request(
            "GET",
            f"{phone_number_id}/contacts/{wa_id}",
            query={"fields": fields},
            response_type="json",
        )
        return ContactRecord.from_api(unwrap_data(response))

    async def update(
        self,
        phone_number_id: str,
        wa_id: str,
        *,
        metadata: Mapping[str, Any] | None = None,
        tags: Sequence[str] | None = None,
        customer_id: str | None = None,
        notes: str | None = None,
    ) -> GraphSuccessResponse | None:
        """Atualiza só os campos informados; sem campos, nada é enviado."""
        self._require_proxy(_FEATURE)
        require_text(wa_id, "wa_id")
        payload = build_contact_update_payload(
            metadata=metadata, tags=tags, customer_id=customer_id, notes=notes
        )
        if not payload:
            return None
        response = await self._client.request(
            "PATCH",
            f"{phone_number_id}/contacts/{wa_id}",
            json=payload,
            response_type="json",
        )
        return GraphSuccessResponse.from_api(response)

    async def add_tags(
        self, phone_number_id: str, wa_id: str, tags: Sequence[str]
    ) -> GraphSuccessResponse | None:
        new_tags = require_tags(tags)
        contact = await self.get(phone_number_id, wa_id)
        return await self.update(
            phone_number_id, wa_id, metadata={"tags": merge_tags(contact.tags, new_tags)}
        )

    async def remove_tags(
        self, phone_number_id: str, wa_id: str, tags: Sequence[str]
    ) -> GraphSuccessResponse | None:
        removed = require_tags(tags)
        contact = await self.get(phone_number_id, wa_id)
        return await self.update(
            phone_number_id, wa_id, metadata={"tags": remove_tags(contact.tags, removed)}
        )

    async def search(
        self,
        phone_number_id: str,
        query: str,
        *,
        search_in: Sequence[str] = DEFAULT_SEARCH_FIELDS,
        limit: int | None = None,
        after: str | None = None,
        before: str | None = None,
    ) -> PagedResult[ContactRecord]:
        self._require_proxy("Contacts Search API")
        params = build_contact_search_query(
            query, search_in=search_in, limit=limit, after=after, before=before
        )
        response = await self._client.request(
            "GET", f"{phone_number_id}/contacts/search", query=params, response_type="json"
        )
        return parse_paged(response, ContactRecord)

    async def analytics(
        self,
        phone_number_id: str,
        *,
        wa_id: str | None = None,
        since: str | None = None,
        until: str | None = None,
        granularity: str = "day",
        metrics: Sequence[str] | None = None,
    ) -> Any:
        self._require_proxy("Contact Analytics API")
        query = {
            "wa_id": wa_id,
            "since": since,
            "until": until,
            "granularity": granularity,
            "metrics": ",".join(metrics) if metrics else None,
        }
        return await self._client.request(
            "GET", f"{phone_number_id}/contacts/analytics", query=query, response_type="json"
        )

    async def export(
        self,
        phone_number_id: str,
        *,
        export_format: str = "csv",
        filters: Mapping[str, Any] | None = None,
    ) -> Any:
        self._require_proxy("Contacts Export API")
        return await self._client.request(
            "POST",
            f"{phone_number_id}/contacts/export",
            json=build_contacts_export_payload(export_format, filters),
            response_type="json",
        )
