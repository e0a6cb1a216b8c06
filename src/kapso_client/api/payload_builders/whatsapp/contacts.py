"""Payloads e queries de contatos e conversas (Kapso Proxy)."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from kapso_client.api.validators.whatsapp.common import is_blank, require_text
from kapso_client.api.validators.whatsapp.errors import ValidationError

DEFAULT_SEARCH_FIELDS = ("profile_name", "phone_number")


def build_contact_update_payload(
    *,
    metadata: Mapping[str, Any] | None = None,
    tags: Sequence[str] | None = None,
    customer_id: str | None = None,
    notes: str | None = None,
) -> dict[str, Any]:
    """Só os campos informados; dict vazio significa nada a atualizar."""
    payload: dict[str, Any] = {}
    if metadata:
        payload["metadata"] = dict(metadata)
    if tags:
        payload["tags"] = list(tags)
    if customer_id:
        payload["customer_id"] = customer_id
    if notes:
        payload["notes"] = notes
    return payload


def merge_tags(existing: Iterable[str], added: Iterable[str]) -> list[str]:
    """União preservando a ordem de chegada, sem duplicatas."""
    return list(dict.fromkeys([*existing, *added]))


def remove_tags(existing: Iterable[str], removed: Iterable[str]) -> list[str]:
    to_remove = set(removed)
    return [tag for tag in existing if tag not in to_remove]


def require_tags(tags: Sequence[str] | None) -> list[str]:
    if not tags:
        raise ValidationError("tags cannot be empty")
    return [tags] if isinstance(tags, str) else list(tags)


def build_contact_search_query(
    query: str,
    *,
    search_in: Sequence[str] = DEFAULT_SEARCH_FIELDS,
    limit: int | None = None,
    after: str | None = None,
    before: str | None = None,
) -> dict[str, Any]:
    if is_blank(query):
        raise ValidationError("query cannot be empty")
    return {
        "q": query,
        "search_in": ",".join(search_in),
        "limit": limit,
        "after": after,
        "before": before,
    }


def build_contacts_export_payload(
    export_format: str = "csv",
    filters: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"format": export_format}
    if filters:
        payload["filters"] = dict(filters)
    return payload


def build_conversation_status_payload(conversation_id: str, status: str) -> dict[str, Any]:
    require_text(conversation_id, "conversation_id")
    require_text(status, "status")
    return {"status": status}
