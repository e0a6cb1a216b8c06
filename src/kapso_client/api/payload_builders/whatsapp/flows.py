"""Payloads de gerenciamento de WhatsApp Flows."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from kapso_client.api.validators.whatsapp.common import require_text
from kapso_client.api.validators.whatsapp.errors import ValidationError
from kapso_client.app.constants.whatsapp import MESSAGING_PRODUCT

DEFAULT_FLOW_CATEGORIES = ("OTHER",)
FLOW_UPDATABLE_ATTRIBUTES = ("name", "categories", "endpoint_uri", "application_id")
FLOW_PREVIEW_FIELDS = "preview.preview_url,preview.expires_at"


def build_flow_create_payload(
    name: str,
    categories: Sequence[str] = DEFAULT_FLOW_CATEGORIES,
    *,
    endpoint_uri: str | None = None,
    application_id: str | None = None,
) -> dict[str, Any]:
    require_text(name, "name")
    payload: dict[str, Any] = {"name": name, "categories": list(categories)}
    if endpoint_uri:
        payload["endpoint_uri"] = endpoint_uri
    if application_id:
        payload["application_id"] = application_id
    return payload


def build_flow_update_payload(attributes: Mapping[str, Any]) -> dict[str, Any]:
    """Filtra atributos editáveis (name, categories, endpoint_uri, application_id).

    Raises:
        ValidationError: Se nenhum atributo válido sobrar
    """
    payload = {
        key: (list(value) if key == "categories" else value)
        for key, value in attributes.items()
        if key in FLOW_UPDATABLE_ATTRIBUTES and value is not None
    }
    if not payload:
        raise ValidationError("No valid attributes provided")
    return payload


def build_flow_asset_payload(asset: Mapping[str, Any] | str) -> dict[str, Any]:
    """Corpo de POST /{flow_id}/assets com o Flow JSON serializado."""
    if isinstance(asset, str):
        require_text(asset, "asset")
        asset_json = asset
    else:
        asset_json = json.dumps(asset)
    return {
        "messaging_product": MESSAGING_PRODUCT,
        "asset_type": "FLOW_JSON",
        "asset": asset_json,
    }


def build_flow_scope_query(
    phone_number_id: str | None = None,
    business_account_id: str | None = None,
) -> dict[str, Any]:
    query: dict[str, Any] = {}
    if phone_number_id:
        query["phone_number_id"] = phone_number_id
    if business_account_id:
        query["business_account_id"] = business_account_id
    return query


def join_fields(fields: Sequence[str] | str | None) -> str | None:
    if fields is None:
        return None
    return fields if isinstance(fields, str) else ",".join(fields)
