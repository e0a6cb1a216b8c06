"""Recurso de números: verificação, registro e configurações."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from kapso_client.api.connectors.whatsapp.models import GraphSuccessResponse
from kapso_client.api.payload_builders.whatsapp.phone_numbers import (
    build_register_payload,
    build_request_code_payload,
    build_settings_payload,
    build_verify_code_payload,
)
from kapso_client.resources.base import BaseResource


class PhoneNumbersResource(BaseResource):
    async def _post(self, path: str, payload: dict[str, Any]) -> GraphSuccessResponse:
        response = await self._client.request("POST", path, json=payload, response_type="json")
        return GraphSuccessResponse.from_api(response)

    async def request_code(
        self,
        phone_number_id: str,
        code_method: str,
        language: str = "en_US",
    ) -> GraphSuccessResponse:
        """Solicita código de verificação por SMS ou VOICE."""
        return await self._post(
            f"{phone_number_id}/request_code",
            build_request_code_payload(code_method, language),
        )

    async def verify_code(self, phone_number_id: str, code: str | int) -> GraphSuccessResponse:
        return await self._post(f"{phone_number_id}/verify_code", build_verify_code_payload(code))

    async def register(
        self,
        phone_number_id: str,
        pin: str | int,
        *,
        data_localization_region: str | None = None,
    ) -> GraphSuccessResponse:
        return await self._post(
            f"{phone_number_id}/register",
            build_register_payload(pin, data_localization_region),
        )

    async def deregister(self, phone_number_id: str) -> GraphSuccessResponse:
        return await self._post(f"{phone_number_id}/deregister", {})

    async def update_settings(
        self,
        phone_number_id: str,
        *,
        webhooks: Mapping[str, Any] | None = None,
        application: Mapping[str, Any] | None = None,
    ) -> GraphSuccessResponse:
        return await self._post(
            phone_number_id,
            build_settings_payload(webhooks=webhooks, application=application),
        )

    async def get(self, phone_number_id: str, *, fields: str | None = None) -> Any:
        """Dados do número como retornados pela API (chaves em snake_case)."""
        return await self._client.request(
            "GET", phone_number_id, query={"fields": fields}, response_type="json"
        )
