"""Payloads de registro e configuração de números."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from kapso_client.api.validators.whatsapp.common import is_blank
from kapso_client.api.validators.whatsapp.errors import ValidationError
from kapso_client.api.validators.whatsapp.limits import VALID_CODE_METHODS
from kapso_client.app.constants.whatsapp import MESSAGING_PRODUCT


def build_request_code_payload(code_method: str, language: str = "en_US") -> dict[str, Any]:
    method = str(code_method).upper()
    if method not in VALID_CODE_METHODS:
        raise ValidationError(
            f"Invalid code method '{code_method}'. Must be one of: {', '.join(VALID_CODE_METHODS)}"
        )
    return {"code_method": method, "language": language}


def build_verify_code_payload(code: str | int) -> dict[str, Any]:
    if is_blank(code):
        raise ValidationError("Verification code cannot be empty")
    return {"code": str(code)}


def build_register_payload(
    pin: str | int,
    data_localization_region: str | None = None,
) -> dict[str, Any]:
    if is_blank(pin):
        raise ValidationError("PIN cannot be empty")
    payload: dict[str, Any] = {"messaging_product": MESSAGING_PRODUCT, "pin": str(pin)}
    if data_localization_region:
        payload["data_localization_region"] = data_localization_region
    return payload


def build_settings_payload(
    *,
    webhooks: Mapping[str, Any] | None = None,
    application: Mapping[str, Any] | None = None,
    messaging_product: str = MESSAGING_PRODUCT,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"messaging_product": messaging_product}
    if webhooks:
        payload["webhooks"] = dict(webhooks)
    if application:
        payload["application"] = dict(application)
    return payload
