"""Payloads da Calling API."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from kapso_client.api.validators.whatsapp.common import is_blank
from kapso_client.api.validators.whatsapp.errors import ValidationError
from kapso_client.app.constants.whatsapp import MESSAGING_PRODUCT, CallAction


def _require_call_id(call_id: str | None) -> None:
    if is_blank(call_id):
        raise ValidationError("call_id cannot be empty")


def _require_session(session: Mapping[str, Any] | None) -> None:
    if session is None:
        raise ValidationError("session cannot be None")


def build_call_connect_payload(
    to: str,
    *,
    session: Mapping[str, Any] | None = None,
    biz_opaque_callback_data: str | None = None,
) -> dict[str, Any]:
    if is_blank(to):
        raise ValidationError("to is required")
    payload: dict[str, Any] = {
        "messaging_product": MESSAGING_PRODUCT,
        "to": to,
        "action": CallAction.CONNECT.value,
    }
    if session is not None:
        payload["session"] = dict(session)
    if biz_opaque_callback_data:
        payload["biz_opaque_callback_data"] = biz_opaque_callback_data
    return payload


def build_call_action_payload(
    action: CallAction | str,
    call_id: str,
    *,
    session: Mapping[str, Any] | None = None,
    biz_opaque_callback_data: str | None = None,
) -> dict[str, Any]:
    """pre_accept/accept exigem `session`; reject/terminate só o call_id.

    Raises:
        ValidationError: call_id vazio, session ausente ou ação inválida
    """
    try:
        call_action = CallAction(str(action))
    except ValueError as exc:
        raise ValidationError(f"Invalid call action '{action}'") from exc
    if call_action is CallAction.CONNECT:
        raise ValidationError("Use build_call_connect_payload for connect")

    _require_call_id(call_id)
    payload: dict[str, Any] = {
        "messaging_product": MESSAGING_PRODUCT,
        "call_id": call_id,
        "action": call_action.value,
    }
    if call_action in (CallAction.PRE_ACCEPT, CallAction.ACCEPT):
        _require_session(session)
        payload["session"] = dict(session)  # type: ignore[arg-type]
    if call_action is CallAction.ACCEPT and biz_opaque_callback_data:
        payload["biz_opaque_callback_data"] = biz_opaque_callback_data
    return payload


def build_call_permission_update_payload(
    user_wa_id: str,
    permission: Mapping[str, Any] | str,
) -> dict[str, Any]:
    if is_blank(user_wa_id):
        raise ValidationError("user_wa_id cannot be empty")
    if permission is None:
        raise ValidationError("permission cannot be empty")
    return {
        "user_wa_id": user_wa_id,
        "permission": dict(permission) if isinstance(permission, Mapping) else permission,
    }
