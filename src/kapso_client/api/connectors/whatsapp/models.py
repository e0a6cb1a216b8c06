"""Modelos tipados das respostas da API (Graph API e Kapso Proxy).

Decodificação defensiva: campos ausentes viram None/listas vazias, campos
desconhecidos são ignorados e números chegam como texto onde a API promete
string. Um corpo 2xx com formato incompatível vira WhatsAppApiError com o
corpo original anexado, nunca erro do pydantic.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from kapso_client.api.connectors.whatsapp.meta_errors import (
    ErrorCategory,
    RetryAction,
    RetryHint,
    WhatsAppApiError,
)


class ApiModel(BaseModel):
    """Base dos modelos de resposta."""

    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    @classmethod
    def from_api(cls, data: Any) -> Self:
        """Constrói o modelo a partir do JSON normalizado (snake_case)."""
        if isinstance(data, Mapping):
            return cls._decode(dict(data))
        return cls()

    @classmethod
    def _decode(cls, payload: dict[str, Any]) -> Self:
        try:
            return cls.model_validate(payload)
        except PydanticValidationError as exc:
            fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
            raise WhatsAppApiError(
                f"Unexpected response shape for {cls.__name__}: {', '.join(fields)}",
                http_status=200,
                category=ErrorCategory.UNKNOWN,
                retry_hint=RetryHint(RetryAction.DO_NOT_RETRY),
                details=fields,
                raw_response=payload,
            ) from exc


ItemT = TypeVar("ItemT")


class MessageContact(ApiModel):
    input: str | None = None
    wa_id: str | None = None


class MessageInfo(ApiModel):
    id: str | None = None
    message_status: str | None = None


class SendMessageResponse(ApiModel):
    """Resposta de POST /{phone_number_id}/messages."""

    messaging_product: str | None = None
    contacts: list[MessageContact] = Field(default_factory=list)
    messages: list[MessageInfo] = Field(default_factory=list)

    @property
    def message_id(self) -> str | None:
        """wamid da primeira mensagem aceita."""
        return self.messages[0].id if self.messages else None


class GraphSuccessResponse(ApiModel):
    """Resposta `{"success": true}` ou sucesso sem corpo."""

    success: bool = True

    @classmethod
    def from_api(cls, data: Any) -> Self:
        if isinstance(data, Mapping):
            return cls._decode({"success": True, **dict(data)})
        return cls()


class MediaUploadResponse(ApiModel):
    id: str | None = None


class MediaMetadataResponse(ApiModel):
    messaging_product: str | None = None
    url: str | None = None
    mime_type: str | None = None
    sha256: str | None = None
    file_size: int | str | None = None
    id: str | None = None


class MessageTemplate(ApiModel):
    id: str | None = None
    name: str | None = None
    category: str | None = None
    language: str | None = None
    status: str | None = None
    components: list[dict[str, Any]] = Field(default_factory=list)
    quality_score_category: str | None = None
    warnings: list[Any] | None = None
    previous_category: str | None = None
    library_template_name: str | None = None
    last_updated_time: str | None = None


class TemplateCreateResponse(ApiModel):
    id: str | None = None
    status: str | None = None
    category: str | None = None


class Paging(ApiModel):
    """Cursores de paginação (`paging.cursors` + links next/previous)."""

    before: str | None = None
    after: str | None = None
    next: str | None = None
    previous: str | None = None

    @classmethod
    def from_envelope(cls, paging: Any) -> Paging:
        if not isinstance(paging, Mapping):
            return cls()
        cursors = paging.get("cursors")
        cursors = cursors if isinstance(cursors, Mapping) else {}
        return cls(
            before=cursors.get("before"),
            after=cursors.get("after"),
            next=paging.get("next"),
            previous=paging.get("previous"),
        )


class PagedResult(BaseModel, Generic[ItemT]):
    """Resultado de endpoints de listagem."""

    model_config = ConfigDict(frozen=True)

    data: list[ItemT] = Field(default_factory=list)
    paging: Paging = Field(default_factory=Paging)


def parse_paged(payload: Any, item_model: type[ApiModel] | None = None) -> PagedResult[Any]:
    """Decodifica o envelope `{"data": [...], "paging": {...}}`."""
    envelope = payload if isinstance(payload, Mapping) else {}
    items = envelope.get("data")
    items = items if isinstance(items, list) else []
    paging = Paging.from_envelope(envelope.get("paging"))

    if item_model is None:
        return PagedResult[Any](data=list(items), paging=paging)
    return PagedResult[item_model](  # type: ignore[valid-type]
        data=[item_model.from_api(item) for item in items],
        paging=paging,
    )


def unwrap_data(payload: Any) -> Any:
    """Aceita objeto direto ou envelope `{"data": {...}}` (Kapso Proxy)."""
    if isinstance(payload, Mapping) and isinstance(payload.get("data"), Mapping):
        return payload["data"]
    return payload


class ConversationRecord(ApiModel):
    id: str | None = None
    phone_number: str | None = None
    phone_number_id: str | None = None
    status: str | None = None
    last_active_at: str | None = None
    kapso: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None


class ContactRecord(ApiModel):
    wa_id: str | None = None
    phone_number: str | None = None
    profile_name: str | None = None
    metadata: dict[str, Any] | None = None

    @property
    def tags(self) -> list[str]:
        tags = (self.metadata or {}).get("tags")
        return list(tags) if isinstance(tags, list) else []


class CallRecord(ApiModel):
    id: str | None = None
    direction: str | None = None
    status: str | None = None
    duration_seconds: int | None = None
    started_at: str | None = None
    ended_at: str | None = None
    whatsapp_conversation_id: str | None = None
    whatsapp_contact_id: str | None = None


class CallConnectResponse(ApiModel):
    messaging_product: str | None = None
    calls: list[dict[str, Any]] = Field(default_factory=list)


class CallActionResponse(GraphSuccessResponse):
    messaging_product: str | None = None


class FlowResponse(ApiModel):
    id: str | None = None
    success: bool | None = None
    validation_errors: list[dict[str, Any]] = Field(default_factory=list)


class FlowPreview(ApiModel):
    preview_url: str | None = None
    expires_at: str | None = None


class FlowData(ApiModel):
    id: str | None = None
    name: str | None = None
    status: str | None = None
    categories: list[str] = Field(default_factory=list)
    validation_errors: list[dict[str, Any]] = Field(default_factory=list)
    json_version: str | None = None
    data_api_version: str | None = None
    endpoint_uri: str | None = None
    preview: FlowPreview | None = None
    health_status: dict[str, Any] | None = None


class FlowAssetResponse(ApiModel):
    success: bool | None = None
    validation_errors: list[dict[str, Any]] = Field(default_factory=list)


class FlowPreviewResponse(ApiModel):
    id: str | None = None
    preview: FlowPreview | None = None


class FlowDeployResult(ApiModel):
    """Resultado de deploy idempotente (não vem da API)."""

    id: str
    name: str
    status: str = "published"
    created: bool = False
    message: str = ""
