"""Recurso de mensagens: envio, status e histórico (proxy)."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from kapso_client.api.connectors.whatsapp.models import (
    GraphSuccessResponse,
    PagedResult,
    SendMessageResponse,
    parse_paged,
)
from kapso_client.api.payload_builders.whatsapp import build_full_payload
from kapso_client.api.payload_builders.whatsapp.status import (
    build_mark_read_payload,
    build_typing_indicator_payload,
)
from kapso_client.app.constants.whatsapp import MessageType
from kapso_client.app.domain.messages import (
    ContactsMessage,
    FlowMessage,
    InteractiveButtonsMessage,
    InteractiveCatalogMessage,
    InteractiveCtaUrlMessage,
    InteractiveListMessage,
    InteractiveLocationRequestMessage,
    LocationMessage,
    MediaMessage,
    OutboundMessage,
    ReactionMessage,
    TemplateMessage,
    TextMessage,
)
from kapso_client.resources.base import BaseResource


def _messages_path(phone_number_id: str) -> str:
    return f"{phone_number_id}/messages"


class MessagesResource(BaseResource):
    """Envio de mensagens.

    Os atalhos `send_*` aceitam os campos comuns (`recipient_type`,
    `context_message_id`, `biz_opaque_callback_data`) como kwargs.
    """

    async def send(self, phone_number_id: str, message: OutboundMessage) -> SendMessageResponse:
        """Valida, monta e envia qualquer variante de mensagem.

        Raises:
            ValidationError: Mensagem inválida (nenhuma requisição é feita)
            WhatsAppApiError: Falha classificada da API
        """
        payload = build_full_payload(message)
        response = await self._client.request(
            "POST", _messages_path(phone_number_id), json=payload, response_type="json"
        )
        return SendMessageResponse.from_api(response)

    async def send_text(
        self,
        phone_number_id: str,
        to: str,
        body: str,
        *,
        preview_url: bool | None = None,
        **common: Any,
    ) -> SendMessageResponse:
        message = TextMessage(to=to, body=body, preview_url=preview_url, **common)
        return await self.send(phone_number_id, message)

    async def send_media(
        self,
        phone_number_id: str,
        to: str,
        media_type: MessageType | str,
        media: Mapping[str, Any] | str,
        **options: Any,
    ) -> SendMessageResponse:
        message = MediaMessage(to=to, media_type=media_type, media=media, **options)
        return await self.send(phone_number_id, message)

    async def send_image(
        self, phone_number_id: str, to: str, image: Mapping[str, Any] | str, **options: Any
    ) -> SendMessageResponse:
        return await self.send_media(phone_number_id, to, MessageType.IMAGE, image, **options)

    async def send_audio(
        self, phone_number_id: str, to: str, audio: Mapping[str, Any] | str, **options: Any
    ) -> SendMessageResponse:
        return await self.send_media(phone_number_id, to, MessageType.AUDIO, audio, **options)

    async def send_video(
        self, phone_number_id: str, to: str, video: Mapping[str, Any] | str, **options: Any
    ) -> SendMessageResponse:
        return await self.send_media(phone_number_id, to, MessageType.VIDEO, video, **options)

    async def send_document(
        self, phone_number_id: str, to: str, document: Mapping[str, Any] | str, **options: Any
    ) -> SendMessageResponse:
        return await self.send_media(
            phone_number_id, to, MessageType.DOCUMENT, document, **options
        )

    async def send_sticker(
        self, phone_number_id: str, to: str, sticker: Mapping[str, Any] | str, **options: Any
    ) -> SendMessageResponse:
        return await self.send_media(phone_number_id, to, MessageType.STICKER, sticker, **options)

    async def send_location(
        self,
        phone_number_id: str,
        to: str,
        latitude: float,
        longitude: float,
        **options: Any,
    ) -> SendMessageResponse:
        message = LocationMessage(to=to, latitude=latitude, longitude=longitude, **options)
        return await self.send(phone_number_id, message)

    async def send_contacts(
        self,
        phone_number_id: str,
        to: str,
        contacts: Sequence[Mapping[str, Any]],
        **common: Any,
    ) -> SendMessageResponse:
        return await self.send(phone_number_id, ContactsMessage(to=to, contacts=contacts, **common))

    async def send_template(
        self,
        phone_number_id: str,
        to: str,
        name: str,
        language: str,
        *,
        components: Sequence[Mapping[str, Any]] | None = None,
        **common: Any,
    ) -> SendMessageResponse:
        message = TemplateMessage(
            to=to, name=name, language=language, components=components, **common
        )
        return await self.send(phone_number_id, message)

    async def send_reaction(
        self,
        phone_number_id: str,
        to: str,
        message_id: str,
        emoji: str | None = None,
        **common: Any,
    ) -> SendMessageResponse:
        message = ReactionMessage(to=to, message_id=message_id, emoji=emoji, **common)
        return await self.send(phone_number_id, message)

    async def send_interactive_buttons(
        self,
        phone_number_id: str,
        to: str,
        body_text: str,
        buttons: Sequence[Mapping[str, Any]],
        **options: Any,
    ) -> SendMessageResponse:
        message = InteractiveButtonsMessage(to=to, body_text=body_text, buttons=buttons, **options)
        return await self.send(phone_number_id, message)

    async def send_interactive_list(
        self,
        phone_number_id: str,
        to: str,
        body_text: str,
        button_text: str,
        sections: Sequence[Mapping[str, Any]],
        **options: Any,
    ) -> SendMessageResponse:
        message = InteractiveListMessage(
            to=to, body_text=body_text, button_text=button_text, sections=sections, **options
        )
        return await self.send(phone_number_id, message)

    async def send_interactive_cta_url(
        self,
        phone_number_id: str,
        to: str,
        body_text: str,
        display_text: str,
        url: str,
        **options: Any,
    ) -> SendMessageResponse:
        message = InteractiveCtaUrlMessage(
            to=to, body_text=body_text, display_text=display_text, url=url, **options
        )
        return await self.send(phone_number_id, message)

    async def send_interactive_catalog_message(
        self,
        phone_number_id: str,
        to: str,
        body_text: str,
        thumbnail_product_retailer_id: str,
        **options: Any,
    ) -> SendMessageResponse:
        message = InteractiveCatalogMessage(
            to=to,
            body_text=body_text,
            thumbnail_product_retailer_id=thumbnail_product_retailer_id,
            **options,
        )
        return await self.send(phone_number_id, message)

    async def send_interactive_location_request(
        self,
        phone_number_id: str,
        to: str,
        body_text: str,
        **options: Any,
    ) -> SendMessageResponse:
        message = InteractiveLocationRequestMessage(to=to, body_text=body_text, **options)
        return await self.send(phone_number_id, message)

    async def send_flow(
        self,
        phone_number_id: str,
        to: str,
        flow_id: str,
        flow_cta: str,
        flow_token: str,
        **options: Any,
    ) -> SendMessageResponse:
        message = FlowMessage(
            to=to, flow_id=flow_id, flow_cta=flow_cta, flow_token=flow_token, **options
        )
        return await self.send(phone_number_id, message)

    async def mark_read(self, phone_number_id: str, message_id: str) -> GraphSuccessResponse:
        response = await self._client.request(
            "POST",
            _messages_path(phone_number_id),
            json=build_mark_read_payload(message_id),
            response_type="json",
        )
        return GraphSuccessResponse.from_api(response)

    async def send_typing_indicator(self, phone_number_id: str, to: str) -> GraphSuccessResponse:
        response = await self._client.request(
            "POST",
            _messages_path(phone_number_id),
            json=build_typing_indicator_payload(to),
            response_type="json",
        )
        return GraphSuccessResponse.from_api(response)

    async def query(
        self,
        phone_number_id: str,
        *,
        direction: str | None = None,
        status: str | None = None,
        since: str | None = None,
        until: str | None = None,
        conversation_id: str | None = None,
        limit: int | None = None,
        after: str | None = None,
        before: str | None = None,
        fields: str | None = None,
    ) -> PagedResult[Any]:
        """Histórico de mensagens (somente Kapso Proxy)."""
        self._require_proxy("Message history API")
        query = {
            "phone_number_id": phone_number_id,
            "direction": direction,
            "status": status,
            "since": since,
            "until": until,
            "conversation_id": conversation_id,
            "limit": limit,
            "after": after,
            "before": before,
            "fields": fields,
        }
        response = await self._client.request(
            "GET", _messages_path(phone_number_id), query=query, response_type="json"
        )
        return parse_paged(response)

    async def list_by_conversation(
        self,
        phone_number_id: str,
        conversation_id: str,
        *,
        limit: int | None = None,
        after: str | None = None,
        before: str | None = None,
        fields: str | None = None,
    ) -> PagedResult[Any]:
        return await self.query(
            phone_number_id,
            conversation_id=conversation_id,
            limit=limit,
            after=after,
            before=before,
            fields=fields,
        )
