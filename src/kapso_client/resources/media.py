"""Recurso de mídia: upload, metadados, remoção e download."""

from __future__ import annotations

import base64
import logging
from typing import Any, Literal

import httpx

from kapso_client.api.connectors.whatsapp.meta_errors import WhatsAppApiError
from kapso_client.api.connectors.whatsapp.models import (
    GraphSuccessResponse,
    MediaMetadataResponse,
    MediaUploadResponse,
)
from kapso_client.api.payload_builders.whatsapp.media import build_media_upload_form
from kapso_client.api.validators.whatsapp.errors import ValidationError
from kapso_client.resources.base import BaseResource
from kapso_client.utils.errors import KapsoClientError

logger = logging.getLogger(__name__)

DownloadAuth = Literal["auto", "always", "never"]
DownloadOutput = Literal["bytes", "base64", "response"]

GRAPH_API_HOST = "graph.facebook.com"


def is_graph_api_url(url: str) -> bool:
    """True quando o host da URL é a Graph API (ou um subdomínio dela)."""
    try:
        host = httpx.URL(url).host
    except httpx.InvalidURL:
        return False
    return host == GRAPH_API_HOST or host.endswith(f".{GRAPH_API_HOST}")


class MediaResource(BaseResource):
    """Mídia da WhatsApp Cloud API."""

    async def upload(
        self,
        phone_number_id: str,
        media_type: str,
        content: bytes,
        filename: str,
        *,
        mime_type: str | None = None,
        upload_strategy: str | None = None,
    ) -> MediaUploadResponse:
        """Envia bytes como multipart para POST /{phone_number_id}/media.

        Args:
            phone_number_id: ID do número
            media_type: image, audio, video, document ou sticker
            content: Conteúdo do arquivo em memória
            filename: Nome do arquivo (usado para inferir o content-type)
            mime_type: Content-type explícito
            upload_strategy: Estratégia de upload repassada à API

        Returns:
            MediaUploadResponse com o media id
        """
        data, files = build_media_upload_form(
            media_type,
            content,
            filename,
            mime_type=mime_type,
            upload_strategy=upload_strategy,
        )
        response = await self._client.request(
            "POST", f"{phone_number_id}/media", data=data, files=files, response_type="json"
        )
        return MediaUploadResponse.from_api(response)

    def _scope_query(self, phone_number_id: str | None) -> dict[str, Any]:
        # No proxy o phone_number_id é obrigatório
        if self._client.is_proxy and not phone_number_id:
            raise ValidationError("phone_number_id is required when using Kapso proxy")
        return {"phone_number_id": phone_number_id} if phone_number_id else {}

    async def get(self, media_id: str, phone_number_id: str | None = None) -> MediaMetadataResponse:
        query = self._scope_query(phone_number_id)
        response = await self._client.request("GET", media_id, query=query, response_type="json")
        return MediaMetadataResponse.from_api(response)

    async def delete(
        self, media_id: str, phone_number_id: str | None = None
    ) -> GraphSuccessResponse:
        query = self._scope_query(phone_number_id)
        response = await self._client.request(
            "DELETE", media_id, query=query, response_type="json"
        )
        return GraphSuccessResponse.from_api(response)

    async def info(self, media_id: str, phone_number_id: str | None = None) -> dict[str, Any]:
        """Resumo dos metadados com `file_size` inteiro."""
        metadata = await self.get(media_id, phone_number_id)
        try:
            file_size = int(metadata.file_size or 0)
        except (TypeError, ValueError):
            file_size = 0
        return {
            "id": metadata.id,
            "url": metadata.url,
            "mime_type": metadata.mime_type,
            "sha256": metadata.sha256,
            "file_size": file_size,
            "messaging_product": metadata.messaging_product,
        }

    async def download(
        self,
        media_id: str,
        phone_number_id: str | None = None,
        *,
        headers: dict[str, str] | None = None,
        auth: DownloadAuth = "auto",
        output: DownloadOutput = "bytes",
    ) -> Any:
        """Baixa o conteúdo da mídia.

        Em `auth="auto"` as credenciais só são enviadas quando a URL aponta
        para a Graph API; CDNs recebem a requisição sem autenticação.

        Returns:
            bytes, string base64 ou RawResponse, conforme `output`

        Raises:
            ValidationError: `auth`/`output` inválidos
            WhatsAppApiError: Falha no download
        """
        if auth not in ("auto", "always", "never"):
            raise ValidationError("auth must be 'auto', 'always' or 'never'")
        if output not in ("bytes", "base64", "response"):
            raise ValidationError("output must be 'bytes', 'base64' or 'response'")

        metadata = await self.get(media_id, phone_number_id)
        if not metadata.url:
            raise KapsoClientError(f"Media {media_id} has no download URL")

        use_auth = auth == "always" or (auth == "auto" and is_graph_api_url(metadata.url))
        logger.debug("media_download", extra={"media_id": media_id, "authenticated": use_auth})

        if use_auth:
            response = await self._client.fetch(metadata.url, headers=headers)
        else:
            response = await self._client.raw_request("GET", metadata.url, headers=headers)
            if not response.is_success:
                raise WhatsAppApiError(
                    f"Failed to download media: {response.status_code}",
                    http_status=response.status_code,
                    raw_response=response.text,
                )

        if output == "response":
            return response
        if output == "base64":
            return base64.b64encode(response.content).decode("ascii")
        return response.content
