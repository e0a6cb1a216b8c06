"""Builder para mensagens de texto."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from kapso_client.app.domain.messages import TextMessage


class TextPayloadBuilder:
    """Builder para mensagens de texto simples."""

    def build(self, message: TextMessage) -> dict[str, Any]:
        """Constrói payload para mensagem de texto.

        Args:
            message: Mensagem de texto

        Returns:
            Payload de texto conforme API Meta (`preview_url` só se informado)
        """
        text_obj: dict[str, Any] = {"body": message.body}
        if message.preview_url is not None:
            text_obj["preview_url"] = message.preview_url
        return {"text": text_obj}
