"""Limites e conjuntos válidos da API Meta/WhatsApp."""

from __future__ import annotations

import re

MAX_BUTTONS_PER_MESSAGE = 3
MAX_LIST_BODY_LENGTH = 4096
MAX_LIST_ROWS = 10
MAX_HEADER_TEXT_LENGTH = 60
MAX_INTERACTIVE_BODY_LENGTH = 1024
MAX_CTA_DISPLAY_TEXT_LENGTH = 20
MAX_FOOTER_TEXT_LENGTH = 60

VALID_RECIPIENT_TYPES = ("individual", "group")
VALID_HEADER_TYPES = ("text", "image", "video", "document")
VALID_MEDIA_TYPES = ("image", "audio", "video", "document", "sticker")
VALID_CODE_METHODS = ("SMS", "VOICE")

# String de mídia que casa inteira (fullmatch) é tratada como media id
MEDIA_ID_PATTERN = re.compile(r"\w+", re.ASCII)
HTTP_URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)
