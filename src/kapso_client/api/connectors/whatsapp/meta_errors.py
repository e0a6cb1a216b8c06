"""Erros e classificação da API Meta/WhatsApp (direta e Kapso Proxy).

Funções puras e determinísticas:
- classify(code, http_status) -> ErrorCategory
- derive_retry_hint(code, http_status, retry_after_ms) -> RetryHint
- parse_retry_after(header, now) -> ms | None

WhatsAppApiError é montado uma vez por chamada falha, a partir do envelope
JSON de erro ou de uma falha HTTP genérica, e não muda depois disso.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from enum import StrEnum
from typing import Any

from kapso_client.utils.errors import KapsoClientError


class ErrorCategory(StrEnum):
    """Categoria semântica de uma falha da API."""

    AUTHORIZATION = "authorization"
    PERMISSION = "permission"
    PARAMETER = "parameter"
    THROTTLING = "throttling"
    TEMPLATE = "template"
    MEDIA = "media"
    PHONE_REGISTRATION = "phone_registration"
    INTEGRITY = "integrity"
    BUSINESS_ELIGIBILITY = "business_eligibility"
    REENGAGEMENT_WINDOW = "reengagement_window"
    WABA_CONFIG = "waba_config"
    FLOW = "flow"
    SYNCHRONIZATION = "synchronization"
    SERVER = "server"
    UNKNOWN = "unknown"


class RetryAction(StrEnum):
    """O que o chamador deve fazer com a requisição que falhou."""

    RETRY = "retry"
    RETRY_AFTER = "retry_after"
    DO_NOT_RETRY = "do_not_retry"
    REFRESH_TOKEN = "refresh_token"
    FIX_AND_RETRY = "fix_and_retry"


@dataclass(frozen=True)
class RetryHint:
    """Recomendação de retry anexada a um erro classificado."""

    action: RetryAction
    retry_after_ms: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"action": self.action.value}
        if self.retry_after_ms is not None:
            data["retry_after_ms"] = self.retry_after_ms
        return data


# Erros que nunca devem ser reenviados sem ação humana
DO_NOT_RETRY_CODES = frozenset({131049, 131050, 131047, 368, 130497, 131031})

# Credencial inválida ou expirada
REFRESH_TOKEN_CODES = frozenset({0, 190})

# Códigos transitórios da Graph API (API unknown/service, user rate, rate limit)
TRANSIENT_CODES = frozenset({1, 2, 17, 341})

_STATUS_CATEGORIES: dict[int, ErrorCategory] = {
    401: ErrorCategory.AUTHORIZATION,
    403: ErrorCategory.PERMISSION,
    404: ErrorCategory.PARAMETER,
    429: ErrorCategory.THROTTLING,
}

CodeMatcher = Callable[[int], bool]


def _codes(*codes: int) -> CodeMatcher:
    members = frozenset(codes)
    return lambda code: code in members


def _code_range(low: int, high: int) -> CodeMatcher:
    return lambda code: low <= code <= high


# Avaliadas em ordem; a primeira regra que casa define a categoria
ERROR_CODE_RULES: tuple[tuple[CodeMatcher, ErrorCategory], ...] = (
    (_codes(0, 190), ErrorCategory.AUTHORIZATION),
    (_codes(3, 10), ErrorCategory.PERMISSION),
    (_code_range(200, 219), ErrorCategory.PERMISSION),
    (_codes(4, 80007, 130429, 131048, 131056), ErrorCategory.THROTTLING),
    (
        _codes(33, 100, 130472, 131008, 131009, 131021, 131026, 135000),
        ErrorCategory.PARAMETER,
    ),
    (_codes(131051, 131052, 131053), ErrorCategory.MEDIA),
    (_codes(131000, 131016, 131057, 133004, 133005), ErrorCategory.SERVER),
    (_codes(368, 130497, 131031), ErrorCategory.INTEGRITY),
    (_codes(131047), ErrorCategory.REENGAGEMENT_WINDOW),
    (_codes(131037), ErrorCategory.WABA_CONFIG),
    (_codes(131042, 134011), ErrorCategory.BUSINESS_ELIGIBILITY),
    (
        _codes(131045, 133000, 133006, 133008, 133009, 133010, 133015, 133016),
        ErrorCategory.PHONE_REGISTRATION,
    ),
    (
        _codes(132000, 132001, 132005, 132007, 132012, 132015, 132016),
        ErrorCategory.TEMPLATE,
    ),
    (_codes(132068, 132069), ErrorCategory.FLOW),
    (_codes(2593107, 2593108), ErrorCategory.SYNCHRONIZATION),
    (_code_range(200, 299), ErrorCategory.PERMISSION),
)


def classify(code: int | None, http_status: int) -> ErrorCategory:
    """Mapeia código de erro + status HTTP para uma categoria.

    Status específicos (401/403/404/429) e 5xx têm precedência sobre o código;
    depois vale a tabela de códigos; 4xx sem código conhecido vira parameter.
    """
    status_category = _STATUS_CATEGORIES.get(http_status)
    if status_category is not None:
        return status_category

    if http_status >= 500:
        return ErrorCategory.SERVER

    if code is not None:
        for matches, category in ERROR_CODE_RULES:
            if matches(code):
                return category

    if 400 <= http_status < 500:
        return ErrorCategory.PARAMETER

    return ErrorCategory.UNKNOWN


def derive_retry_hint(
    code: int | None,
    http_status: int,
    retry_after_ms: int | None = None,
) -> RetryHint:
    """Deriva a ação de retry (retry_after > do_not_retry > refresh > 5xx > fix)."""
    if retry_after_ms is not None:
        return RetryHint(RetryAction.RETRY_AFTER, retry_after_ms)
    if code in DO_NOT_RETRY_CODES:
        return RetryHint(RetryAction.DO_NOT_RETRY)
    if code in REFRESH_TOKEN_CODES:
        return RetryHint(RetryAction.REFRESH_TOKEN)
    if http_status >= 500:
        return RetryHint(RetryAction.RETRY)
    return RetryHint(RetryAction.FIX_AND_RETRY)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def parse_retry_after(
    header: str | int | None,
    now: Callable[[], datetime] | None = None,
) -> int | None:
    """Converte Retry-After (segundos ou data HTTP) em milissegundos.

    Datas no passado resultam em 0; valores ilegíveis em None.
    """
    if header is None:
        return None

    value = str(header).strip()
    if not value:
        return None
    if value.isdigit():
        return int(value) * 1000

    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=UTC)

    delta_ms = int((retry_at - (now or _utcnow)()).total_seconds() * 1000)
    return max(delta_ms, 0)


def build_default_message(http_status: int, details: Any = None, raw_text: Any = None) -> str:
    if details:
        return f"Meta API request failed with status {http_status}: {details}"
    if isinstance(raw_text, str) and raw_text.strip():
        return f"Meta API request failed with status {http_status}: {raw_text}"
    return f"Meta API request failed with status {http_status}"


def _coerce_code(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)
    return None


def _header(headers: Mapping[str, str] | None, name: str) -> str | None:
    if not headers:
        return None
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def _decode_body(body: Any) -> tuple[dict[str, Any], str | None]:
    """Retorna (json_dict, texto_bruto) tolerando corpo vazio/inválido."""
    if isinstance(body, Mapping):
        return dict(body), None

    raw_text: str | None
    if isinstance(body, bytes | bytearray):
        raw_text = bytes(body).decode("utf-8", errors="replace")
    elif isinstance(body, str):
        raw_text = body
    else:
        return {}, None

    if not raw_text.strip():
        return {}, raw_text
    try:
        parsed = json.loads(raw_text)
    except ValueError:
        return {}, raw_text
    return (parsed if isinstance(parsed, dict) else {}), raw_text


class WhatsAppApiError(KapsoClientError):
    """Erro retornado pela API Meta/WhatsApp, classificado e com retry hint."""

    def __init__(
        self,
        message: str | None = None,
        *,
        http_status: int,
        code: int | None = None,
        error_type: str | None = None,
        details: Any = None,
        error_subcode: int | None = None,
        fbtrace_id: str | None = None,
        error_data: Any = None,
        category: ErrorCategory | None = None,
        retry_hint: RetryHint | None = None,
        retry_after_ms: int | None = None,
        raw_response: Any = None,
    ) -> None:
        self.http_status = http_status
        # Sem código explícito, o status HTTP faz as vezes de código
        self.code = code if code is not None else (http_status or None)
        self.error_type = error_type or "GraphApiError"
        self.details = details
        self.error_subcode = error_subcode
        self.fbtrace_id = fbtrace_id
        self.error_data = error_data
        self.retry_after_ms = retry_after_ms
        self.raw_response = raw_response
        self.category = category or classify(self.code, http_status)
        self.retry_hint = retry_hint or derive_retry_hint(self.code, http_status, retry_after_ms)
        self.message = message or build_default_message(http_status, details, raw_response)
        super().__init__(self.message)
        self._frozen = True

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False) and not name.startswith("__"):
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(name, value)

    @classmethod
    def from_response(
        cls,
        http_status: int,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
        *,
        now: Callable[[], datetime] | None = None,
    ) -> WhatsAppApiError:
        """Constrói o erro a partir de uma resposta HTTP não-2xx.

        Envelopes suportados:
        - direto: {"error": {"message", "code", "type", "error_subcode", ...}}
        - proxy: {"error": "<mensagem>"}
        Qualquer outro corpo vira falha HTTP genérica com o texto bruto.
        """
        retry_after_ms = parse_retry_after(_header(headers, "retry-after"), now)
        payload, raw_text = _decode_body(body)
        error_obj = payload.get("error")

        if isinstance(error_obj, Mapping):
            code = _coerce_code(error_obj.get("code"))
            if code is None:
                code = http_status
            error_data = error_obj.get("error_data")
            details = error_data.get("details") if isinstance(error_data, Mapping) else None
            return cls(
                error_obj.get("message"),
                http_status=http_status,
                code=code,
                error_type=error_obj.get("type"),
                details=details,
                error_subcode=_coerce_code(error_obj.get("error_subcode")),
                fbtrace_id=error_obj.get("fbtrace_id"),
                error_data=error_data,
                retry_hint=derive_retry_hint(code, http_status, retry_after_ms),
                retry_after_ms=retry_after_ms,
                raw_response=payload,
            )

        category = ErrorCategory.SERVER if http_status >= 500 else classify(None, http_status)
        retry_hint = derive_retry_hint(http_status, http_status, retry_after_ms)

        if isinstance(error_obj, str):
            return cls(
                error_obj,
                http_status=http_status,
                code=http_status,
                category=category,
                retry_hint=retry_hint,
                retry_after_ms=retry_after_ms,
                raw_response=payload,
            )

        return cls(
            build_default_message(http_status, None, raw_text),
            http_status=http_status,
            code=http_status,
            category=category,
            retry_hint=retry_hint,
            retry_after_ms=retry_after_ms,
            raw_response=raw_text if raw_text is not None else payload,
        )

    @classmethod
    def from_transport_error(cls, exc: BaseException) -> WhatsAppApiError:
        """Falha de rede após esgotar as tentativas do transporte."""
        return cls(
            f"Network error: {exc}",
            http_status=0,
            category=ErrorCategory.SERVER,
            retry_hint=RetryHint(RetryAction.RETRY),
        )

    @property
    def trace_id(self) -> str | None:
        return self.fbtrace_id

    @property
    def is_auth_error(self) -> bool:
        return self.category is ErrorCategory.AUTHORIZATION

    @property
    def is_rate_limit(self) -> bool:
        return self.category is ErrorCategory.THROTTLING

    @property
    def is_temporary(self) -> bool:
        return (
            self.category
            in (ErrorCategory.THROTTLING, ErrorCategory.SERVER, ErrorCategory.SYNCHRONIZATION)
            or self.http_status >= 500
            or self.code in TRANSIENT_CODES
        )

    @property
    def is_template_error(self) -> bool:
        return self.category is ErrorCategory.TEMPLATE

    @property
    def requires_token_refresh(self) -> bool:
        return self.category is ErrorCategory.AUTHORIZATION or self.code in REFRESH_TOKEN_CODES

    @property
    def is_retryable(self) -> bool:
        return self.retry_hint.action is not RetryAction.DO_NOT_RETRY

    def to_dict(self) -> dict[str, Any]:
        """Representação estruturada (segura para logs, sem corpo bruto)."""
        return {
            "name": type(self).__name__,
            "message": self.message,
            "http_status": self.http_status,
            "code": self.code,
            "type": self.error_type,
            "details": self.details,
            "error_subcode": self.error_subcode,
            "fbtrace_id": self.fbtrace_id,
            "category": self.category.value,
            "retry_hint": self.retry_hint.to_dict(),
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(http_status={self.http_status}, code={self.code}, "
            f"category={self.category.value!r}, message={self.message!r})"
        )
