"""Testes para kapso_client.config.logging e helpers de log da API.

Cobre: configure_logging, get_logger, CorrelationIdFilter,
create_json_formatter, correlation_scope e redação de headers.
"""

from __future__ import annotations

import json
import logging

import pytest

from kapso_client.api.connectors.whatsapp.meta_logging import (
    BODY_PREVIEW_LIMIT,
    body_preview,
    redact_headers,
)
from kapso_client.app.observability import (
    correlation_scope,
    get_correlation_id,
)
from kapso_client.config.logging import (
    DEFAULT_SERVICE_NAME,
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
)
from kapso_client.config.logging.config import VALID_LOG_LEVELS


def _record(msg: str = "msg", name: str = "test") -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_configure_logging_default_level(self) -> None:
        """Configura logging com nível padrão INFO."""
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_configure_logging_case_insensitive(self) -> None:
        configure_logging(level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_configure_logging_invalid_level_raises(self) -> None:
        """Nível inválido levanta ValueError."""
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="INVALID")

    def test_configure_logging_replaces_handlers(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1

    def test_configure_named_logger(self) -> None:
        """logger_name configura só o logger da biblioteca."""
        logger = configure_logging(level="DEBUG", logger_name="kapso_client")

        assert logger.name == "kapso_client"
        assert logger.level == logging.DEBUG
        assert any(
            isinstance(f, CorrelationIdFilter) for f in logger.handlers[0].filters
        )

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "kapso_client"


class TestGetLogger:
    def test_same_name_returns_same_instance(self) -> None:
        assert get_logger("same.module") is get_logger("same.module")


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_filter_adds_correlation_id_from_getter(self) -> None:
        filter_ = CorrelationIdFilter("my_service", lambda: "corr-123")
        record = _record()

        assert filter_.filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "my_service"

    def test_filter_preserves_explicit_correlation_id(self) -> None:
        """Filter preserva correlation_id passado via extra."""
        filter_ = CorrelationIdFilter("svc", lambda: "from-getter")
        record = _record()
        record.correlation_id = "explicit-id"

        filter_.filter(record)

        assert record.correlation_id == "explicit-id"

    def test_filter_uses_empty_string_when_no_getter(self) -> None:
        filter_ = CorrelationIdFilter("service_name", None)
        record = _record()
        filter_.filter(record)
        assert record.correlation_id == ""


class TestCorrelationScope:
    def test_scope_sets_and_restores(self) -> None:
        before = get_correlation_id()
        with correlation_scope("pedido-1") as correlation_id:
            assert correlation_id == "pedido-1"
            assert get_correlation_id() == "pedido-1"
        assert get_correlation_id() == before

    def test_scope_generates_uuid(self) -> None:
        with correlation_scope() as correlation_id:
            assert len(correlation_id) == 36


class TestJsonFormatter:
    def test_field_constants(self) -> None:
        assert set(REQUIRED_LOG_FIELDS) == {
            "asctime",
            "levelname",
            "name",
            "message",
            "correlation_id",
            "service",
        }
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_formats_record_as_json_with_renamed_fields(self) -> None:
        formatter = create_json_formatter()
        record = _record("whatsapp_api_success", name="kapso_client.client")
        record.correlation_id = "abc-123"
        record.service = "kapso_client"
        record.status_code = 200

        data = json.loads(formatter.format(record))

        assert data["message"] == "whatsapp_api_success"
        assert data["logger"] == "kapso_client.client"
        assert data["level"] == "INFO"
        assert data["correlation_id"] == "abc-123"
        assert data["status_code"] == 200


class TestApiLogHelpers:
    def test_redact_headers(self) -> None:
        headers = {"Authorization": "Bearer secret", "X-API-Key": "k", "Accept": "json"}

        assert redact_headers(headers) == {
            "Authorization": "[REDACTED]",
            "X-API-Key": "[REDACTED]",
            "Accept": "json",
        }

    def test_body_preview_truncates(self) -> None:
        preview = body_preview("a" * (BODY_PREVIEW_LIMIT + 10))

        assert preview is not None
        assert preview.endswith("...")
        assert len(preview) == BODY_PREVIEW_LIMIT + 3
        assert body_preview(None) is None
        assert body_preview(b"ok") == "ok"
