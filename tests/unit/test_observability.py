"""Unit tests for observability module."""

import json
import logging

import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from parish_search.observability import (
    SEARCH_REQUESTS,
    JsonFormatter,
    TraceContextMiddleware,
    configure_logging,
    create_span,
    get_metrics,
    get_metrics_content_type,
    get_trace_context,
    set_trace_context,
    track_latency,
)
from parish_search.observability.metrics import SEARCH_LATENCY


def _record(msg: str = "test message", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="parish_search.service_layer.search_service",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    """Tests for structured JSON logging."""

    def test_format_includes_trace_context(self):
        set_trace_context("a" * 32, "b" * 16)

        data = json.loads(JsonFormatter().format(_record()))

        assert data["message"] == "test message"
        assert data["trace_id"] == "a" * 32
        assert data["span_id"] == "b" * 16
        assert data["component"] == "search_service"
        assert data["level"] == "INFO"

    def test_secrets_are_redacted(self):
        data = json.loads(JsonFormatter().format(_record(api_key="secret-key", index="parish_search")))

        assert data["api_key"] == "[REDACTED]"
        assert data["index"] == "parish_search"

    def test_long_messages_are_truncated(self):
        data = json.loads(JsonFormatter().format(_record("x" * 3000)))

        assert len(data["message"]) == JsonFormatter.MAX_MESSAGE_LEN + 3


class TestConfigureLogging:
    def test_installs_json_handler_and_quiets_httpx(self):
        configure_logging("debug", json_output=True, logger_levels={"parish_search": "warning"})

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("parish_search").level == logging.WARNING

        logging.getLogger("parish_search").setLevel(logging.NOTSET)

    def test_plain_text_output(self):
        configure_logging("info", json_output=False)

        assert not isinstance(logging.getLogger().handlers[0].formatter, JsonFormatter)


class TestTracing:
    def test_create_span_reraises_errors(self):
        with pytest.raises(RuntimeError, match="boom"), create_span("test.span", attributes={"k": "v"}):
            raise RuntimeError("boom")

    def test_middleware_uses_incoming_trace_header(self):
        async def echo(_: Request) -> JSONResponse:
            return JSONResponse(get_trace_context())

        app = Starlette(routes=[Route("/echo", echo)])
        client = TestClient(TraceContextMiddleware(app))

        response = client.get("/echo", headers={"x-trace-id": "c" * 32})

        assert response.json()["trace_id"] == "c" * 32
        assert len(response.json()["span_id"]) == 16


class TestMetrics:
    def test_counter_and_latency_are_exported(self):
        SEARCH_REQUESTS.labels(status="ok").inc()
        with track_latency(SEARCH_LATENCY, mode="keyword"):
            pass

        output = get_metrics().decode("utf-8")

        assert 'parish_search_requests_total{status="ok"}' in output
        assert 'parish_search_latency_seconds_count{mode="keyword"}' in output
        assert get_metrics_content_type().startswith("text/plain")
