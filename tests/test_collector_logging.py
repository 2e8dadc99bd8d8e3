"""Tests for structured logging in collectors."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

import pytest
import requests

from src.collectors import (
    GdeltCollector,
    HTTPStatusError,
    NewsAPICollector,
    PayloadDecodeError,
    TransportError,
)
from src.collectors.base_collector import BaseCollector

FIXED_NOW = datetime(2024, 5, 31, 12, 0, 0, tzinfo=timezone.utc)


class StubModuleLogger:
    """Captures structured log payloads for assertions."""

    def __init__(self) -> None:
        self.records: list[tuple[str, Dict[str, Any]]] = []

    def info(self, payload: Dict[str, Any]) -> None:
        self.records.append(("info", payload))

    def warning(self, payload: Dict[str, Any]) -> None:
        self.records.append(("warning", payload))

    def error(self, payload: Dict[str, Any]) -> None:
        self.records.append(("error", payload))

    def debug(self, payload: Dict[str, Any]) -> None:
        self.records.append(("debug", payload))


class EchoCollector(BaseCollector):
    """Minimal collector that only fetches a URL."""

    source_id = "echo"

    def collect(self, url: str) -> str:
        return self._fetch(url).text


def _events(stub_logger: StubModuleLogger) -> Dict[str, Dict[str, Any]]:
    return {payload["event"]: payload for _level, payload in stub_logger.records}


def test_successful_query_logs_correlated_events(
    make_config, logger_factory, install_responses, response
) -> None:
    """Every event of a run carries the session and collector identifiers."""

    collector = GdeltCollector(make_config(), logger_factory, session_id="session-42")
    install_responses(collector, response(200, {"articles": [{"domain": "a.example"}]}))

    collector.collect()

    assert logger_factory.modules == ["collectors.gdeltcollector"]
    assert logger_factory.events() == [
        "collector.instance.initialized",
        "collector.fetch.start",
        "collector.fetch.completed",
        "collector.collect.completed",
    ]
    for _level, payload in logger_factory.records:
        assert payload["session_id"] == "session-42"
        assert payload["collector_type"] == "GdeltCollector"
        assert payload["source_id"] == "gdelt"

    completed = logger_factory.records[-1][1]
    assert completed["details"] == {"records": 1}
    assert completed["latency"] >= 0
    assert collector.get_stats()["requests_made"] == 1
    assert collector.get_stats()["records_found"] == 1


def test_http_error_is_logged_with_status_code(
    make_config, install_responses, response
) -> None:
    collector = EchoCollector(make_config())
    stub_logger = StubModuleLogger()
    collector.module_logger = stub_logger
    install_responses(collector, response(503, "Service Unavailable"))

    with pytest.raises(HTTPStatusError):
        collector.collect("https://echo.example/")

    events = _events(stub_logger)
    assert events["collector.fetch.http_error"]["details"] == {
        "status_code": 503,
        "url": "https://echo.example/",
    }
    assert "collector.fetch.completed" not in events
    assert collector.get_stats()["errors"] == 1


def test_network_error_is_logged(make_config, install_responses) -> None:
    collector = EchoCollector(make_config())
    stub_logger = StubModuleLogger()
    collector.module_logger = stub_logger
    install_responses(collector, requests.Timeout("read timed out"))

    with pytest.raises(TransportError):
        collector.collect("https://echo.example/")

    levels = {payload["event"]: level for level, payload in stub_logger.records}
    assert levels["collector.fetch.network_error"] == "error"
    assert "read timed out" in _events(stub_logger)["collector.fetch.network_error"][
        "details"
    ]["error"]


def test_decode_failure_names_the_contract(
    make_config, logger_factory, install_responses, response
) -> None:
    collector = NewsAPICollector(make_config(), logger_factory, clock=lambda: FIXED_NOW)
    install_responses(collector, response(200, '{"status": "ok", "articles": "nope"}'))

    with pytest.raises(PayloadDecodeError) as excinfo:
        collector.collect()

    decode_failed = next(
        payload
        for _level, payload in logger_factory.records
        if payload["event"] == "collector.payload.decode_failed"
    )
    assert decode_failed["details"]["model"] == "NewsAPIResponse"
    assert "articles" in decode_failed["details"]["error"]
    assert "articles" in str(excinfo.value)


def test_set_logger_factory_rebinds_module_logger(make_config, logger_factory) -> None:
    collector = EchoCollector(make_config())

    collector.set_logger_factory(logger_factory)

    assert logger_factory.modules == ["collectors.echocollector"]
    collector._emit_log("info", "collector.custom")
    assert logger_factory.events() == ["collector.custom"]
