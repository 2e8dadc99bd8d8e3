"""Shared fixtures: stub HTTP responses, stub loggers and config builders."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from types import MethodType
from typing import Any, Callable, Dict, List, Optional

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from ethicalcrawler.config_schema import DEFAULT_CONFIG, Config


class DummyResponse:
    """Subset of ``requests.Response`` used by the collectors."""

    def __init__(
        self,
        status_code: int = 200,
        body: Any = "",
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, bytes):
            self.content = body
            self.text = body.decode("utf-8", errors="replace")
        else:
            self.text = body
            self.content = body.encode("utf-8")
        self.status_code = status_code
        self.headers = headers or {}


class StubModuleLogger:
    """Captures structured log payloads for assertions."""

    def __init__(self, records: Optional[List[tuple[str, Dict[str, Any]]]] = None) -> None:
        self.records: List[tuple[str, Dict[str, Any]]] = records if records is not None else []

    def _record(self, level: str, payload: Dict[str, Any]) -> None:
        self.records.append((level, payload))

    def info(self, payload: Dict[str, Any]) -> None:
        self._record("info", payload)

    def warning(self, payload: Dict[str, Any]) -> None:
        self._record("warning", payload)

    def error(self, payload: Dict[str, Any]) -> None:
        self._record("error", payload)

    def debug(self, payload: Dict[str, Any]) -> None:
        self._record("debug", payload)

    def events(self) -> List[str]:
        return [payload["event"] for _level, payload in self.records]


class StubLoggerFactory:
    """Hands out module loggers that share one record list."""

    def __init__(self) -> None:
        self.records: List[tuple[str, Dict[str, Any]]] = []
        self.modules: List[str] = []

    def create_module_logger(self, module_name: str) -> StubModuleLogger:
        self.modules.append(module_name)
        return StubModuleLogger(self.records)

    def events(self) -> List[str]:
        return [payload["event"] for _level, payload in self.records]


@pytest.fixture
def logger_factory() -> StubLoggerFactory:
    return StubLoggerFactory()


@pytest.fixture
def make_config() -> Callable[..., Config]:
    """Build a Config from defaults plus per-section overrides.

    Credentials are filled with test values unless overridden.
    """

    def _make(**sections: Dict[str, Any]) -> Config:
        data = DEFAULT_CONFIG.model_dump(mode="python")
        data["newsapi"]["api_key"] = "newsapi-test-key"
        data["guardian"]["api_key"] = "guardian-test-key"
        data["x"]["bearer_token"] = "x-test-token"
        for section, values in sections.items():
            data[section].update(values)
        return Config.model_validate(data)

    return _make


@pytest.fixture
def response() -> Callable[..., DummyResponse]:
    return DummyResponse


@pytest.fixture
def install_responses() -> Callable[..., List[Dict[str, Any]]]:
    """Replace ``collector.session.get`` with a scripted sequence.

    Each item is a DummyResponse or an exception to raise. Returns the list
    where every call's arguments are recorded.
    """

    def _install(collector: Any, *responses: Any) -> List[Dict[str, Any]]:
        calls: List[Dict[str, Any]] = []
        queue = list(responses)

        def fake_get(self, url, params=None, headers=None, timeout=None):
            calls.append(
                {"url": url, "params": params, "headers": headers, "timeout": timeout}
            )
            item = queue.pop(0)
            if isinstance(item, BaseException):
                raise item
            return item

        collector.session.get = MethodType(fake_get, collector.session)
        return calls

    return _install
