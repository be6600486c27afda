"""Shared fixtures: a fake requests session and a test configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest
import requests

from engine_export.client import EngineAPIClient
from engine_export.config import ExportConfig
from engine_export.progress import ProgressReporter

ENGINE_URL = "https://host-test.api.example.com/api/as/v1/engines/parks"


def make_response(status: int, payload: Any) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    if isinstance(payload, bytes):
        response._content = payload
    else:
        response._content = json.dumps(payload).encode("utf-8")
    response.encoding = "utf-8"
    return response


class FakeSession:
    """
    Stands in for requests.Session.

    The handler receives (endpoint, parsed body) and returns either a
    (status, payload) tuple or an exception instance to raise.
    """

    def __init__(self, handler: Callable[[str, Any], Any]):
        self.handler = handler
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url, headers=None, data=None, timeout=None):
        body = json.loads(data) if data is not None else None
        endpoint = url[len(ENGINE_URL) + 1:] if url.startswith(ENGINE_URL) else url
        self.calls.append({
            "url": url,
            "endpoint": endpoint,
            "headers": dict(headers or {}),
            "body": body,
            "timeout": timeout,
        })
        outcome = self.handler(endpoint, body)
        if isinstance(outcome, Exception):
            raise outcome
        status, payload = outcome
        return make_response(status, payload)

    def close(self):
        self.closed = True

    def calls_to(self, endpoint: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["endpoint"] == endpoint]


def listing(pages: List[List[Any]]) -> Callable[[Any], Any]:
    """Responder for a paged listing endpoint serving the given pages."""

    def respond(body):
        meta = {"page": {"total_pages": len(pages), "size": 20}}
        if body is None:
            first = pages[0] if pages else []
            return 200, {"meta": meta, "results": first}
        current = body["page"]["current"]
        meta["page"]["current"] = current
        return 200, {"meta": meta, "results": pages[current - 1]}

    return respond


class FakeEngine:
    """Routes requests per endpoint to responder callables."""

    def __init__(self, **responders):
        self.responders = responders

    def __call__(self, endpoint, body):
        responder = self.responders.get(endpoint)
        if responder is None:
            return 404, {"errors": [f"unknown endpoint {endpoint}"]}
        return responder(body)


class RecordingProgress(ProgressReporter):
    def __init__(self):
        self.events: List[tuple] = []

    def start(self, label, total):
        self.events.append(("start", label, total))

    def advance(self, n=1):
        self.events.append(("advance", n))

    def finish(self):
        self.events.append(("finish",))


@pytest.fixture
def config(tmp_path: Path) -> ExportConfig:
    return ExportConfig(
        host_identifier="host-test",
        engine_name="parks",
        api_key="private-secretkey1234",
        output_dir=tmp_path,
    )


@pytest.fixture
def make_client(config):
    def factory(handler, cfg: Optional[ExportConfig] = None):
        session = FakeSession(handler)
        return EngineAPIClient(cfg or config, session=session), session

    return factory
