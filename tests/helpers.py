"""Fake collaborators and small helpers shared by the tests."""

import asyncio
import json
from typing import List, Optional

import httpx

from modelgate.config.store import ConfigStore


class StubValidator:
    """Validator that records calls and returns a fixed outcome."""

    def __init__(self, outcome):
        self.outcome = outcome
        self.calls: List[tuple] = []

    async def validate(self, base_url, model_id, api_key=None):
        self.calls.append((base_url, model_id, api_key))
        return self.outcome


class RecordingClient:
    """Chat client that succeeds and remembers what it was asked."""

    def __init__(self):
        self.calls = []

    async def complete(self, model, messages, **kwargs):
        self.calls.append({"model": model, "messages": messages, **kwargs})
        return {"choices": [{"message": {"content": "OK"}}]}


class SlowClient:
    """Chat client that never answers in time."""

    def __init__(self):
        self.calls = 0
        self.cancelled = False

    async def complete(self, model, messages, **kwargs):
        self.calls += 1
        try:
            await asyncio.sleep(30)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return {}


class RaisingClient:
    """Chat client that fails with the given exception."""

    def __init__(self, exc: BaseException):
        self.exc = exc
        self.calls = 0

    async def complete(self, model, messages, **kwargs):
        self.calls += 1
        raise self.exc


def write_config(store: ConfigStore, document: dict) -> None:
    store.path.parent.mkdir(parents=True, exist_ok=True)
    store.path.write_text(json.dumps(document), encoding="utf-8")


def mock_transport(status_code: int, body: Optional[dict] = None, seen=None):
    """httpx transport answering every request with one response."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=body or {})

    return httpx.MockTransport(handler)


def refusing_transport():
    """httpx transport whose connections are always refused."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError(
            "[Errno 111] Connection refused",
            request=request,
        )

    return httpx.MockTransport(handler)
