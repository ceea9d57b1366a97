"""Shared fixtures: fake chat clients and recording HTTP transports"""
import json
from typing import Callable, List

import httpx
import pytest

from mtengines.clients import ChatClient, Message


class FakeChatClient(ChatClient):
    """Chat client returning canned answers and recording every call"""

    def __init__(self, responses: List[str] = None, models=None):
        self.responses = list(responses or [])
        self.models = models or []
        self.calls = []

    async def complete(self, model: str, messages: List[Message]) -> str:
        self.calls.append({"model": model, "messages": messages})
        return self.responses.pop(0)

    async def list_models(self):
        return list(self.models)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps the requests it served"""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def fake_client():
    return FakeChatClient


@pytest.fixture
def json_transport():
    """Build a transport answering every request with the same JSON body"""
    def build(body, status_code: int = 200) -> RecordingTransport:
        return RecordingTransport(lambda request: httpx.Response(status_code, json=body))
    return build
