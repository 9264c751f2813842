import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import Settings

IMAGE_DATA = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="


def chat_reply(content, status_code: int = 200) -> httpx.Response:
    """A chat-completions response carrying one assistant message."""
    return httpx.Response(
        status_code,
        json={"choices": [{"message": {"role": "assistant", "content": content}}]},
    )


class FakeModelAPI:
    """MockTransport handler that replays queued responses and records requests."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def payloads(self):
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def settings():
    return Settings(
        api_key="test-key",
        api_url="https://models.test/v1/chat/completions",
        identify_models=["primary/vision", "fallback/vision"],
        diagnose_models=["primary/vision", "fallback/vision"],
    )


@pytest.fixture
def make_client(settings):
    def _make(fake: FakeModelAPI, app_settings: Settings = None) -> TestClient:
        http_client = httpx.Client(transport=httpx.MockTransport(fake))
        return TestClient(create_app(app_settings or settings, http_client))
    return _make
