"""Shared pytest configuration and fixtures.

Sets a test Gemini key and disables the stock-photo tier before any project
module is imported, and provides fake aiohttp sessions for client tests.
"""

import os
from typing import Any

import pytest


def pytest_configure(config):
    """Configure environment before test collection imports src.utils.config."""
    os.environ["GOOGLE_API_KEY"] = "test-google-key"
    os.environ["PEXELS_API_KEY"] = ""
    os.environ.setdefault("LOG_LEVEL", "WARNING")


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse used as an async context manager."""

    def __init__(self, status: int = 200, json_body: Any = None, text: str = "") -> None:
        self.status = status
        self._json_body = json_body
        self._text = text

    async def json(self, content_type=None) -> Any:
        if isinstance(self._json_body, Exception):
            raise self._json_body
        return self._json_body

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info) -> bool:
        return False


class FakeSession:
    """Records get/post calls and replays canned responses (or raises an error)."""

    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None) -> None:
        self.response = response or FakeResponse()
        self.error = error
        self.calls: list[tuple[str, str, dict]] = []

    def _request(self, method: str, url: str, **kwargs) -> FakeResponse:
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def post(self, url: str, **kwargs) -> FakeResponse:
        return self._request("POST", url, **kwargs)

    def get(self, url: str, **kwargs) -> FakeResponse:
        return self._request("GET", url, **kwargs)


@pytest.fixture
def fake_response():
    """Factory for FakeResponse objects."""
    return FakeResponse


@pytest.fixture
def fake_session():
    """Factory for FakeSession objects."""
    return FakeSession


def gemini_payload(text: str) -> dict:
    """Wrap model text in a generateContent response body."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def gemini_body():
    return gemini_payload
