"""Pytest fixtures for integration tests.

These tests talk to a running service (python app.py) with a real GOOGLE_API_KEY
and are skipped when it cannot be reached.
"""

import os

import httpx
import pytest

API_BASE_URL = os.getenv("RECIPE_FINDER_URL", f"http://127.0.0.1:{os.getenv('PORT', '3000')}")
API_TIMEOUT = 60  # Seconds per request; covers the LLM call plus image lookups


@pytest.fixture(scope="module")
def http_client():
    """Yield an httpx.Client bound to the running service, skipping if it is down."""
    with httpx.Client(base_url=API_BASE_URL, timeout=API_TIMEOUT) as client:
        try:
            response = client.get("/api/health")
        except httpx.HTTPError:
            pytest.skip(f"Cannot connect to service at {API_BASE_URL}. Start with: python app.py")
        if response.status_code != 200:
            pytest.skip(f"Service not healthy. Status: {response.status_code}")
        yield client
