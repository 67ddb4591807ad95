from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Optional

import pytest

from gallery_relay.config import RelaySettings
from gallery_relay.errors import UpstreamFetchError
from gallery_relay.infrastructure.cache import ResponseCache
from gallery_relay.infrastructure.network import SearchResult


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSearchClient:
    def __init__(self, resources: Optional[List[Dict[str, Any]]] = None, total_count: int = 0) -> None:
        self.resources = resources or []
        self.total_count = total_count
        self.calls: List[tuple] = []
        self.error: Optional[str] = None

    def search(self, expression: str, max_results: int) -> SearchResult:
        self.calls.append((expression, max_results))
        if self.error is not None:
            raise UpstreamFetchError(self.error)
        return SearchResult(resources=self.resources[:max_results], total_count=self.total_count)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.headers = {}
        self.auth = None
        self.response = response
        self.exc = exc
        self.requests = []

    def post(self, url, json=None, timeout=None):
        self.requests.append({"url": url, "json": json, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.response


def make_resource(idx: int, *, tags=("wedding",), width=100, height=100, caption=None) -> Dict[str, Any]:
    resource: Dict[str, Any] = {
        "public_id": f"portfolio/img-{idx}",
        "secure_url": f"https://res.cloudinary.com/demo/image/upload/img-{idx}.jpg",
        "tags": list(tags),
        "width": width,
        "height": height,
    }
    if caption:
        resource["context"] = {"caption": caption}
    return resource


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ResponseCache:
    return ResponseCache(ttl=300.0, clock=clock)


@pytest.fixture
def search_client() -> FakeSearchClient:
    return FakeSearchClient(
        resources=[make_resource(idx) for idx in range(20)],
        total_count=20,
    )


@pytest.fixture
def settings() -> RelaySettings:
    return replace(
        RelaySettings.from_env(),
        cloudinary_cloud_name="demo",
        cloudinary_api_key="key",
        cloudinary_api_secret="secret",
        cloudinary_api_base="https://api.example.test/v1_1/",
        search_timeout=4.0,
        gmail_user="studio@example.com",
        gmail_app_password="app-password",
        smtp_host="smtp.example.com",
        smtp_port=465,
        smtp_timeout=5.0,
        booking_recipient="bookings@example.com",
        sender_name="Test Studio",
    )
