"""
tests/conftest.py

Shared pytest fixtures used by both unit and integration test suites.
All HTTP fixtures use respx.mock and all pipeline tests use the in-memory
FakeRecordStore. No real network calls are made in any test.
"""

from __future__ import annotations

import pytest
import respx
import httpx

from config import Settings
from providers.dns_provider import DnsRecord, ProviderResponse

TOKEN = "TOK"
API_TOKEN = "do-api-token"


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced monotonic clock for TokenBucket tests."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRecordStore:
    """
    In-memory RecordStore keyed by (zone, type, fqdn).

    Records every call in `calls` so tests can assert on the exact sequence
    the pipeline issued. find_status / update_status force non-200 replies;
    find_error / update_error are raised instead of answering.
    """

    def __init__(self) -> None:
        self.records: dict[tuple[str, str, str], DnsRecord] = {}
        self.calls: list[tuple] = []
        self.find_status = 200
        self.update_status = 200
        self.find_error: Exception | None = None
        self.update_error: Exception | None = None

    def add(self, zone: str, kind: str, name: str, record_id: int, data: str = "0.0.0.0") -> None:
        self.records[(zone, kind, name)] = DnsRecord(id=record_id, type=kind, name=name, data=data)

    def value_of(self, zone: str, kind: str, name: str) -> str:
        return self.records[(zone, kind, name)].data

    async def find_records(self, zone: str, kind: str, name: str) -> ProviderResponse:
        self.calls.append(("find_records", zone, kind, name))
        if self.find_error is not None:
            raise self.find_error
        if self.find_status != 200:
            return ProviderResponse(self.find_status, "Internal Server Error")
        record = self.records.get((zone, kind, name))
        return ProviderResponse(200, "OK", [record] if record else [])

    async def update_record(self, zone: str, record_id: int, data: str) -> ProviderResponse:
        self.calls.append(("update_record", zone, record_id, data))
        if self.update_error is not None:
            raise self.update_error
        if self.update_status != 200:
            return ProviderResponse(self.update_status, "Internal Server Error")
        for record in self.records.values():
            if record.id == record_id:
                record.data = data
        return ProviderResponse(200, "OK")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def fake_store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def settings() -> Settings:
    """Valid settings with a fixed security token."""
    return Settings(api_token=API_TOKEN, security_token=TOKEN)


@pytest.fixture()
def mock_http():
    """
    Yields a respx router that intercepts all httpx.AsyncClient calls.

    No real network traffic is allowed during tests. Use this fixture
    wherever a client would normally make an outbound request.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture()
async def http_client():
    """
    Yields a real httpx.AsyncClient instance for use in tests.

    Pair with the mock_http fixture so all requests are intercepted by respx.
    """
    async with httpx.AsyncClient() as client:
        yield client
