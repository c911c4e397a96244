"""
Pytest configuration and shared fixtures for the LZT proxy tests.

Upstream and translation traffic never leaves the process: the fakes
below implement the same interfaces as the real adapters and record
every call they receive.
"""

from __future__ import annotations

import asyncio
import os
from typing import Any

import pytest

# Set environment variables BEFORE any imports of the package
os.environ.setdefault("LZT_TOKEN", "test_token_for_ci_only")  # pragma: allowlist secret
os.environ.setdefault("LOG_LEVEL", "WARNING")

from lzt_proxy import AbstractMarketClient, AbstractTranslator, MarketplaceService, ResultCache  # noqa: E402
from lzt_proxy.models import ListingQuery  # noqa: E402


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeMarketClient(AbstractMarketClient):
    def __init__(self, page: dict[str, Any] | None = None, item: dict[str, Any] | None = None) -> None:
        self.page = page if page is not None else {"items": [], "links": None, "meta": None}
        self.item = item if item is not None else {}
        self.listing_calls: list[tuple[str, ListingQuery]] = []
        self.item_calls: list[str] = []
        self.error: Exception | None = None

    async def fetch_listings(self, path: str, query: ListingQuery) -> dict[str, Any]:
        self.listing_calls.append((path, query))
        if self.error is not None:
            raise self.error
        return self.page

    async def fetch_item(self, item_id: str) -> dict[str, Any]:
        self.item_calls.append(item_id)
        if self.error is not None:
            raise self.error
        return self.item


class FakeTranslator(AbstractTranslator):
    """Prefixes text with "EN:"; optional per-text delays and failures."""

    def __init__(self, delays: dict[str, float] | None = None, failing: set[str] | None = None) -> None:
        self.delays = delays or {}
        self.failing = failing or set()
        self.calls: list[str] = []
        self.completed: list[str] = []

    async def _translate(self, text: str) -> str:
        self.calls.append(text)
        await asyncio.sleep(self.delays.get(text, 0))
        if text in self.failing:
            raise ConnectionError("translation service down")
        self.completed.append(text)
        return f"EN:{text}"


def make_listing(item_id: int, title: str, **extra: Any) -> dict[str, Any]:
    return {"item_id": item_id, "title": title, "price": 100 + item_id, **extra}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def market() -> FakeMarketClient:
    return FakeMarketClient(
        page={
            "items": [make_listing(1, "Аккаунт Steam"), make_listing(2, "Прайм аккаунт", description="Без банов")],
            "links": {"next": "/steam?page=2"},
            "meta": {"current_page": 1, "total": 2},
        },
        item=make_listing(7, "Аккаунт Valorant", description="Много скинов"),
    )


@pytest.fixture
def translator() -> FakeTranslator:
    return FakeTranslator()


@pytest.fixture
def service(market: FakeMarketClient, translator: FakeTranslator, clock: FakeClock) -> MarketplaceService:
    return MarketplaceService(market, translator, ResultCache(clock=clock), clock=clock)
