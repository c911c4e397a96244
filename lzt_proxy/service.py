"""Marketplace request handling.

MarketplaceService runs one request end to end:
validate → cache lookup → fetch → (inactivity filter) → translate → store.
The single-item path skips the cache and the filter."""

import time
from typing import Any, Callable, Dict, Optional

from .cache import ResultCache
from .categories import resolve_category
from .client import AbstractMarketClient
from .errors import ValidationError
from .filters import filter_inactive
from .logger import setup_logger
from .models import ListingQuery
from .translator import AbstractTranslator, translate_fields
from .utils import cache_key, extract_items

log = setup_logger("lzt_proxy.service")


class MarketplaceService:
    """Fetch, filter, translate and cache LZT marketplace listings."""

    def __init__(
        self,
        client: AbstractMarketClient,
        translator: AbstractTranslator,
        cache: Optional[ResultCache] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.client = client
        self.translator = translator
        self.cache = cache if cache is not None else ResultCache()
        self._clock = clock

    async def aclose(self) -> None:
        """Close the pooled connections of both adapters."""
        await self.client.aclose()
        await self.translator.aclose()

    async def list_listings(self, query: ListingQuery) -> Dict[str, Any]:
        """Return one translated listing page, served from cache when fresh."""
        path = resolve_category(query.category)

        key = cache_key(query)
        cached = self.cache.get(key)
        if cached is not None:
            log.info({"msg": "listings_cache_hit", "category": query.category, "page": query.page})
            return cached

        payload = await self.client.fetch_listings(path, query)
        items = extract_items(payload)
        fetched = len(items)

        if query.inactive_days is not None:
            items = filter_inactive(items, query.inactive_days, self._clock() * 1000)

        # Title always comes back (empty when upstream has none); description only where present.
        items = await translate_fields(
            self.translator, items, ("title", "description"), fill_missing=("title",)
        )

        data = {
            "category": query.category,
            "page": query.page,
            "count": len(items),
            "items": items,
            "links": payload.get("links"),  # forwarded pagination links
            "meta": payload.get("meta"),  # forwarded pagination metadata
        }
        self.cache.put(key, data)
        log.info({
            "msg": "listings_fetched",
            "category": query.category,
            "page": query.page,
            "fetched": fetched,
            "returned": len(items),
        })
        return data

    async def get_item(self, item_id: Optional[str]) -> Dict[str, Any]:
        """Return a single listing with translated title and description."""
        item_id = (item_id or "").strip()
        if not item_id:
            raise ValidationError("Missing id")

        record = await self.client.fetch_item(item_id)
        translated = await translate_fields(
            self.translator, [record], ("title", "description"), fill_missing=("title", "description")
        )
        return translated[0]
