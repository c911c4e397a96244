from .cache import ResultCache
from .categories import SUPPORTED_CATEGORIES, resolve_category
from .client import AbstractMarketClient, LztClient
from .errors import (
    InvalidCategoryError,
    ProxyError,
    UpstreamPayloadError,
    UpstreamStatusError,
    UpstreamTransportError,
    ValidationError,
)
from .models import ListingQuery
from .service import MarketplaceService
from .translator import AbstractTranslator, MyMemoryTranslator


def create_service() -> MarketplaceService:
    """Service wired to the real LZT and MyMemory APIs from configuration."""
    from .config import settings

    return MarketplaceService(
        client=LztClient(),
        translator=MyMemoryTranslator(),
        cache=ResultCache(max_entries=settings.cache_max_entries),
    )


__all__ = [
    "AbstractMarketClient",
    "AbstractTranslator",
    "InvalidCategoryError",
    "ListingQuery",
    "LztClient",
    "MarketplaceService",
    "MyMemoryTranslator",
    "ProxyError",
    "ResultCache",
    "SUPPORTED_CATEGORIES",
    "UpstreamPayloadError",
    "UpstreamStatusError",
    "UpstreamTransportError",
    "ValidationError",
    "create_service",
    "resolve_category",
]
