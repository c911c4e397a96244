# Data models for marketplace requests.
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import DEFAULT_CATEGORY, DEFAULT_PAGE, DEFAULT_PER_PAGE


@dataclass
class ListingQuery:
    """One listing-page request as the front end sends it.

    Every field takes part in the cache key, so two queries that could
    produce different pages never share a cached result.
    """

    category: str = DEFAULT_CATEGORY
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE
    title: Optional[str] = None  # search term
    pmin: Optional[float] = None
    pmax: Optional[float] = None
    order_by: Optional[str] = None  # upstream sort token, e.g. "price_to_up"
    inactive_days: Optional[int] = None  # keep only accounts idle at least this long

    def __post_init__(self) -> None:
        self.category = (self.category or "").strip().lower()


@dataclass
class CacheEntry:
    """Assembled response plus the moment it was stored."""
    timestamp: float
    payload: Dict[str, Any]
