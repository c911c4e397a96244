"""Utility functions for the marketplace proxy."""
import json
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from .config import PAYLOAD_SNIPPET_CHARS
from .models import ListingQuery


def cache_key(query: ListingQuery) -> str:
    """Deterministic signature covering every recognised query parameter."""
    return json.dumps(asdict(query), sort_keys=True, separators=(",", ":"))


def format_number(value: Optional[float]) -> Optional[str]:
    """Render a price bound the way the marketplace expects (100.0 -> "100")."""
    if value is None:
        return None
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def extract_items(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Pull the listing records out of an upstream page.

    A missing or malformed "items" field is an empty page, not an error.
    """
    items = payload.get("items")
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def snippet(body: str, limit: int = PAYLOAD_SNIPPET_CHARS) -> str:
    return body[:limit]
