"""Category tokens accepted by the proxy and their marketplace paths."""
from typing import List, Optional

from .errors import InvalidCategoryError

CATEGORIES = {
    "valorant": "/valorant",
    "lol": "/lol",
    "steam": "/steam",
    "coc": "/supercell",
    "minecraft": "/minecraft",
    "warface": "/warface",
    "ea": "/ea",
    "epic": "/epicgames",
    "battlenet": "/battlenet",
}

SUPPORTED_CATEGORIES: List[str] = sorted(CATEGORIES)


def resolve_category(token: Optional[str]) -> str:
    """Return the upstream path for a category token, ignoring case."""
    path = CATEGORIES.get((token or "").strip().lower())
    if path is None:
        raise InvalidCategoryError()
    return path
