"""Inactivity filter for account listings."""
from typing import Any, Dict, List

from .config import MS_PER_DAY


def last_activity_ms(item: Dict[str, Any]) -> float:
    """Last activity of an account in milliseconds.

    Upstream timestamps are seconds. Items carrying neither timestamp (or a
    value that is not a number) count as 0, i.e. maximally inactive. That is
    a fallback for missing data, not evidence that the account is idle.
    """
    raw = item.get("account_last_activity") or item.get("update_stat_date") or 0
    try:
        return float(raw) * 1000
    except (TypeError, ValueError):
        return 0.0


def filter_inactive(items: List[Dict[str, Any]], inactive_days: int, now_ms: float) -> List[Dict[str, Any]]:
    """Keep items whose last activity is strictly older than the cutoff."""
    cutoff = now_ms - inactive_days * MS_PER_DAY
    return [item for item in items if last_activity_ms(item) < cutoff]
