import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

LZT_BASE = "https://api.lzt.market"
LZT_TIMEOUT = 15.0 # Seconds to wait for the marketplace API

CACHE_TTL_SECONDS = 120.0 # Lifetime of an assembled listing page

DEFAULT_CATEGORY = "steam"
DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 21 # Multiple of 3 for the grid layout

TRANSLATE_URL = "https://api.mymemory.translated.net/get"
TRANSLATE_LANGPAIR = "ru|en"
TRANSLATE_TIMEOUT = 5.0 # Per call; an expired call falls back to the original text

PAYLOAD_SNIPPET_CHARS = 200 # How much of a bad upstream body ends up in the log
MS_PER_DAY = 86_400_000


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


@dataclass(frozen=True)
class Settings:
    lzt_token: str = field(default_factory=lambda: os.getenv("LZT_TOKEN", ""))
    lzt_base_url: str = field(default_factory=lambda: os.getenv("LZT_BASE_URL", LZT_BASE))
    lzt_timeout: float = field(default_factory=lambda: float(os.getenv("LZT_TIMEOUT", str(LZT_TIMEOUT))))
    cache_max_entries: Optional[int] = field(default_factory=lambda: _optional_int("CACHE_MAX_ENTRIES"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    service_name: str = field(default_factory=lambda: os.getenv("SERVICE_NAME", "lzt-proxy"))
    deploy_env: str = field(default_factory=lambda: os.getenv("DEPLOY_ENV", "dev"))


settings = Settings()
