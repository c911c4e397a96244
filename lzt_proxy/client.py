"""LZT marketplace API client.

Provides:
- AbstractMarketClient: interface the request handler depends on
- LztClient: httpx adapter for api.lzt.market

Transport failures, error statuses and unparseable bodies each raise their
own error so the HTTP layer can tell them apart."""

import json
from typing import Any, Dict, Optional

import httpx

from .config import settings
from .errors import UpstreamPayloadError, UpstreamStatusError, UpstreamTransportError
from .logger import setup_logger
from .models import ListingQuery
from .utils import format_number, snippet

log = setup_logger("lzt_proxy.client")


class AbstractMarketClient:
    """Interface for marketplace clients."""
    async def fetch_listings(self, path: str, query: ListingQuery) -> Dict[str, Any]:
        #Return one raw listing page for a resolved category path
        raise NotImplementedError

    async def fetch_item(self, item_id: str) -> Dict[str, Any]:
        #Return the raw record of a single listing
        raise NotImplementedError

    async def aclose(self) -> None:
        #Release pooled connections, if any
        return None


def build_listing_params(query: ListingQuery) -> Dict[str, str]:
    """Upstream query string for a listing page."""
    params = {"page": str(query.page), "per_page": str(query.per_page)}
    if query.title:
        params["title"] = query.title
    if query.pmin is not None:
        params["pmin"] = format_number(query.pmin)
    if query.pmax is not None:
        params["pmax"] = format_number(query.pmax)
    if query.order_by:
        params["order_by"] = query.order_by
    return params


class LztClient(AbstractMarketClient):
    """Async adapter for the LZT marketplace API."""

    def __init__(
        self,
        token: str = settings.lzt_token,
        base_url: str = settings.lzt_base_url,
        timeout: float = settings.lzt_timeout,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not token:
            # Requests still go out; upstream answers 401 and that status is forwarded.
            log.warning({"msg": "lzt_token_missing"})
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # One pooled client per adapter, reused by every request.
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_listings(self, path: str, query: ListingQuery) -> Dict[str, Any]:
        return await self._get_json(path, build_listing_params(query))

    async def fetch_item(self, item_id: str) -> Dict[str, Any]:
        return await self._get_json(f"/{item_id}")

    async def _get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            resp = await self._send(url, params)
        except httpx.HTTPError as e:
            log.error({"msg": "lzt_transport_error", "url": url, "err": repr(e)})
            raise UpstreamTransportError(f"Failed to reach LZT API: {e.__class__.__name__}") from e

        if not resp.is_success:
            log.error({"msg": "lzt_bad_status", "url": url, "status": resp.status_code})
            raise UpstreamStatusError(resp.status_code, resp.reason_phrase)

        # Parse separately from the transport call so a bad body is its own error.
        text = resp.text
        try:
            payload = json.loads(text, parse_constant=_reject_constant)
        except ValueError:
            log.error({"msg": "lzt_invalid_json", "url": url, "body": snippet(text)})
            raise UpstreamPayloadError(snippet(text))
        if not isinstance(payload, dict):
            log.error({"msg": "lzt_unexpected_payload", "url": url, "body": snippet(text)})
            raise UpstreamPayloadError(snippet(text))
        return payload

    async def _send(self, url: str, params: Optional[Dict[str, str]]) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self.token}"}
        return await self._client.get(url, params=params, headers=headers)


def _reject_constant(name: str) -> None:
    # NaN and Infinity are not JSON; the json module would accept them otherwise.
    raise ValueError(f"Invalid JSON constant: {name}")
