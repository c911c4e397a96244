"""Best-effort Russian to English translation of listing text.

Provides:
- AbstractTranslator: interface the request handler depends on
- MyMemoryTranslator: adapter for the MyMemory public API
- translate_fields: concurrent fan-out over many records, order preserved"""

import asyncio
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import httpx

from .config import TRANSLATE_LANGPAIR, TRANSLATE_TIMEOUT, TRANSLATE_URL
from .logger import setup_logger

log = setup_logger("lzt_proxy.translator")


class AbstractTranslator:
    """Interface for translators.

    translate() never raises: whatever goes wrong, the caller gets the
    original text back.
    """

    async def translate(self, text: Optional[str]) -> str:
        if not text:
            return ""
        try:
            translated = await self._translate(text)
        except Exception as e:
            log.debug({"msg": "translation_failed", "err": repr(e), "chars": len(text)})
            return text
        return translated or text

    async def _translate(self, text: str) -> Optional[str]:
        #Return the translation, or None/"" when the service has none
        raise NotImplementedError

    async def aclose(self) -> None:
        #Release pooled connections, if any
        return None


class MyMemoryTranslator(AbstractTranslator):
    """Async adapter for the MyMemory translation API."""

    def __init__(
        self,
        url: str = TRANSLATE_URL,
        langpair: str = TRANSLATE_LANGPAIR,
        timeout: float = TRANSLATE_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.url = url
        self.langpair = langpair
        self.timeout = timeout
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _translate(self, text: str) -> Optional[str]:
        # The timeout cancels this call only; sibling translations keep running.
        return await asyncio.wait_for(self._request(text), timeout=self.timeout)

    async def _request(self, text: str) -> Optional[str]:
        params = {"q": text, "langpair": self.langpair}
        resp = await self._client.get(self.url, params=params)
        data = resp.json()
        return data["responseData"]["translatedText"]


async def translate_fields(
    translator: AbstractTranslator,
    records: Sequence[Dict[str, Any]],
    fields: Iterable[str],
    fill_missing: Iterable[str] = (),
) -> List[Dict[str, Any]]:
    """Translate `fields` of every record concurrently.

    One task is launched per (record, field); results are zipped back by
    index, so the output order is the input order whatever order the calls
    finish in. A field absent from a record is skipped, unless it is named
    in fill_missing, in which case it comes back as "".
    """
    fields = list(fields)
    fill_missing = set(fill_missing)
    jobs: List[Tuple[int, str]] = []
    for index, record in enumerate(records):
        for name in fields:
            if name in record or name in fill_missing:
                jobs.append((index, name))

    translations = await asyncio.gather(
        *[translator.translate(_as_text(records[index].get(name))) for index, name in jobs]
    )

    translated = [dict(record) for record in records]
    for (index, name), text in zip(jobs, translations):
        translated[index][name] = text
    return translated


def _as_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return str(value)
