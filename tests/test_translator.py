"""Translator fallback, timeout and fan-out ordering."""

import asyncio

import httpx
import pytest

from lzt_proxy import MyMemoryTranslator
from lzt_proxy.translator import translate_fields

from conftest import FakeTranslator


def _mymemory(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestMyMemoryTranslator:
    @pytest.mark.asyncio
    async def test_translates_with_ru_en_pair(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"responseData": {"translatedText": "Steam account"}})

        async with _mymemory(handler) as client:
            translator = MyMemoryTranslator(client=client)
            assert await translator.translate("Аккаунт Steam") == "Steam account"

        assert seen[0].url.params["q"] == "Аккаунт Steam"
        assert seen[0].url.params["langpair"] == "ru|en"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", None])
    async def test_empty_input_makes_no_call(self, text):
        def handler(request):
            raise AssertionError("no request expected")

        async with _mymemory(handler) as client:
            assert await MyMemoryTranslator(client=client).translate(text) == ""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="<html>rate limited</html>"),
            httpx.Response(200, json={"responseStatus": 403}),
            httpx.Response(200, json={"responseData": {"translatedText": ""}}),
            httpx.Response(200, json={"responseData": None}),
            httpx.Response(500, text="oops"),
        ],
    )
    async def test_bad_responses_fall_back_to_original(self, response):
        async with _mymemory(lambda request: response) as client:
            assert await MyMemoryTranslator(client=client).translate("Привет") == "Привет"

    @pytest.mark.asyncio
    async def test_network_error_falls_back_to_original(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        async with _mymemory(handler) as client:
            assert await MyMemoryTranslator(client=client).translate("Привет") == "Привет"

    @pytest.mark.asyncio
    async def test_timeout_falls_back_without_blocking_siblings(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            if request.url.params["q"] == "медленно":
                await asyncio.sleep(5)
            return httpx.Response(200, json={"responseData": {"translatedText": "fast"}})

        async with _mymemory(handler) as client:
            translator = MyMemoryTranslator(client=client, timeout=0.05)
            loop = asyncio.get_running_loop()
            started = loop.time()
            slow, fast = await asyncio.gather(translator.translate("медленно"), translator.translate("быстро"))
            elapsed = loop.time() - started

        assert slow == "медленно"
        assert fast == "fast"
        assert elapsed < 1


class TestTranslateFields:
    @pytest.mark.asyncio
    async def test_order_preserved_when_calls_finish_out_of_order(self):
        titles = [f"t{i}" for i in range(6)]
        # Earlier records finish last.
        translator = FakeTranslator(delays={t: 0.01 * (6 - i) for i, t in enumerate(titles)})
        records = [{"item_id": i, "title": t} for i, t in enumerate(titles)]

        result = await translate_fields(translator, records, ("title",))

        assert translator.completed != titles
        assert [r["item_id"] for r in result] == list(range(6))
        assert [r["title"] for r in result] == [f"EN:{t}" for t in titles]

    @pytest.mark.asyncio
    async def test_missing_fields_skipped_or_filled(self):
        translator = FakeTranslator()
        records = [{"item_id": 1}, {"item_id": 2, "title": "x", "description": "y"}]

        result = await translate_fields(translator, records, ("title", "description"), fill_missing=("title",))

        assert result[0] == {"item_id": 1, "title": ""}
        assert result[1] == {"item_id": 2, "title": "EN:x", "description": "EN:y"}

    @pytest.mark.asyncio
    async def test_one_failure_does_not_affect_others(self):
        translator = FakeTranslator(failing={"b"})
        records = [{"title": "a"}, {"title": "b"}, {"title": "c"}]

        result = await translate_fields(translator, records, ("title",))

        assert [r["title"] for r in result] == ["EN:a", "b", "EN:c"]

    @pytest.mark.asyncio
    async def test_input_records_untouched(self):
        records = [{"title": "a", "price": 5}]
        await translate_fields(FakeTranslator(), records, ("title",))
        assert records == [{"title": "a", "price": 5}]


class TestConnectionReuse:
    @pytest.mark.asyncio
    async def test_page_of_titles_shares_one_http_client(self, monkeypatch):
        created = []
        real_async_client = httpx.AsyncClient

        def counting_client(**kwargs):
            transport = httpx.MockTransport(
                lambda request: httpx.Response(200, json={"responseData": {"translatedText": "ok"}})
            )
            http = real_async_client(transport=transport, **kwargs)
            created.append(http)
            return http

        monkeypatch.setattr(httpx, "AsyncClient", counting_client)
        translator = MyMemoryTranslator()
        records = [{"title": f"лот {i}", "description": "описание"} for i in range(21)]

        result = await translate_fields(translator, records, ("title", "description"))
        await translator.aclose()

        assert len(created) == 1
        assert all(r["title"] == "ok" for r in result)
