"""Tests for frontend_env_mcp.guidelines."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from frontend_env_mcp.guidelines import (
    CATEGORIES,
    CATEGORY_DOCUMENTS,
    GUIDELINE_BASE_URL,
    UnknownGuidelineCategoryError,
    get_guidelines,
    guideline_urls,
)

BASE = "https://guidelines.test/src"


def _document_name(request: httpx.Request) -> str:
    return request.url.path.rsplit("/", 1)[-1]


class TestGuidelineUrls:
    def test_general_documents_come_first(self):
        assert guideline_urls("css", BASE) == [
            f"{BASE}/index.md",
            f"{BASE}/naming.md",
            f"{BASE}/css.md",
        ]

    def test_default_base_url(self):
        assert guideline_urls("html")[0] == f"{GUIDELINE_BASE_URL}/index.md"

    def test_trailing_slash_is_ignored(self):
        assert guideline_urls("js", BASE + "/")[-1] == f"{BASE}/js.md"

    def test_unknown_category(self):
        with pytest.raises(UnknownGuidelineCategoryError) as exc_info:
            guideline_urls("python")

        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.category == "python"

    def test_every_category_has_a_table_entry(self):
        assert set(CATEGORIES) == set(CATEGORY_DOCUMENTS)


class TestGetGuidelines:
    @pytest.mark.asyncio
    async def test_general_only_category(self, make_transport):
        transport = make_transport(
            lambda request: httpx.Response(200, text=f"doc:{_document_name(request)}")
        )

        async with httpx.AsyncClient(transport=transport) as client:
            text = await get_guidelines("web-components", client=client, base_url=BASE)

        assert text == "doc:index.md\n\n---\n\ndoc:naming.md"

    @pytest.mark.asyncio
    async def test_keeps_list_order_when_responses_arrive_out_of_order(self):
        delays = {"index.md": 0.03, "naming.md": 0.02, "media.md": 0.0}

        async def handler(request):
            name = _document_name(request)
            await asyncio.sleep(delays[name])
            return httpx.Response(200, text=name)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            text = await get_guidelines("media", client=client, base_url=BASE)

        assert text.split("\n\n---\n\n") == ["index.md", "naming.md", "media.md"]

    @pytest.mark.asyncio
    async def test_one_failure_fails_everything(self, make_transport):
        def handler(request):
            if _document_name(request) == "naming.md":
                return httpx.Response(404, text="missing")
            return httpx.Response(200, text="ok")

        async with httpx.AsyncClient(transport=make_transport(handler)) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await get_guidelines("html", client=client, base_url=BASE)

    @pytest.mark.asyncio
    async def test_failure_cancels_pending_fetches(self):
        cancelled = []

        async def handler(request):
            name = _document_name(request)
            if name == "index.md":
                return httpx.Response(500)
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(name)
                raise
            return httpx.Response(200, text=name)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await get_guidelines("css", client=client, base_url=BASE)

        assert sorted(cancelled) == ["css.md", "naming.md"]

    @pytest.mark.asyncio
    async def test_unknown_category_makes_no_request(self, make_transport):
        transport = make_transport(lambda request: httpx.Response(200, text="ok"))

        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(UnknownGuidelineCategoryError):
                await get_guidelines("python", client=client, base_url=BASE)

        assert transport.requests == []
