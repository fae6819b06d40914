"""
Tests for the Google Custom Search client.
"""

import httpx
import pytest

from expertfinder.config.provider import SearchConfig
from expertfinder.modules.search import GoogleSearchClient, build_query
from expertfinder.modules.upstream import UpstreamServiceError


def make_client(handler):
    config = SearchConfig(api_key="key", engine_id="cx", base_url="https://search.test/v1")
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleSearchClient(config, http)


def test_build_query():
    assert build_query("computer vision", "Stuttgart") == 'site:linkedin.com/in "computer vision" Stuttgart'


@pytest.mark.asyncio
async def test_search_parameters_and_mapping():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "items": [
                    {"title": "Jane", "link": "https://www.linkedin.com/in/jane", "snippet": "CV"},
                    {"title": "Joe", "link": "https://www.linkedin.com/in/joe"},
                ]
            },
        )

    client = make_client(handler)

    links = await client.search("computer vision", "Stuttgart")

    params = seen[0].url.params
    assert params["key"] == "key"
    assert params["cx"] == "cx"
    assert params["q"] == 'site:linkedin.com/in "computer vision" Stuttgart'
    assert params["num"] == "8"
    assert [link.title for link in links] == ["Jane", "Joe"]
    assert links[1].snippet == ""


@pytest.mark.asyncio
async def test_search_caps_result_count():
    seen = []

    def handler(request):
        seen.append(request)
        items = [{"title": str(i), "link": f"https://linkedin.com/in/{i}"} for i in range(12)]
        return httpx.Response(200, json={"items": items})

    client = make_client(handler)

    links = await client.search("t", "l", max_results=25)

    assert seen[0].url.params["num"] == "10"
    assert len(links) == 10


@pytest.mark.asyncio
async def test_search_puts_linkedin_first_keeping_order():
    items = [
        {"title": "a", "link": "https://example.com/a"},
        {"title": "b", "link": "https://www.linkedin.com/in/b"},
        {"title": "c", "link": "https://example.com/c"},
        {"title": "d", "link": "https://de.linkedin.com/in/d"},
    ]
    client = make_client(lambda request: httpx.Response(200, json={"items": items}))

    links = await client.search("t", "l")

    assert [link.title for link in links] == ["b", "d", "a", "c"]


@pytest.mark.asyncio
async def test_search_without_items():
    client = make_client(lambda request: httpx.Response(200, json={"kind": "customsearch#search"}))

    assert await client.search("t", "l") == []


@pytest.mark.asyncio
async def test_search_error_status():
    client = make_client(lambda request: httpx.Response(403, json={"error": {"code": 403}}))

    with pytest.raises(UpstreamServiceError) as exc_info:
        await client.search("t", "l")

    assert exc_info.value.status_code == 403


@pytest.mark.asyncio
async def test_search_transport_error():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    client = make_client(handler)

    with pytest.raises(UpstreamServiceError) as exc_info:
        await client.search("t", "l")

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
@pytest.mark.parametrize("max_results", [0, -3])
async def test_search_requests_at_least_one_result(max_results):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"items": [{"title": "a", "link": "https://linkedin.com/in/a"}]})

    client = make_client(handler)

    links = await client.search("t", "l", max_results=max_results)

    assert seen[0].url.params["num"] == "1"
    assert len(links) == 1
