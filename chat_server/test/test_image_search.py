import asyncio

import httpx

from chat_server.agents.image_agent.image_search import ImageSearchClient


def _client(handler) -> ImageSearchClient:
    return ImageSearchClient(base_url="https://wiki.example/w/api.php", transport=httpx.MockTransport(handler))


def _resolve(client, name):
    return asyncio.run(client.resolve_image(name))


def test_returns_thumbnail_source():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={
            "query": {"pages": {"123": {"title": "Monserrate", "thumbnail": {"source": "https://upload.example/m.jpg"}}}}
        })

    assert _resolve(_client(handler), "Monserrate") == "https://upload.example/m.jpg"
    assert len(seen) == 1
    params = seen[0].url.params
    assert params["titles"] == "Monserrate"
    assert params["prop"] == "pageimages"
    assert params["pithumbsize"] == "600"


def test_page_without_thumbnail_is_none():
    def handler(request):
        return httpx.Response(200, json={"query": {"pages": {"-1": {"title": "Nowhere", "missing": ""}}}})

    assert _resolve(_client(handler), "Nowhere") is None


def test_http_error_is_none():
    def handler(request):
        return httpx.Response(500, text="oops")

    assert _resolve(_client(handler), "Monserrate") is None


def test_transport_error_is_none():
    def handler(request):
        raise httpx.ConnectError("no route", request=request)

    assert _resolve(_client(handler), "Monserrate") is None


def test_non_json_body_is_none():
    def handler(request):
        return httpx.Response(200, text="<html>not json</html>")

    assert _resolve(_client(handler), "Monserrate") is None


def test_empty_name_skips_request():
    def handler(request):
        raise AssertionError("no request expected")

    assert _resolve(_client(handler), "  ") is None
