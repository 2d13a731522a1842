"""Tests for headline extraction from news pages."""

import httpx
import pytest

from claimlens.errors import CollaboratorUnavailable
from claimlens.headline import HeadlineFetcher, extract_headline


def test_prefers_og_title() -> None:
    html = """<html><head>
        <meta property="og:title" content=" Storm hits coast ">
        <title>Storm hits coast | Example News</title>
    </head><body><h1>Other</h1></body></html>"""
    assert extract_headline(html) == "Storm hits coast"


def test_falls_back_to_title() -> None:
    html = "<html><head><title>Markets rally</title></head><body><h1>x</h1></body></html>"
    assert extract_headline(html) == "Markets rally"


def test_falls_back_to_h1() -> None:
    html = "<html><body><h1>  Election called  </h1><h1>second</h1></body></html>"
    assert extract_headline(html) == "Election called"


def test_no_headline() -> None:
    assert extract_headline("<html><body><p>text</p></body></html>") is None


async def test_fetch_headline() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, html="<title>Storm hits coast</title>")

    fetcher = HeadlineFetcher(transport=httpx.MockTransport(handler))
    assert await fetcher.fetch_headline("https://example.com/story") == "Storm hits coast"
    assert "Mozilla" in seen[0].headers["User-Agent"]


async def test_fetch_headline_without_headline_returns_url() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, html="<p>nothing</p>")

    fetcher = HeadlineFetcher(transport=httpx.MockTransport(handler))
    assert await fetcher.fetch_headline("https://example.com/story") == "https://example.com/story"


async def test_fetch_headline_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    fetcher = HeadlineFetcher(transport=httpx.MockTransport(handler))
    with pytest.raises(CollaboratorUnavailable):
        await fetcher.fetch_headline("https://example.com/missing")


async def test_fetch_headline_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    fetcher = HeadlineFetcher(transport=httpx.MockTransport(handler))
    with pytest.raises(CollaboratorUnavailable):
        await fetcher.fetch_headline("https://example.com/story")


@pytest.mark.parametrize("url", ["http://[::1", "ftp://example.com/story", "not a url"])
async def test_fetch_headline_rejects_non_http_url(url: str) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    fetcher = HeadlineFetcher(transport=httpx.MockTransport(handler))
    with pytest.raises(CollaboratorUnavailable, match="not an http"):
        await fetcher.fetch_headline(url)


async def test_fetch_headline_invalid_url() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    fetcher = HeadlineFetcher(transport=httpx.MockTransport(handler))
    with pytest.raises(CollaboratorUnavailable, match="Failed to fetch"):
        await fetcher.fetch_headline("https://example.com/\x00story")
