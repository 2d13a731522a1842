"""Headline extraction for URL inputs."""

import logging
from typing import Protocol

import httpx
from bs4 import BeautifulSoup

from claimlens.errors import CollaboratorUnavailable
from claimlens.url import is_http_url

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class HeadlineSource(Protocol):
    """Interface for resolving a page URL to its headline."""

    async def fetch_headline(self, url: str) -> str:
        """Return the headline of the page at ``url``."""
        ...


def extract_headline(html: str) -> str | None:
    """Pick the page headline: og:title, then <title>, then the first <h1>."""
    soup = BeautifulSoup(html, "html.parser")

    og_title = soup.find("meta", property="og:title")
    if og_title and og_title.get("content", "").strip():
        return str(og_title["content"]).strip()

    if soup.title and soup.title.get_text(strip=True):
        return soup.title.get_text(strip=True)

    h1 = soup.find("h1")
    if h1 and h1.get_text(strip=True):
        return h1.get_text(strip=True)
    return None


class HeadlineFetcher:
    """Fetch a news page and read its headline.

    Args:
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (used by tests).
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def fetch_headline(self, url: str) -> str:
        """Return the page headline, or the URL itself when the page has none.

        Raises:
            CollaboratorUnavailable: If the URL is not fetchable or the page
                cannot be fetched.
        """
        if not is_http_url(url):
            raise CollaboratorUnavailable(f"Cannot fetch {url!r}: not an http(s) URL")

        try:
            async with httpx.AsyncClient(
                follow_redirects=True, timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(url, headers={"User-Agent": USER_AGENT})
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise CollaboratorUnavailable(f"Failed to fetch {url}: {e}") from e

        headline = extract_headline(response.text)
        if headline is None:
            logger.warning(f"No headline found at {url}, using the URL")
            return url
        return headline
