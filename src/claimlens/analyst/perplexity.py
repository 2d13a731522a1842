"""Perplexity-backed analyst using the chat-completions HTTP API."""

import logging
import os
from typing import Any

import httpx

from claimlens.analyst.base import Completion, PromptedAnalyst
from claimlens.errors import CollaboratorUnavailable

logger = logging.getLogger(__name__)

PERPLEXITY_API_URL = "https://api.perplexity.ai/chat/completions"


def _citations(payload: dict[str, Any]) -> tuple[str, ...]:
    """Collect cited URLs from either the legacy or current response field."""
    raw = payload.get("citations")
    if isinstance(raw, list) and raw:
        return tuple(str(url) for url in raw)
    results = payload.get("search_results")
    if isinstance(results, list):
        return tuple(str(r["url"]) for r in results if isinstance(r, dict) and r.get("url"))
    return ()


class PerplexityAnalyst(PromptedAnalyst):
    """Analyze news coverage with Perplexity's search-grounded models.

    Every call is a single POST to the chat-completions endpoint. Network
    errors, timeouts and non-2xx replies raise ``CollaboratorUnavailable``;
    nothing is retried.

    Args:
        api_key: API key (defaults to PERPLEXITY_API_KEY env var).
        model: Perplexity model to use.
        timeout: Request timeout in seconds.
        temperature: Sampling temperature.
        max_candidates: Maximum candidate sources kept from retrieval.
        max_claims_per_source: Maximum claims kept per source.
        transport: Optional httpx transport (used by tests).
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str = "sonar",
        timeout: float = 60.0,
        temperature: float = 0.2,
        max_candidates: int = 10,
        max_claims_per_source: int = 5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(max_candidates=max_candidates, max_claims_per_source=max_claims_per_source)
        self._api_key = api_key or os.environ.get("PERPLEXITY_API_KEY")
        if not self._api_key:
            raise ValueError(
                "Perplexity API key required. Pass api_key or set PERPLEXITY_API_KEY env var."
            )
        self._model = model
        self._timeout = timeout
        self._temperature = temperature
        self._transport = transport

    async def _complete(
        self,
        system: str,
        user: str,
        *,
        max_tokens: int,
        search: bool = False,
    ) -> Completion:
        body: dict[str, Any] = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "max_tokens": max_tokens,
            "temperature": self._temperature,
        }
        if search:
            body["return_citations"] = True

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(PERPLEXITY_API_URL, json=body, headers=headers)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            raise CollaboratorUnavailable(
                f"Perplexity API error: {e.response.status_code} {e.response.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            raise CollaboratorUnavailable(f"Perplexity API request failed: {e}") from e
        except ValueError as e:
            raise CollaboratorUnavailable(f"Perplexity API returned a non-JSON body: {e}") from e

        try:
            text = payload["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise CollaboratorUnavailable("Perplexity API reply has no message content") from e

        return Completion(text=str(text), citations=_citations(payload))
