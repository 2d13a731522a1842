"""Claude-backed analyst using Anthropic's server-side web search."""

import logging
import os

import anthropic

from claimlens.analyst.base import Completion, PromptedAnalyst
from claimlens.errors import CollaboratorUnavailable

logger = logging.getLogger(__name__)


class ClaudeAnalyst(PromptedAnalyst):
    """Analyze news coverage with Claude.

    Calls that need fresh coverage (retrieval, claims, stance) enable the
    built-in web search tool; its result URLs become the citations.

    Note: Web search must be enabled in your Anthropic Console settings.

    Args:
        model: Anthropic model to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        max_searches_per_call: Max web searches per call.
        max_candidates: Maximum candidate sources kept from retrieval.
        max_claims_per_source: Maximum claims kept per source.
    """

    def __init__(
        self,
        model: str = "claude-haiku-4-5-20251001",
        api_key: str | None = None,
        *,
        max_searches_per_call: int = 3,
        max_candidates: int = 10,
        max_claims_per_source: int = 5,
    ) -> None:
        super().__init__(max_candidates=max_candidates, max_claims_per_source=max_claims_per_source)
        resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
        self._client = anthropic.AsyncAnthropic(api_key=resolved_key)
        self._model = model
        self._max_searches = max_searches_per_call

    async def _complete(
        self,
        system: str,
        user: str,
        *,
        max_tokens: int,
        search: bool = False,
    ) -> Completion:
        try:
            if search:
                response = await self._client.messages.create(
                    model=self._model,
                    max_tokens=max_tokens,
                    system=system,
                    tools=[
                        {
                            "type": "web_search_20250305",
                            "name": "web_search",
                            "max_uses": self._max_searches,
                        }
                    ],
                    messages=[{"role": "user", "content": user}],
                )
            else:
                response = await self._client.messages.create(
                    model=self._model,
                    max_tokens=max_tokens,
                    system=system,
                    messages=[{"role": "user", "content": user}],
                )
        except anthropic.APIError as e:
            raise CollaboratorUnavailable(f"Anthropic API request failed: {e}") from e

        text = ""
        citations: list[str] = []
        for block in response.content:
            if block.type == "text":
                text += block.text
            elif block.type == "web_search_tool_result" and isinstance(block.content, list):
                citations.extend(result.url for result in block.content)

        return Completion(text=text, citations=tuple(citations))
