"""Collaborator interface for the LLM search service."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from claimlens.analyst import prompts
from claimlens.analyst.parsing import parse_claims, parse_entities, parse_stance
from claimlens.data import Claim, ClaimCluster, OutletStance, Source
from claimlens.url import extract_domain, is_http_url

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 150


class ClaimAnalyst(Protocol):
    """Interface for the external retrieval/extraction/stance service.

    Implementations raise ``CollaboratorUnavailable`` when the service cannot
    be reached and recover from malformed replies internally.
    """

    async def extract_entities(self, headline: str) -> list[str]:
        """Extract the key named entities of a headline."""
        ...

    async def retrieve_sources(self, headline: str, entities: list[str]) -> list[Source]:
        """Find candidate coverage of a story, in rank order."""
        ...

    async def extract_claims(self, source: Source, headline: str) -> list[Claim]:
        """Extract atomic claims made by one source."""
        ...

    async def tag_stance(self, cluster: ClaimCluster, source: Source) -> OutletStance:
        """Decide one source's stance on one claim cluster."""
        ...


@dataclass(frozen=True)
class Completion:
    """Text reply of one collaborator call plus any cited URLs."""

    text: str
    citations: tuple[str, ...] = ()


class PromptedAnalyst:
    """``ClaimAnalyst`` built on a single text-completion primitive.

    Subclasses implement ``_complete``; prompting and reply parsing are
    shared.

    Args:
        max_candidates: Maximum candidate sources kept from retrieval.
        max_claims_per_source: Maximum claims kept per source.
    """

    def __init__(self, *, max_candidates: int = 10, max_claims_per_source: int = 5) -> None:
        self._max_candidates = max_candidates
        self._max_claims = max_claims_per_source

    async def _complete(
        self,
        system: str,
        user: str,
        *,
        max_tokens: int,
        search: bool = False,
    ) -> Completion:
        raise NotImplementedError

    async def extract_entities(self, headline: str) -> list[str]:
        completion = await self._complete(prompts.ENTITY_SYSTEM_PROMPT, headline, max_tokens=200)
        return parse_entities(completion.text, headline)

    async def retrieve_sources(self, headline: str, entities: list[str]) -> list[Source]:
        query = prompts.retrieval_query(headline, entities)
        completion = await self._complete(
            prompts.RETRIEVAL_SYSTEM_PROMPT, query, max_tokens=2000, search=True
        )
        fetched_at = datetime.now(tz=UTC).isoformat()

        sources: list[Source] = []
        seen_urls: set[str] = set()
        for url in completion.citations:
            if len(sources) >= self._max_candidates:
                break
            if url in seen_urls or not is_http_url(url):
                logger.debug("Skipping citation %s", url)
                continue
            seen_urls.add(url)
            idx = len(sources)
            domain = extract_domain(url)
            sources.append(
                Source(
                    url=url,
                    domain=domain,
                    title=f"Article from {domain}",
                    snippet=completion.text[idx * SNIPPET_LENGTH : (idx + 1) * SNIPPET_LENGTH],
                    fetched_at=fetched_at,
                )
            )
        return sources

    async def extract_claims(self, source: Source, headline: str) -> list[Claim]:
        completion = await self._complete(
            prompts.CLAIM_SYSTEM_PROMPT.format(max_claims=self._max_claims),
            prompts.claim_user_prompt(source, headline),
            max_tokens=1500,
            search=True,
        )
        return parse_claims(completion.text, source, max_claims=self._max_claims)

    async def tag_stance(self, cluster: ClaimCluster, source: Source) -> OutletStance:
        completion = await self._complete(
            prompts.STANCE_SYSTEM_PROMPT,
            prompts.stance_user_prompt(cluster, source),
            max_tokens=500,
            search=True,
        )
        return parse_stance(completion.text, cluster, source)
