"""Ownership-group outlet diversifier.

Two domains belonging to the same publisher (regional mirrors, wire-service
aliases) are not independent coverage. The diversifier walks candidates in
retrieval rank order and admits at most one source per ownership group:

    admit(s) <=> group(s.domain) not in chosen

stopping once ``max_sources`` have been admitted. Domains absent from the
mapping are their own group.
"""

import logging
from collections.abc import Mapping

from claimlens.data import Source

logger = logging.getLogger(__name__)

DEFAULT_MAX_SOURCES = 6

DEFAULT_OWNERSHIP_GROUPS: dict[str, str] = {
    "bbc.com": "bbc-group",
    "bbc.co.uk": "bbc-group",
    "apnews.com": "ap-group",
    "ap.org": "ap-group",
    "cnn.com": "cnn-group",
    "edition.cnn.com": "cnn-group",
    "theguardian.com": "guardian-group",
    "guardian.co.uk": "guardian-group",
    "nytimes.com": "nyt-group",
    "nyti.ms": "nyt-group",
    "foxnews.com": "fox-group",
    "foxbusiness.com": "fox-group",
    "wsj.com": "dowjones-group",
    "marketwatch.com": "dowjones-group",
    "barrons.com": "dowjones-group",
    "nbcnews.com": "nbcu-group",
    "msnbc.com": "nbcu-group",
    "cnbc.com": "nbcu-group",
    "abcnews.go.com": "abc-group",
    "abc.com": "abc-group",
    "cbsnews.com": "paramount-group",
    "cbs.com": "paramount-group",
    "washingtonpost.com": "wapo-group",
    "huffpost.com": "huffpost-group",
    "huffingtonpost.com": "huffpost-group",
}


def ownership_group(domain: str, groups: Mapping[str, str]) -> str:
    """Return the ownership-group key for a domain.

    Args:
        domain: Canonical (www-stripped) hostname.
        groups: Known domain -> group mapping.

    Returns:
        The mapped group, or the domain itself when it is not mapped.
    """
    return groups.get(domain.lower(), domain.lower())


class OwnershipDiversifier:
    """Keep one representative source per ownership group.

    Args:
        max_sources: Maximum number of sources to admit.
        groups: Domain -> ownership-group mapping. Defaults to
            ``DEFAULT_OWNERSHIP_GROUPS``.
    """

    def __init__(
        self,
        max_sources: int = DEFAULT_MAX_SOURCES,
        groups: Mapping[str, str] | None = None,
    ) -> None:
        if max_sources < 0:
            raise ValueError(f"max_sources must be non-negative, got {max_sources}")
        self._max_sources = max_sources
        self._groups = dict(DEFAULT_OWNERSHIP_GROUPS if groups is None else groups)

    @property
    def max_sources(self) -> int:
        return self._max_sources

    def group_of(self, source: Source) -> str:
        return ownership_group(source.domain, self._groups)

    def diversify(self, sources: list[Source]) -> list[Source]:
        """Select at most ``max_sources`` sources from distinct ownership groups.

        Fewer distinct groups than ``max_sources`` is not an error; every
        distinct group is then represented once.

        Args:
            sources: Candidate sources in retrieval rank order.

        Returns:
            Admitted sources in their original relative order.
        """
        chosen_groups: set[str] = set()
        selected: list[Source] = []

        for source in sources:
            if len(selected) >= self._max_sources:
                break
            group = self.group_of(source)
            if group in chosen_groups:
                logger.debug("Skipping %s: group %s already represented", source.url, group)
                continue
            chosen_groups.add(group)
            selected.append(source)

        return selected
