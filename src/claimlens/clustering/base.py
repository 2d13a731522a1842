"""Protocols for claim similarity and clustering."""

from typing import Protocol

from claimlens.data import Claim, ClaimCluster


class ClaimSimilarity(Protocol):
    """Interface for scoring how alike two claim texts are."""

    version: str

    def score(self, a: str, b: str) -> float:
        """Return a symmetric similarity in [0.0, 1.0]."""
        ...


class ClaimClusterer(Protocol):
    """Interface for grouping near-duplicate claims."""

    def cluster(self, claims: list[Claim]) -> list[ClaimCluster]:
        """Partition claims into clusters.

        Args:
            claims: Claims in source processing order.

        Returns:
            Ordered clusters.
        """
        ...
