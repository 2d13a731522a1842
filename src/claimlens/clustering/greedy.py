"""Greedy single-pass claim clustering.

Algorithm:
    1. Walk claims in input order, skipping ones already placed.
    2. Each unplaced claim seeds a new cluster; its text is the canonical text.
    3. Every later unplaced claim whose similarity to the seed exceeds the
       threshold joins that cluster.
    4. Stop once ``max_clusters`` clusters exist.

Membership is decided once; there is no re-clustering pass. Claim order
determines the outcome (first seed wins), which keeps runs reproducible.
"""

import logging

from claimlens.clustering.base import ClaimSimilarity
from claimlens.clustering.similarity import JaccardSimilarity
from claimlens.data import Claim, ClaimCluster

logger = logging.getLogger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.5
DEFAULT_MAX_CLUSTERS = 10


class GreedyClusterer:
    """Cluster near-duplicate claims by similarity to a seed claim.

    Args:
        similarity: Pairwise similarity measure (default: Jaccard).
        threshold: Similarity a claim must strictly exceed to join a cluster.
        max_clusters: Maximum clusters returned; claims that would only
            belong to later clusters are dropped.
    """

    def __init__(
        self,
        similarity: ClaimSimilarity | None = None,
        threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        max_clusters: int = DEFAULT_MAX_CLUSTERS,
    ) -> None:
        self._similarity = similarity or JaccardSimilarity()
        self._threshold = threshold
        self._max_clusters = max_clusters

    @property
    def version(self) -> str:
        return self._similarity.version

    def cluster(self, claims: list[Claim]) -> list[ClaimCluster]:
        """Partition claims into at most ``max_clusters`` clusters.

        Args:
            claims: Claims in source processing order.

        Returns:
            Clusters in formation order, ids ``claim-1``, ``claim-2``, ...
        """
        used: set[int] = set()
        clusters: list[ClaimCluster] = []

        for i, seed in enumerate(claims):
            if i in used:
                continue
            if len(clusters) >= self._max_clusters:
                break

            members = [seed]
            for j in range(i + 1, len(claims)):
                if j in used:
                    continue
                if self._similarity.score(seed.text, claims[j].text) > self._threshold:
                    members.append(claims[j])
                    used.add(j)
            used.add(i)

            clusters.append(
                ClaimCluster(
                    id=f"claim-{len(clusters) + 1}",
                    canonical_text=seed.text,
                    members=tuple(members),
                )
            )

        dropped = len(claims) - len(used)
        if dropped:
            logger.info(
                "Cluster cap %d reached, dropped %d of %d claims",
                self._max_clusters,
                dropped,
                len(claims),
            )
        return clusters
