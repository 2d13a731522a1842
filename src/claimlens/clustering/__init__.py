"""Claim clustering module."""

from claimlens.clustering.base import ClaimClusterer, ClaimSimilarity
from claimlens.clustering.greedy import (
    DEFAULT_MAX_CLUSTERS,
    DEFAULT_SIMILARITY_THRESHOLD,
    GreedyClusterer,
)
from claimlens.clustering.similarity import JaccardSimilarity, jaccard_similarity

__all__ = [
    "ClaimClusterer",
    "ClaimSimilarity",
    "DEFAULT_MAX_CLUSTERS",
    "DEFAULT_SIMILARITY_THRESHOLD",
    "GreedyClusterer",
    "JaccardSimilarity",
    "jaccard_similarity",
]
