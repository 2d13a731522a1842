"""Claim categorization module."""

from claimlens.categorizer.rules import (
    DEFAULT_CONSENSUS_RATIO,
    ClaimCategorizer,
    StanceCounts,
    categorize,
)

__all__ = [
    "ClaimCategorizer",
    "DEFAULT_CONSENSUS_RATIO",
    "StanceCounts",
    "categorize",
]
