"""Rule-based claim categorization.

Given the outlet stances on one claim cluster, the first matching rule wins:

    1. supports / total >= consensus_ratio      -> consensus
    2. supports > 0 and refutes > 0             -> disputed
    3. mentioned <= 1                           -> missing
    4. otherwise                                -> disputed

where ``mentioned = supports + refutes + neutral``. Rule 3 also fires for a
lone unopposed ``supports`` (e.g. 1 of 6 outlets), labelling it missing
rather than weak consensus.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from fractions import Fraction

from claimlens.data import AnalyzedClaim, ClaimCategory, ClaimCluster, OutletStance, Stance

logger = logging.getLogger(__name__)

DEFAULT_CONSENSUS_RATIO = 2 / 3


@dataclass(frozen=True)
class StanceCounts:
    """Stance tallies for one claim cluster."""

    supports: int = 0
    refutes: int = 0
    neutral: int = 0
    total: int = 0

    @property
    def mentioned(self) -> int:
        return self.supports + self.refutes + self.neutral

    @classmethod
    def from_outlets(cls, outlets: Iterable[OutletStance]) -> "StanceCounts":
        outlets = list(outlets)
        return cls(
            supports=sum(1 for o in outlets if o.stance == Stance.SUPPORTS),
            refutes=sum(1 for o in outlets if o.stance == Stance.REFUTES),
            neutral=sum(1 for o in outlets if o.stance == Stance.NEUTRAL),
            total=len(outlets),
        )


def _as_fraction(ratio: float) -> Fraction:
    # 2/3 as a float is not exactly 2/3; snap to the nearest small fraction.
    return Fraction(ratio).limit_denominator(1000)


def categorize(
    counts: StanceCounts,
    consensus_ratio: float = DEFAULT_CONSENSUS_RATIO,
) -> ClaimCategory:
    """Assign exactly one category from stance counts.

    Total over every reachable input: ``total == 0`` counts as a support
    ratio of zero.

    Args:
        counts: Stance tallies for the cluster.
        consensus_ratio: Minimum share of supporting outlets for consensus.

    Returns:
        The category label.
    """
    ratio = Fraction(counts.supports, counts.total) if counts.total > 0 else Fraction(0)
    if counts.total > 0 and ratio >= _as_fraction(consensus_ratio):
        return ClaimCategory.CONSENSUS
    if counts.supports > 0 and counts.refutes > 0:
        return ClaimCategory.DISPUTED
    if counts.mentioned <= 1:
        return ClaimCategory.MISSING
    return ClaimCategory.DISPUTED


class ClaimCategorizer:
    """Attach a category to each stance-tagged claim cluster.

    Args:
        consensus_ratio: Minimum share of supporting outlets for consensus.
    """

    def __init__(self, consensus_ratio: float = DEFAULT_CONSENSUS_RATIO) -> None:
        if not 0.0 < consensus_ratio <= 1.0:
            raise ValueError(f"consensus_ratio must be in (0, 1], got {consensus_ratio}")
        self._consensus_ratio = consensus_ratio

    def categorize(self, outlets: Iterable[OutletStance]) -> ClaimCategory:
        return categorize(StanceCounts.from_outlets(outlets), self._consensus_ratio)

    def analyze(self, cluster: ClaimCluster, outlets: list[OutletStance]) -> AnalyzedClaim:
        """Build the final, categorized form of a cluster."""
        category = self.categorize(outlets)
        logger.debug("%s -> %s (%s)", cluster.id, category, StanceCounts.from_outlets(outlets))
        return AnalyzedClaim(
            claim_id=cluster.id,
            canonical_text=cluster.canonical_text,
            outlets=tuple(outlets),
            category=category,
            entities=cluster.entities,
            numbers=cluster.numbers,
        )
