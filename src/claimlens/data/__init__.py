"""Data models for ClaimLens."""

from claimlens.data.models import (
    Analysis,
    AnalysisMeta,
    AnalyzedClaim,
    Claim,
    ClaimCategory,
    ClaimCluster,
    InputKind,
    NumberMention,
    OutletProfile,
    OutletStance,
    Source,
    Stance,
)

__all__ = [
    "Analysis",
    "AnalysisMeta",
    "AnalyzedClaim",
    "Claim",
    "ClaimCategory",
    "ClaimCluster",
    "InputKind",
    "NumberMention",
    "OutletProfile",
    "OutletStance",
    "Source",
    "Stance",
]
