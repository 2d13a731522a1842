"""Outlet diversification module."""

from claimlens.diversity.base import OutletDiversifier
from claimlens.diversity.outlets import KNOWN_OUTLETS, coverage_diversity_score, profile_for
from claimlens.diversity.ownership import (
    DEFAULT_MAX_SOURCES,
    DEFAULT_OWNERSHIP_GROUPS,
    OwnershipDiversifier,
    ownership_group,
)

__all__ = [
    "DEFAULT_MAX_SOURCES",
    "DEFAULT_OWNERSHIP_GROUPS",
    "KNOWN_OUTLETS",
    "OutletDiversifier",
    "OwnershipDiversifier",
    "coverage_diversity_score",
    "ownership_group",
    "profile_for",
]
