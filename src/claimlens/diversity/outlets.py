"""Outlet profiles and the coverage diversity score."""

from collections.abc import Iterable, Mapping

from claimlens.data import OutletProfile

# Benchmark outlets by region and political leaning
KNOWN_OUTLETS: dict[str, OutletProfile] = {
    p.domain: p
    for p in (
        OutletProfile("msnbc.com", "US", "left"),
        OutletProfile("theguardian.com", "UK", "left"),
        OutletProfile("huffpost.com", "US", "left"),
        OutletProfile("vox.com", "US", "left"),
        OutletProfile("slate.com", "US", "left"),
        OutletProfile("nytimes.com", "US", "center-left"),
        OutletProfile("washingtonpost.com", "US", "center-left"),
        OutletProfile("cnn.com", "US", "center-left"),
        OutletProfile("reuters.com", "Global", "center"),
        OutletProfile("apnews.com", "Global", "center"),
        OutletProfile("bbc.com", "UK", "center"),
        OutletProfile("bbc.co.uk", "UK", "center"),
        OutletProfile("npr.org", "US", "center"),
        OutletProfile("thehill.com", "US", "center"),
        OutletProfile("aljazeera.com", "Middle East", "center"),
        OutletProfile("wsj.com", "US", "center-right"),
        OutletProfile("foxnews.com", "US", "right"),
        OutletProfile("nationalreview.com", "US", "right"),
        OutletProfile("dailywire.com", "US", "right"),
        OutletProfile("breitbart.com", "US", "right"),
    )
}


def profile_for(
    domain: str,
    known: Mapping[str, OutletProfile] = KNOWN_OUTLETS,
) -> OutletProfile:
    """Look up an outlet profile, defaulting to an unknown region and leaning."""
    return known.get(domain, OutletProfile(domain=domain))


def coverage_diversity_score(profiles: Iterable[OutletProfile]) -> int:
    """Score how varied a set of outlets is, from 0 to 100.

    Each distinct region is worth 20 points, each distinct leaning 15 and
    each outlet 8, capped at 100.
    """
    profiles = list(profiles)
    regions = {p.region for p in profiles}
    leanings = {p.leaning for p in profiles}
    return min(100, len(regions) * 20 + len(leanings) * 15 + len(profiles) * 8)
