"""Core data models for ClaimLens."""

from dataclasses import dataclass, field
from enum import StrEnum

from claimlens.url import extract_domain


class InputKind(StrEnum):
    """What the caller handed to ``analyze``."""

    HEADLINE = "headline"
    URL = "url"


class Stance(StrEnum):
    """An outlet's position on a claim cluster."""

    SUPPORTS = "supports"
    REFUTES = "refutes"
    NEUTRAL = "neutral"
    NOT_MENTIONED = "not_mentioned"


class ClaimCategory(StrEnum):
    """Final bucket a claim cluster is assigned to."""

    CONSENSUS = "consensus"
    DISPUTED = "disputed"
    MISSING = "missing"


@dataclass(frozen=True)
class Source:
    """A news outlet's coverage of the story."""

    url: str
    domain: str
    title: str = ""
    snippet: str = ""
    fetched_at: str = ""

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        title: str = "",
        snippet: str = "",
        fetched_at: str = "",
    ) -> "Source":
        """Build a source, deriving ``domain`` from ``url``."""
        return cls(
            url=url,
            domain=extract_domain(url),
            title=title,
            snippet=snippet,
            fetched_at=fetched_at,
        )


@dataclass(frozen=True)
class NumberMention:
    """A quantity stated in a claim."""

    value: float
    unit: str = ""


@dataclass(frozen=True)
class Claim:
    """An atomic, checkable statement extracted from one source."""

    text: str
    source: Source
    entities: tuple[str, ...] = ()
    numbers: tuple[NumberMention, ...] = ()


@dataclass(frozen=True)
class ClaimCluster:
    """Claims judged to refer to the same underlying assertion.

    ``canonical_text`` is the seed claim's text verbatim.
    """

    id: str
    canonical_text: str
    members: tuple[Claim, ...]

    @property
    def entities(self) -> tuple[str, ...]:
        seen: dict[str, None] = {}
        for claim in self.members:
            for entity in claim.entities:
                seen.setdefault(entity, None)
        return tuple(seen)

    @property
    def numbers(self) -> tuple[NumberMention, ...]:
        seen: dict[NumberMention, None] = {}
        for claim in self.members:
            for number in claim.numbers:
                seen.setdefault(number, None)
        return tuple(seen)


@dataclass(frozen=True)
class OutletStance:
    """One outlet's position on one claim cluster."""

    domain: str
    url: str
    stance: Stance
    quote: str = ""
    confidence: float = 0.0


@dataclass(frozen=True)
class AnalyzedClaim:
    """A claim cluster with its stances and assigned category."""

    claim_id: str
    canonical_text: str
    outlets: tuple[OutletStance, ...]
    category: ClaimCategory
    entities: tuple[str, ...] = ()
    numbers: tuple[NumberMention, ...] = ()


@dataclass(frozen=True)
class OutletProfile:
    """Editorial metadata for an outlet used in diversity reporting."""

    domain: str
    region: str = "Unknown"
    leaning: str = "unknown"


@dataclass(frozen=True)
class AnalysisMeta:
    """Run statistics attached to an analysis."""

    latency_ms: int = 0
    article_count: int = 0
    timestamp: str = ""


@dataclass(frozen=True)
class Analysis:
    """The full, categorized result of one ``analyze`` request."""

    headline: str
    entities: tuple[str, ...]
    timestamp: str
    sources: tuple[Source, ...]
    outlets: tuple[OutletProfile, ...] = ()
    consensus: tuple[AnalyzedClaim, ...] = ()
    disputed: tuple[AnalyzedClaim, ...] = ()
    missing: tuple[AnalyzedClaim, ...] = ()
    meta: AnalysisMeta = field(default_factory=AnalysisMeta)
    analysis_id: str | None = None

    @property
    def claims(self) -> tuple[AnalyzedClaim, ...]:
        """All claims, consensus first, then disputed, then missing."""
        return self.consensus + self.disputed + self.missing
