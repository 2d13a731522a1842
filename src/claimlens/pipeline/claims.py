"""Claim categorization pipeline."""

import asyncio
import dataclasses
import logging
import time
from collections.abc import Coroutine, Mapping
from datetime import UTC, datetime
from typing import Any, TypeVar

from claimlens.analyst.base import ClaimAnalyst
from claimlens.cache.base import AnalysisCache
from claimlens.categorizer import ClaimCategorizer
from claimlens.clustering import GreedyClusterer
from claimlens.clustering.base import ClaimClusterer
from claimlens.data import (
    Analysis,
    AnalysisMeta,
    AnalyzedClaim,
    Claim,
    ClaimCategory,
    ClaimCluster,
    InputKind,
    OutletProfile,
    OutletStance,
    Source,
)
from claimlens.diversity import KNOWN_OUTLETS, OutletDiversifier, OwnershipDiversifier, profile_for
from claimlens.errors import AnalysisNotFound, CacheWriteFailure, ClaimLensError
from claimlens.headline import HeadlineFetcher, HeadlineSource
from claimlens.run_logger import RunLogger

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ClaimsPipeline:
    """Analyze a story's coverage claim by claim.

    Flow:
    1. Resolve the headline (fetching the page for URL inputs)
    2. Extract entities and retrieve candidate coverage
    3. Keep one source per ownership group
    4. Extract claims from each source
    5. Cluster near-duplicate claims
    6. Tag every source's stance on every cluster
    7. Categorize clusters as consensus, disputed or missing
    8. Cache the result (best-effort)

    Any ``CollaboratorUnavailable`` aborts the run; nothing partial is cached.

    Args:
        analyst: LLM collaborator for entities, retrieval, claims and stance.
        diversifier: Outlet diversifier (default: ownership groups, 6 sources).
        clusterer: Claim clusterer (default: greedy Jaccard, 0.5, 10 clusters).
        categorizer: Claim categorizer (default: 2/3 consensus ratio).
        cache: Optional analysis cache.
        headline_source: Resolves URL inputs (default: ``HeadlineFetcher``).
        run_logger: Optional RunLogger for intermediate result logging.
        parallel: Run per-source and per-(cluster, source) collaborator calls
            concurrently. Results are reassembled in input order either way.
        outlet_profiles: Known outlet region/leaning table.
    """

    def __init__(
        self,
        analyst: ClaimAnalyst,
        *,
        diversifier: OutletDiversifier | None = None,
        clusterer: ClaimClusterer | None = None,
        categorizer: ClaimCategorizer | None = None,
        cache: AnalysisCache | None = None,
        headline_source: HeadlineSource | None = None,
        run_logger: RunLogger | None = None,
        parallel: bool = False,
        outlet_profiles: Mapping[str, OutletProfile] = KNOWN_OUTLETS,
    ) -> None:
        self._analyst = analyst
        self._diversifier = diversifier or OwnershipDiversifier()
        self._clusterer = clusterer or GreedyClusterer()
        self._categorizer = categorizer or ClaimCategorizer()
        self._cache = cache
        self._headline_source = headline_source or HeadlineFetcher()
        self._run_logger = run_logger
        self._parallel = parallel
        self._outlet_profiles = outlet_profiles

    async def analyze(self, text: str, kind: InputKind = InputKind.HEADLINE) -> Analysis:
        """Run the full pipeline for one headline or URL.

        Args:
            text: A headline, or a page URL when ``kind`` is ``url``.
            kind: What ``text`` is.

        Returns:
            The categorized analysis, with ``analysis_id`` set when caching
            succeeded.

        Raises:
            ValueError: If ``text`` is blank or ``kind`` is unknown.
            CollaboratorUnavailable: If any collaborator call fails.
        """
        kind = InputKind(kind)
        text = text.strip()
        if not text:
            raise ValueError("Input (URL or headline) required")

        if self._run_logger:
            self._run_logger.start_run(text, kind)

        started = time.monotonic()
        try:
            analysis = await self._run(text, kind, started)
        except ClaimLensError as e:
            logger.error(f"Analysis failed for {text!r}: {e}")
            if self._run_logger:
                self._run_logger.finish_run(None, error=str(e))
            raise

        analysis = self._store(analysis)

        if self._run_logger:
            self._run_logger.finish_run(analysis)
        return analysis

    def retrieve(self, analysis_id: str) -> Analysis:
        """Load a cached analysis.

        Raises:
            AnalysisNotFound: If there is no cache or no live record.
        """
        if self._cache is None:
            raise AnalysisNotFound(analysis_id)
        return self._cache.retrieve(analysis_id)

    async def _run(self, text: str, kind: InputKind, started: float) -> Analysis:
        headline = text
        if kind == InputKind.URL:
            t0 = time.monotonic()
            headline = await self._headline_source.fetch_headline(text)
            self._log("headline", self._headline_source, text, headline, t0)

        t0 = time.monotonic()
        entities = await self._analyst.extract_entities(headline)
        self._log("entities", self._analyst, headline, entities, t0)

        t0 = time.monotonic()
        candidates = await self._analyst.retrieve_sources(headline, entities)
        self._log("retrieval", self._analyst, {"entities": entities}, candidates, t0)

        t0 = time.monotonic()
        sources = self._diversifier.diversify(candidates)
        self._log("diversify", self._diversifier, {"source_count": len(candidates)}, sources, t0)
        logger.info(f"Kept {len(sources)} of {len(candidates)} sources for {headline!r}")

        t0 = time.monotonic()
        claims = await self._extract_claims(sources, headline)
        self._log("claims", self._analyst, {"source_count": len(sources)}, claims, t0)

        t0 = time.monotonic()
        clusters = self._clusterer.cluster(claims)
        self._log("cluster", self._clusterer, {"claim_count": len(claims)}, clusters, t0)

        t0 = time.monotonic()
        stances = await self._tag_stances(clusters, sources)
        self._log("stance", self._analyst, {"cluster_count": len(clusters)}, stances, t0)

        t0 = time.monotonic()
        analyzed = [
            self._categorizer.analyze(cluster, outlets)
            for cluster, outlets in zip(clusters, stances, strict=True)
        ]
        self._log("categorize", self._categorizer, {"cluster_count": len(clusters)}, analyzed, t0)

        return self._build(headline, entities, sources, analyzed, started)

    async def _extract_claims(self, sources: list[Source], headline: str) -> list[Claim]:
        if self._parallel:
            per_source = await _run_all(
                [self._analyst.extract_claims(source, headline) for source in sources]
            )
        else:
            per_source = [await self._analyst.extract_claims(s, headline) for s in sources]
        return [claim for claims in per_source for claim in claims]

    async def _tag_stances(
        self,
        clusters: list[ClaimCluster],
        sources: list[Source],
    ) -> list[list[OutletStance]]:
        pairs = [(cluster, source) for cluster in clusters for source in sources]
        if self._parallel:
            flat = await _run_all([self._analyst.tag_stance(c, s) for c, s in pairs])
        else:
            flat = [await self._analyst.tag_stance(c, s) for c, s in pairs]

        width = len(sources)
        return [flat[i * width : (i + 1) * width] for i in range(len(clusters))]

    def _build(
        self,
        headline: str,
        entities: list[str],
        sources: list[Source],
        analyzed: list[AnalyzedClaim],
        started: float,
    ) -> Analysis:
        timestamp = datetime.now(tz=UTC).isoformat()
        return Analysis(
            headline=headline,
            entities=tuple(entities),
            timestamp=timestamp,
            sources=tuple(sources),
            outlets=tuple(profile_for(s.domain, self._outlet_profiles) for s in sources),
            consensus=tuple(c for c in analyzed if c.category == ClaimCategory.CONSENSUS),
            disputed=tuple(c for c in analyzed if c.category == ClaimCategory.DISPUTED),
            missing=tuple(c for c in analyzed if c.category == ClaimCategory.MISSING),
            meta=AnalysisMeta(
                latency_ms=int((time.monotonic() - started) * 1000),
                article_count=len(sources),
                timestamp=timestamp,
            ),
        )

    def _store(self, analysis: Analysis) -> Analysis:
        if self._cache is None:
            return analysis
        try:
            analysis_id = self._cache.store(analysis)
        except CacheWriteFailure as e:
            logger.warning(f"Could not cache analysis, returning it without an id: {e}")
            return analysis
        return dataclasses.replace(analysis, analysis_id=analysis_id)

    def _log(
        self,
        stage: str,
        component: object,
        input_data: object,
        output_data: object,
        t0: float,
    ) -> None:
        if self._run_logger:
            self._run_logger.log_stage(
                stage=stage,
                component=type(component).__name__,
                input_data=input_data,
                output_data=output_data,
                duration_seconds=time.monotonic() - t0,
            )


async def _run_all(coros: list[Coroutine[Any, Any, T]]) -> list[T]:
    """Await coroutines concurrently, returning results in input order.

    The first failure cancels the remaining calls and is re-raised as-is.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(coro) for coro in coros]
    except ExceptionGroup as eg:
        errors = [e for e in eg.exceptions if isinstance(e, ClaimLensError)]
        raise (errors or list(eg.exceptions))[0] from None
    return [task.result() for task in tasks]
