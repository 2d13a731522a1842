"""Tests for ClaimsPipeline."""

import asyncio
import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from claimlens.cache import InMemoryAnalysisCache
from claimlens.data import (
    Analysis,
    Claim,
    ClaimCluster,
    InputKind,
    OutletStance,
    Source,
    Stance,
)
from claimlens.errors import AnalysisNotFound, CacheWriteFailure, CollaboratorUnavailable
from claimlens.headline import HeadlineFetcher
from claimlens.pipeline import ClaimsPipeline
from claimlens.run_logger import RunLogger

HEADLINE = "Company X raises $10 million"

CLAIMS_BY_DOMAIN = {
    "bbc.com": ["Company X raised $10 million"],
    "reuters.com": ["X raised 10 million dollars"],
    "apnews.com": ["Weather was sunny"],
}

# (cluster canonical text, domain) -> stance; anything else is not mentioned
STANCES = {
    ("Company X raised $10 million", "bbc.com"): Stance.SUPPORTS,
    ("Company X raised $10 million", "reuters.com"): Stance.SUPPORTS,
    ("Company X raised $10 million", "apnews.com"): Stance.SUPPORTS,
    ("Weather was sunny", "apnews.com"): Stance.SUPPORTS,
}

DELAYS = {"bbc.com": 0.03, "reuters.com": 0.02, "apnews.com": 0.0}


async def _extract_claims(source: Source, headline: str) -> list[Claim]:
    await asyncio.sleep(DELAYS.get(source.domain, 0.0))
    return [Claim(text=text, source=source) for text in CLAIMS_BY_DOMAIN.get(source.domain, [])]


async def _tag_stance(cluster: ClaimCluster, source: Source) -> OutletStance:
    await asyncio.sleep(DELAYS.get(source.domain, 0.0))
    stance = STANCES.get((cluster.canonical_text, source.domain), Stance.NOT_MENTIONED)
    return OutletStance(domain=source.domain, url=source.url, stance=stance, confidence=0.9)


@pytest.fixture
def mock_analyst() -> MagicMock:
    """Create a scripted collaborator."""
    analyst = MagicMock()
    analyst.extract_entities = AsyncMock(return_value=["Company X"])
    analyst.retrieve_sources = AsyncMock(
        return_value=[
            Source.from_url("https://www.bbc.com/news/1"),
            Source.from_url("https://www.bbc.co.uk/news/2"),
            Source.from_url("https://www.reuters.com/business/3"),
            Source.from_url("https://apnews.com/article/4"),
        ]
    )
    analyst.extract_claims = AsyncMock(side_effect=_extract_claims)
    analyst.tag_stance = AsyncMock(side_effect=_tag_stance)
    return analyst


@pytest.fixture
def mock_headline_source() -> MagicMock:
    source = MagicMock()
    source.fetch_headline = AsyncMock(return_value=HEADLINE)
    return source


def _summary(analysis: Analysis) -> list[tuple[str, str, list[tuple[str, str]]]]:
    return [
        (c.claim_id, c.category.value, [(o.domain, o.stance.value) for o in c.outlets])
        for c in analysis.claims
    ]


class TestClaimsPipeline:
    """Tests for ClaimsPipeline."""

    @pytest.fixture
    def cache(self) -> InMemoryAnalysisCache:
        return InMemoryAnalysisCache()

    @pytest.fixture
    def pipeline(
        self,
        mock_analyst: MagicMock,
        mock_headline_source: MagicMock,
        cache: InMemoryAnalysisCache,
    ) -> ClaimsPipeline:
        return ClaimsPipeline(
            mock_analyst,
            cache=cache,
            headline_source=mock_headline_source,
        )

    async def test_analyze_headline(self, pipeline: ClaimsPipeline) -> None:
        analysis = await pipeline.analyze(HEADLINE)

        assert analysis.headline == HEADLINE
        assert analysis.entities == ("Company X",)
        assert [s.domain for s in analysis.sources] == ["bbc.com", "reuters.com", "apnews.com"]
        assert [c.canonical_text for c in analysis.consensus] == ["Company X raised $10 million"]
        assert [c.canonical_text for c in analysis.missing] == ["Weather was sunny"]
        assert analysis.disputed == ()
        assert analysis.meta.article_count == 3
        assert analysis.meta.timestamp == analysis.timestamp

    async def test_every_cluster_has_one_stance_per_source(
        self, pipeline: ClaimsPipeline
    ) -> None:
        analysis = await pipeline.analyze(HEADLINE)
        domains = [s.domain for s in analysis.sources]
        for claim in analysis.claims:
            assert [o.domain for o in claim.outlets] == domains

    async def test_analyze_passes_entities_to_retrieval(
        self, pipeline: ClaimsPipeline, mock_analyst: MagicMock
    ) -> None:
        await pipeline.analyze(HEADLINE)
        mock_analyst.extract_entities.assert_awaited_once_with(HEADLINE)
        mock_analyst.retrieve_sources.assert_awaited_once_with(HEADLINE, ["Company X"])

    async def test_claims_extracted_only_from_diversified_sources(
        self, pipeline: ClaimsPipeline, mock_analyst: MagicMock
    ) -> None:
        await pipeline.analyze(HEADLINE)
        domains = [call.args[0].domain for call in mock_analyst.extract_claims.await_args_list]
        assert domains == ["bbc.com", "reuters.com", "apnews.com"]
        assert mock_analyst.tag_stance.await_count == 2 * 3

    async def test_outlet_profiles(self, pipeline: ClaimsPipeline) -> None:
        analysis = await pipeline.analyze(HEADLINE)
        assert [p.domain for p in analysis.outlets] == ["bbc.com", "reuters.com", "apnews.com"]
        assert analysis.outlets[0].region == "UK"

    async def test_analyze_caches_result(
        self, pipeline: ClaimsPipeline, cache: InMemoryAnalysisCache
    ) -> None:
        analysis = await pipeline.analyze(HEADLINE)

        assert analysis.analysis_id is not None
        assert pipeline.retrieve(analysis.analysis_id) == analysis
        assert len(cache) == 1

    async def test_url_input_resolves_headline(
        self,
        pipeline: ClaimsPipeline,
        mock_analyst: MagicMock,
        mock_headline_source: MagicMock,
    ) -> None:
        analysis = await pipeline.analyze("https://example.com/story", InputKind.URL)

        mock_headline_source.fetch_headline.assert_awaited_once_with("https://example.com/story")
        mock_analyst.extract_entities.assert_awaited_once_with(HEADLINE)
        assert analysis.headline == HEADLINE

    async def test_kind_accepts_string(
        self, pipeline: ClaimsPipeline, mock_headline_source: MagicMock
    ) -> None:
        await pipeline.analyze("https://example.com/story", "url")  # type: ignore[arg-type]
        mock_headline_source.fetch_headline.assert_awaited_once()

    async def test_headline_input_does_not_fetch(
        self, pipeline: ClaimsPipeline, mock_headline_source: MagicMock
    ) -> None:
        await pipeline.analyze(HEADLINE)
        mock_headline_source.fetch_headline.assert_not_awaited()

    async def test_blank_input_rejected(self, pipeline: ClaimsPipeline) -> None:
        with pytest.raises(ValueError, match="required"):
            await pipeline.analyze("   ")

    async def test_unknown_kind_rejected(self, pipeline: ClaimsPipeline) -> None:
        with pytest.raises(ValueError):
            await pipeline.analyze(HEADLINE, "tweet")  # type: ignore[arg-type]

    async def test_parallel_matches_serial(
        self, mock_analyst: MagicMock, mock_headline_source: MagicMock
    ) -> None:
        serial = await ClaimsPipeline(
            mock_analyst, headline_source=mock_headline_source
        ).analyze(HEADLINE)
        parallel = await ClaimsPipeline(
            mock_analyst, headline_source=mock_headline_source, parallel=True
        ).analyze(HEADLINE)

        assert _summary(parallel) == _summary(serial)
        assert parallel.sources == serial.sources

    async def test_no_sources(
        self, pipeline: ClaimsPipeline, mock_analyst: MagicMock
    ) -> None:
        mock_analyst.retrieve_sources = AsyncMock(return_value=[])

        analysis = await pipeline.analyze(HEADLINE)

        assert analysis.sources == ()
        assert analysis.claims == ()
        mock_analyst.extract_claims.assert_not_awaited()
        mock_analyst.tag_stance.assert_not_awaited()

    async def test_collaborator_failure_aborts_without_caching(
        self,
        pipeline: ClaimsPipeline,
        mock_analyst: MagicMock,
        cache: InMemoryAnalysisCache,
    ) -> None:
        mock_analyst.tag_stance = AsyncMock(side_effect=CollaboratorUnavailable("timeout"))

        with pytest.raises(CollaboratorUnavailable):
            await pipeline.analyze(HEADLINE)
        assert len(cache) == 0

    async def test_parallel_failure_cancels_pending_calls(
        self, mock_analyst: MagicMock, mock_headline_source: MagicMock
    ) -> None:
        completed: list[str] = []

        async def extract_claims(source: Source, headline: str) -> list[Claim]:
            if source.domain == "apnews.com":
                raise CollaboratorUnavailable("apnews.com unreachable")
            await asyncio.sleep(0.05)
            completed.append(source.domain)
            return []

        mock_analyst.extract_claims = AsyncMock(side_effect=extract_claims)
        cache = InMemoryAnalysisCache()
        pipeline = ClaimsPipeline(
            mock_analyst, cache=cache, headline_source=mock_headline_source, parallel=True
        )

        with pytest.raises(CollaboratorUnavailable, match="apnews.com unreachable"):
            await pipeline.analyze(HEADLINE)
        await asyncio.sleep(0.1)

        assert completed == []
        mock_analyst.tag_stance.assert_not_awaited()
        assert len(cache) == 0

    async def test_parallel_stance_failure_aborts(
        self, mock_analyst: MagicMock, mock_headline_source: MagicMock
    ) -> None:
        async def tag_stance(cluster: ClaimCluster, source: Source) -> OutletStance:
            if source.domain == "reuters.com":
                raise CollaboratorUnavailable("stance timeout")
            return await _tag_stance(cluster, source)

        mock_analyst.tag_stance = AsyncMock(side_effect=tag_stance)
        pipeline = ClaimsPipeline(
            mock_analyst, headline_source=mock_headline_source, parallel=True
        )

        with pytest.raises(CollaboratorUnavailable, match="stance timeout"):
            await pipeline.analyze(HEADLINE)

    async def test_headline_fetch_failure_aborts(
        self, pipeline: ClaimsPipeline, mock_headline_source: MagicMock, mock_analyst: MagicMock
    ) -> None:
        mock_headline_source.fetch_headline = AsyncMock(
            side_effect=CollaboratorUnavailable("refused")
        )

        with pytest.raises(CollaboratorUnavailable):
            await pipeline.analyze("https://example.com/story", InputKind.URL)
        mock_analyst.extract_entities.assert_not_awaited()

    async def test_cache_write_failure_still_returns_analysis(
        self, mock_analyst: MagicMock, mock_headline_source: MagicMock
    ) -> None:
        cache = MagicMock()
        cache.store = MagicMock(side_effect=CacheWriteFailure("disk full"))
        pipeline = ClaimsPipeline(mock_analyst, cache=cache, headline_source=mock_headline_source)

        analysis = await pipeline.analyze(HEADLINE)

        assert analysis.analysis_id is None
        assert len(analysis.claims) == 2

    def test_retrieve_without_cache(self, mock_analyst: MagicMock) -> None:
        with pytest.raises(AnalysisNotFound):
            ClaimsPipeline(mock_analyst).retrieve("analysis-123")

    def test_retrieve_unknown_id(self, pipeline: ClaimsPipeline) -> None:
        with pytest.raises(AnalysisNotFound):
            pipeline.retrieve("analysis-123")


class TestClaimsPipelineRunLogging:
    """Tests for run logging from ClaimsPipeline."""

    async def test_logs_every_stage(
        self, mock_analyst: MagicMock, mock_headline_source: MagicMock, tmp_path: Path
    ) -> None:
        run_logger = RunLogger(tmp_path)
        pipeline = ClaimsPipeline(
            mock_analyst,
            headline_source=mock_headline_source,
            run_logger=run_logger,
        )

        await pipeline.analyze("https://example.com/story", InputKind.URL)

        assert run_logger.last_log_path is not None
        data = json.loads(run_logger.last_log_path.read_text())
        assert data["kind"] == "url"
        assert [s["stage"] for s in data["stages"]] == [
            "headline",
            "entities",
            "retrieval",
            "diversify",
            "claims",
            "cluster",
            "stance",
            "categorize",
        ]
        assert data["claim_counts"] == {"consensus": 1, "disputed": 0, "missing": 1}
        assert data["error"] is None

    async def test_logs_failed_run(
        self, mock_analyst: MagicMock, mock_headline_source: MagicMock, tmp_path: Path
    ) -> None:
        mock_analyst.retrieve_sources = AsyncMock(side_effect=CollaboratorUnavailable("503"))
        run_logger = RunLogger(tmp_path)
        pipeline = ClaimsPipeline(
            mock_analyst,
            headline_source=mock_headline_source,
            run_logger=run_logger,
        )

        with pytest.raises(CollaboratorUnavailable):
            await pipeline.analyze(HEADLINE)

        assert run_logger.last_log_path is not None
        data = json.loads(run_logger.last_log_path.read_text())
        assert data["error"] == "503"
        assert [s["stage"] for s in data["stages"]] == ["entities"]
        assert data["claim_counts"] is None

    async def test_logs_malformed_url_input(
        self, mock_analyst: MagicMock, tmp_path: Path
    ) -> None:
        run_logger = RunLogger(tmp_path)
        pipeline = ClaimsPipeline(
            mock_analyst,
            headline_source=HeadlineFetcher(),
            run_logger=run_logger,
        )

        with pytest.raises(CollaboratorUnavailable, match="not an http"):
            await pipeline.analyze("http://[::1", InputKind.URL)

        assert run_logger.last_log_path is not None
        data = json.loads(run_logger.last_log_path.read_text())
        assert "not an http" in data["error"]
        assert data["stages"] == []
        mock_analyst.extract_entities.assert_not_awaited()
