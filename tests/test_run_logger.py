"""Tests for RunLogger and serialization helpers."""

import json
from pathlib import Path

from claimlens.data import (
    Analysis,
    AnalyzedClaim,
    ClaimCategory,
    InputKind,
    OutletStance,
    Source,
    Stance,
)
from claimlens.run_logger import RunLogger, StageRecord, _serialize

# -- _serialize tests --


def test_serialize_none() -> None:
    assert _serialize(None) is None


def test_serialize_primitive() -> None:
    assert _serialize(42) == 42
    assert _serialize("hello") == "hello"
    assert _serialize(3.14) == 3.14
    assert _serialize(True) is True


def test_serialize_enum() -> None:
    assert _serialize(Stance.NOT_MENTIONED) == "not_mentioned"


def test_serialize_tuple() -> None:
    assert _serialize((1, "two", None)) == [1, "two", None]


def test_serialize_dict() -> None:
    assert _serialize({"a": 1, "b": "two"}) == {"a": 1, "b": "two"}


def test_serialize_path() -> None:
    assert _serialize(Path("/tmp/x")) == "/tmp/x"


def test_serialize_nested_dataclass() -> None:
    source = Source.from_url("https://www.bbc.com/1")
    claim = AnalyzedClaim(
        claim_id="claim-1",
        canonical_text="text",
        outlets=(OutletStance("bbc.com", source.url, Stance.SUPPORTS, "q", 0.8),),
        category=ClaimCategory.CONSENSUS,
    )
    result = _serialize(claim)
    assert result["category"] == "consensus"
    assert result["outlets"][0] == {
        "domain": "bbc.com",
        "url": "https://www.bbc.com/1",
        "stance": "supports",
        "quote": "q",
        "confidence": 0.8,
    }


def test_serialize_pydantic_model() -> None:
    record = StageRecord(stage="cluster", component="GreedyClusterer")
    assert _serialize(record)["stage"] == "cluster"


# -- RunLogger tests --


def _analysis(analysis_id: str | None = "analysis-1") -> Analysis:
    return Analysis(
        headline="h",
        entities=(),
        timestamp="2026-03-01T12:00:00+00:00",
        sources=(),
        analysis_id=analysis_id,
    )


def test_disabled_logger_is_noop(tmp_path: Path) -> None:
    run_logger = RunLogger(tmp_path, enabled=False)
    run_logger.start_run("h", InputKind.HEADLINE)
    run_logger.log_stage("entities", "X", "h", ["a"], 0.1)
    assert run_logger.finish_run(_analysis()) is None
    assert list(tmp_path.iterdir()) == []


def test_finish_without_start_is_noop(tmp_path: Path) -> None:
    assert RunLogger(tmp_path).finish_run(_analysis()) is None


def test_writes_run_file(tmp_path: Path) -> None:
    run_logger = RunLogger(tmp_path / "logs")
    run_logger.start_run("Storm hits coast", InputKind.HEADLINE)
    run_logger.log_stage("entities", "PerplexityAnalyst", "Storm hits coast", ["Storm"], 0.5)

    path = run_logger.finish_run(_analysis())

    assert path is not None
    assert path == run_logger.last_log_path
    assert path.name.startswith("run_")
    assert ":" not in path.name
    data = json.loads(path.read_text())
    assert data["input"] == "Storm hits coast"
    assert data["kind"] == "headline"
    assert data["analysis_id"] == "analysis-1"
    assert data["claim_counts"] == {"consensus": 0, "disputed": 0, "missing": 0}
    assert data["completed_at"] is not None
    stage = data["stages"][0]
    assert stage["component"] == "PerplexityAnalyst"
    assert stage["output"] == ["Storm"]
    assert stage["duration_seconds"] == 0.5


def test_records_error(tmp_path: Path) -> None:
    run_logger = RunLogger(tmp_path)
    run_logger.start_run("https://example.com", InputKind.URL)

    path = run_logger.finish_run(None, error="Perplexity API error: 503")

    assert path is not None
    data = json.loads(path.read_text())
    assert data["error"] == "Perplexity API error: 503"
    assert data["analysis_id"] is None
    assert data["kind"] == "url"


def test_each_run_gets_new_file(tmp_path: Path) -> None:
    run_logger = RunLogger(tmp_path)
    run_logger.start_run("a", InputKind.HEADLINE)
    first = run_logger.finish_run(_analysis())
    run_logger.start_run("b", InputKind.HEADLINE)
    second = run_logger.finish_run(_analysis())
    assert first != second
    assert len(list(tmp_path.iterdir())) == 2
