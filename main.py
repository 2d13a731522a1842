#!/usr/bin/env python
"""CLI for the ClaimLens claim analysis pipeline."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, field_validator, model_validator

from claimlens.config import create_from_config, get_default_config_path, load_config
from claimlens.data import Analysis, InputKind
from claimlens.diversity import coverage_diversity_score
from claimlens.errors import AnalysisNotFound, ClaimLensError
from claimlens.export import analysis_to_csv
from claimlens.url import is_http_url

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    input: str | None = None
    kind: InputKind | None = None
    lookup: str | None = None
    config: Path
    log: bool = False
    log_dir: str = "logs"
    csv: Path | None = None

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v

    @model_validator(mode="after")
    def input_or_lookup(self) -> "CLIArgs":
        if bool(self.input) == bool(self.lookup):
            raise ValueError("Pass either a headline/URL or --lookup ID")
        if self.input and self.kind is None:
            self.kind = InputKind.URL if is_http_url(self.input) else InputKind.HEADLINE
        return self


def report(analysis: Analysis) -> None:
    """Log a human-readable summary of an analysis."""
    logger.info(f"\nHeadline: {analysis.headline}")
    if analysis.analysis_id:
        logger.info(f"Analysis ID: {analysis.analysis_id}")
    logger.info(f"Entities: {', '.join(analysis.entities) or '-'}")

    logger.info(f"\nOutlets ({len(analysis.sources)}):")
    for source, profile in zip(analysis.sources, analysis.outlets, strict=False):
        logger.info(f"  {source.domain} [{profile.region}, {profile.leaning}]  {source.url}")
    logger.info(f"Diversity score: {coverage_diversity_score(analysis.outlets)}/100")

    for label, claims in (
        ("Consensus", analysis.consensus),
        ("Disputed", analysis.disputed),
        ("Missing", analysis.missing),
    ):
        logger.info(f"\n--- {label} ({len(claims)}) ---")
        for claim in claims:
            logger.info(f"{claim.claim_id}: {claim.canonical_text}")
            for outlet in claim.outlets:
                logger.info(f"   {outlet.domain}: {outlet.stance} ({outlet.confidence:.2f})")

    logger.info(f"\nLatency: {analysis.meta.latency_ms} ms")


async def run(args: CLIArgs) -> None:
    """Execute the pipeline (or a cache lookup) with the given configuration.

    Args:
        args: Validated CLI arguments.
    """
    config = load_config(args.config)
    pipeline, run_logger, _cache = create_from_config(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )

    if args.lookup:
        analysis = pipeline.retrieve(args.lookup)
    else:
        assert args.input is not None and args.kind is not None
        logger.info(f"Analyzing {args.kind}: {args.input}")
        logger.info(f"Config: {args.config}")
        analysis = await pipeline.analyze(args.input, args.kind)

    report(analysis)

    if args.csv:
        args.csv.write_text(analysis_to_csv(analysis))
        logger.info(f"CSV written to: {args.csv}")

    if run_logger and run_logger.last_log_path:
        logger.info(f"\nRun log written to: {run_logger.last_log_path}")


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Compare how news outlets cover the claims in a story."
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Headline or article URL",
    )
    parser.add_argument(
        "--kind",
        choices=[k.value for k in InputKind],
        default=None,
        help="Treat input as a headline or URL (default: detect)",
    )
    parser.add_argument(
        "--lookup",
        metavar="ID",
        default=None,
        help="Print a cached analysis instead of running the pipeline",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Enable intermediate pipeline logging to JSON file",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )
    parser.add_argument(
        "--csv",
        type=Path,
        default=None,
        help="Also write the claims table to this CSV file",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            input=ns.input,
            kind=ns.kind,
            lookup=ns.lookup,
            config=config_path,
            log=ns.log,
            log_dir=ns.log_dir,
            csv=ns.csv,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        asyncio.run(run(args))
    except AnalysisNotFound as e:
        logger.error(str(e))
        sys.exit(2)
    except ClaimLensError as e:
        logger.error(f"Analysis failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
