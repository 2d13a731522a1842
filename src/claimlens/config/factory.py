"""Factory functions to create components from configuration."""

from pathlib import Path

from claimlens.analyst.base import ClaimAnalyst
from claimlens.analyst.claude import ClaudeAnalyst
from claimlens.analyst.perplexity import PerplexityAnalyst
from claimlens.cache.base import AnalysisCache
from claimlens.cache.file import JsonFileAnalysisCache
from claimlens.cache.memory import InMemoryAnalysisCache
from claimlens.categorizer import ClaimCategorizer
from claimlens.clustering import GreedyClusterer, JaccardSimilarity
from claimlens.clustering.base import ClaimSimilarity
from claimlens.config.models import (
    CategorizerConfig,
    ClaimLensConfig,
    ClaudeAnalystConfig,
    ClusteringConfig,
    DiversifierConfig,
    EmbeddingSimilarityConfig,
    FileCacheConfig,
    JaccardSimilarityConfig,
    MemoryCacheConfig,
    PerplexityAnalystConfig,
)
from claimlens.diversity import DEFAULT_OWNERSHIP_GROUPS, OwnershipDiversifier
from claimlens.headline import HeadlineFetcher
from claimlens.pipeline.claims import ClaimsPipeline
from claimlens.run_logger import RunLogger


def create_analyst(config: PerplexityAnalystConfig | ClaudeAnalystConfig) -> ClaimAnalyst:
    """Create an analyst from config.

    Uses explicit type matching rather than getattr.
    """
    if isinstance(config, PerplexityAnalystConfig):
        return PerplexityAnalyst(
            model=config.model,
            timeout=config.timeout,
            temperature=config.temperature,
            max_candidates=config.max_candidates,
            max_claims_per_source=config.max_claims_per_source,
        )
    if isinstance(config, ClaudeAnalystConfig):
        return ClaudeAnalyst(
            model=config.model,
            max_searches_per_call=config.max_searches_per_call,
            max_candidates=config.max_candidates,
            max_claims_per_source=config.max_claims_per_source,
        )
    msg = f"Unknown analyst config type: {type(config)}"
    raise ValueError(msg)


def create_diversifier(config: DiversifierConfig) -> OwnershipDiversifier:
    """Create an outlet diversifier from config."""
    groups = {**DEFAULT_OWNERSHIP_GROUPS, **config.ownership_groups}
    return OwnershipDiversifier(max_sources=config.max_sources, groups=groups)


def create_similarity(
    config: JaccardSimilarityConfig | EmbeddingSimilarityConfig,
) -> ClaimSimilarity:
    """Create a claim similarity measure from config."""
    if isinstance(config, JaccardSimilarityConfig):
        return JaccardSimilarity()
    if isinstance(config, EmbeddingSimilarityConfig):
        # Imported lazily: loading sentence-transformers is slow
        from claimlens.clustering.embeddings import EmbeddingSimilarity

        return EmbeddingSimilarity(model_name=config.sentence_transformer_model)
    msg = f"Unknown similarity config type: {type(config)}"
    raise ValueError(msg)


def create_clusterer(config: ClusteringConfig) -> GreedyClusterer:
    """Create a claim clusterer from config."""
    return GreedyClusterer(
        similarity=create_similarity(config.similarity),
        threshold=config.threshold,
        max_clusters=config.max_clusters,
    )


def create_categorizer(config: CategorizerConfig) -> ClaimCategorizer:
    """Create a claim categorizer from config."""
    return ClaimCategorizer(consensus_ratio=config.consensus_ratio)


def create_cache(config: MemoryCacheConfig | FileCacheConfig) -> AnalysisCache:
    """Create an analysis cache from config."""
    if isinstance(config, MemoryCacheConfig):
        return InMemoryAnalysisCache(ttl_hours=config.ttl_hours)
    if isinstance(config, FileCacheConfig):
        return JsonFileAnalysisCache(config.cache_dir, ttl_hours=config.ttl_hours)
    msg = f"Unknown cache config type: {type(config)}"
    raise ValueError(msg)


def create_from_config(
    config: ClaimLensConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[ClaimsPipeline, RunLogger | None, AnalysisCache]:
    """Create a complete pipeline from root config.

    Args:
        config: Root configuration.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (pipeline, run_logger, cache).
        run_logger is None if logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    cache = create_cache(config.cache)
    pipeline = ClaimsPipeline(
        create_analyst(config.analyst),
        diversifier=create_diversifier(config.diversifier),
        clusterer=create_clusterer(config.clustering),
        categorizer=create_categorizer(config.categorizer),
        cache=cache,
        headline_source=HeadlineFetcher(timeout=config.pipeline.headline_timeout),
        run_logger=run_logger,
        parallel=config.pipeline.parallel,
    )
    return (pipeline, run_logger, cache)
