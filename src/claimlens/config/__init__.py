"""Configuration module for ClaimLens."""

from claimlens.config.factory import create_from_config
from claimlens.config.loader import get_default_config_path, load_config
from claimlens.config.models import (
    AnalystConfig,
    CacheConfig,
    CategorizerConfig,
    ClaimLensConfig,
    ClaudeAnalystConfig,
    ClusteringConfig,
    DiversifierConfig,
    EmbeddingSimilarityConfig,
    FileCacheConfig,
    JaccardSimilarityConfig,
    LoggingConfig,
    MemoryCacheConfig,
    PerplexityAnalystConfig,
    PipelineConfig,
    SimilarityConfig,
)

__all__ = [
    "AnalystConfig",
    "CacheConfig",
    "CategorizerConfig",
    "ClaimLensConfig",
    "ClaudeAnalystConfig",
    "ClusteringConfig",
    "DiversifierConfig",
    "EmbeddingSimilarityConfig",
    "FileCacheConfig",
    "JaccardSimilarityConfig",
    "LoggingConfig",
    "MemoryCacheConfig",
    "PerplexityAnalystConfig",
    "PipelineConfig",
    "SimilarityConfig",
    "create_from_config",
    "get_default_config_path",
    "load_config",
]
