"""Pydantic configuration models for ClaimLens components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

# ============================================================
# Analyst Configs
# ============================================================


class PerplexityAnalystConfig(BaseModel):
    """Configuration for PerplexityAnalyst."""

    type: Literal["perplexity"] = "perplexity"
    model: str = "sonar"
    timeout: float = 60.0
    temperature: float = 0.2
    max_candidates: int = Field(default=10, ge=1)
    max_claims_per_source: int = Field(default=5, ge=1)

    model_config = {"frozen": True}


class ClaudeAnalystConfig(BaseModel):
    """Configuration for ClaudeAnalyst."""

    type: Literal["claude"] = "claude"
    model: str = "claude-haiku-4-5-20251001"
    max_searches_per_call: int = Field(default=3, ge=1)
    max_candidates: int = Field(default=10, ge=1)
    max_claims_per_source: int = Field(default=5, ge=1)

    model_config = {"frozen": True}


AnalystConfig = Annotated[
    PerplexityAnalystConfig | ClaudeAnalystConfig,
    Field(discriminator="type"),
]


# ============================================================
# Diversifier Config
# ============================================================


class DiversifierConfig(BaseModel):
    """Configuration for OwnershipDiversifier.

    ``ownership_groups`` entries are merged over the built-in mapping.
    """

    max_sources: int = Field(default=6, ge=0)
    ownership_groups: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}


# ============================================================
# Similarity Configs
# ============================================================


class JaccardSimilarityConfig(BaseModel):
    """Word-overlap similarity (default)."""

    type: Literal["jaccard"] = "jaccard"

    model_config = {"frozen": True}


class EmbeddingSimilarityConfig(BaseModel):
    """Sentence-transformer cosine similarity."""

    type: Literal["embedding"] = "embedding"
    sentence_transformer_model: str = "all-MiniLM-L6-v2"

    model_config = {"frozen": True}


SimilarityConfig = Annotated[
    JaccardSimilarityConfig | EmbeddingSimilarityConfig,
    Field(discriminator="type"),
]


class ClusteringConfig(BaseModel):
    """Configuration for GreedyClusterer."""

    similarity: SimilarityConfig = Field(default_factory=JaccardSimilarityConfig)
    threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    max_clusters: int = Field(default=10, ge=0)

    model_config = {"frozen": True}


# ============================================================
# Categorizer Config
# ============================================================


class CategorizerConfig(BaseModel):
    """Configuration for ClaimCategorizer."""

    consensus_ratio: float = Field(default=2 / 3, gt=0.0, le=1.0)

    model_config = {"frozen": True}


# ============================================================
# Cache Configs
# ============================================================


class MemoryCacheConfig(BaseModel):
    """In-process analysis cache."""

    type: Literal["memory"] = "memory"
    ttl_hours: float | None = 48.0

    model_config = {"frozen": True}


class FileCacheConfig(BaseModel):
    """JSON-file analysis cache."""

    type: Literal["file"] = "file"
    cache_dir: str = "analyses"
    ttl_hours: float | None = 48.0

    model_config = {"frozen": True}


CacheConfig = Annotated[
    MemoryCacheConfig | FileCacheConfig,
    Field(discriminator="type"),
]


# ============================================================
# Pipeline Config
# ============================================================


class PipelineConfig(BaseModel):
    """Configuration for ClaimsPipeline."""

    parallel: bool = False
    headline_timeout: float = 30.0

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for intermediate pipeline logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class ClaimLensConfig(BaseModel):
    """Root configuration for ClaimLens."""

    analyst: AnalystConfig = Field(default_factory=PerplexityAnalystConfig)
    diversifier: DiversifierConfig = Field(default_factory=DiversifierConfig)
    clustering: ClusteringConfig = Field(default_factory=ClusteringConfig)
    categorizer: CategorizerConfig = Field(default_factory=CategorizerConfig)
    cache: CacheConfig = Field(default_factory=MemoryCacheConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
