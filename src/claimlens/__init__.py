"""ClaimLens: claim-level comparison of how news outlets cover a story."""

from claimlens.analyst import ClaimAnalyst, ClaudeAnalyst, PerplexityAnalyst, PromptedAnalyst
from claimlens.cache import (
    AnalysisCache,
    AnalysisRecord,
    InMemoryAnalysisCache,
    JsonFileAnalysisCache,
)
from claimlens.categorizer import ClaimCategorizer, StanceCounts, categorize
from claimlens.clustering import (
    ClaimClusterer,
    ClaimSimilarity,
    GreedyClusterer,
    JaccardSimilarity,
    jaccard_similarity,
)
from claimlens.config import ClaimLensConfig, create_from_config, load_config
from claimlens.data import (
    Analysis,
    AnalysisMeta,
    AnalyzedClaim,
    Claim,
    ClaimCategory,
    ClaimCluster,
    InputKind,
    NumberMention,
    OutletProfile,
    OutletStance,
    Source,
    Stance,
)
from claimlens.diversity import (
    OutletDiversifier,
    OwnershipDiversifier,
    coverage_diversity_score,
    ownership_group,
)
from claimlens.errors import (
    AnalysisNotFound,
    CacheWriteFailure,
    ClaimLensError,
    CollaboratorUnavailable,
    MalformedCollaboratorResponse,
)
from claimlens.export import analysis_to_csv
from claimlens.headline import HeadlineFetcher
from claimlens.pipeline import ClaimsPipeline, Pipeline
from claimlens.run_logger import RunLogger
from claimlens.url import extract_domain

__all__ = [
    # Models
    "Analysis",
    "AnalysisMeta",
    "AnalyzedClaim",
    "Claim",
    "ClaimCategory",
    "ClaimCluster",
    "InputKind",
    "NumberMention",
    "OutletProfile",
    "OutletStance",
    "Source",
    "Stance",
    # Errors
    "AnalysisNotFound",
    "CacheWriteFailure",
    "ClaimLensError",
    "CollaboratorUnavailable",
    "MalformedCollaboratorResponse",
    # Functions
    "analysis_to_csv",
    "categorize",
    "coverage_diversity_score",
    "extract_domain",
    "jaccard_similarity",
    "ownership_group",
    # Protocols
    "AnalysisCache",
    "ClaimAnalyst",
    "ClaimClusterer",
    "ClaimSimilarity",
    "OutletDiversifier",
    "Pipeline",
    # Analysts
    "ClaudeAnalyst",
    "PerplexityAnalyst",
    "PromptedAnalyst",
    "HeadlineFetcher",
    # Core
    "ClaimCategorizer",
    "GreedyClusterer",
    "JaccardSimilarity",
    "OwnershipDiversifier",
    "StanceCounts",
    # Caches
    "AnalysisRecord",
    "InMemoryAnalysisCache",
    "JsonFileAnalysisCache",
    # Pipelines
    "ClaimsPipeline",
    # Logging
    "RunLogger",
    # Config
    "ClaimLensConfig",
    "create_from_config",
    "load_config",
]
