"""Pipeline module for end-to-end claim analysis."""

from claimlens.pipeline.base import Pipeline
from claimlens.pipeline.claims import ClaimsPipeline

__all__ = [
    "ClaimsPipeline",
    "Pipeline",
]
