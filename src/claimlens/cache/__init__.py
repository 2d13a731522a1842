"""Analysis cache module."""

from claimlens.cache.base import DEFAULT_TTL_HOURS, AnalysisCache, AnalysisRecord
from claimlens.cache.file import JsonFileAnalysisCache
from claimlens.cache.memory import InMemoryAnalysisCache

__all__ = [
    "AnalysisCache",
    "AnalysisRecord",
    "DEFAULT_TTL_HOURS",
    "InMemoryAnalysisCache",
    "JsonFileAnalysisCache",
]
