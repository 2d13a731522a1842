"""Protocol and stored-record model for the analysis cache."""

import uuid
from datetime import datetime, timedelta
from typing import Any, Protocol

from pydantic import BaseModel, TypeAdapter

from claimlens.data import Analysis

DEFAULT_TTL_HOURS = 48.0

_ANALYSIS_ADAPTER: TypeAdapter[Analysis] = TypeAdapter(Analysis)


class AnalysisCache(Protocol):
    """Interface for persisting completed analyses."""

    def store(self, analysis: Analysis) -> str:
        """Persist an analysis under a fresh opaque id.

        Raises:
            CacheWriteFailure: If the underlying storage fails.
        """
        ...

    def retrieve(self, analysis_id: str) -> Analysis:
        """Load a stored analysis.

        Raises:
            AnalysisNotFound: If no live record exists under ``analysis_id``.
        """
        ...


class AnalysisRecord(BaseModel):
    """Stored form of one analysis."""

    id: str
    created_at: str
    expire_at: str | None = None
    analysis: dict[str, Any]

    def is_expired(self, now: datetime) -> bool:
        return self.expire_at is not None and datetime.fromisoformat(self.expire_at) <= now

    def to_analysis(self) -> Analysis:
        return _ANALYSIS_ADAPTER.validate_python(self.analysis)

    @classmethod
    def create(
        cls,
        analysis_id: str,
        analysis: Analysis,
        now: datetime,
        ttl: timedelta | None,
    ) -> "AnalysisRecord":
        return cls(
            id=analysis_id,
            created_at=now.isoformat(),
            expire_at=(now + ttl).isoformat() if ttl is not None else None,
            analysis=_ANALYSIS_ADAPTER.dump_python(analysis, mode="json"),
        )


def new_analysis_id() -> str:
    return f"analysis-{uuid.uuid4().hex}"


def ttl_from_hours(hours: float | None) -> timedelta | None:
    """Convert a TTL in hours; ``None`` or non-positive means no expiry."""
    if hours is None or hours <= 0:
        return None
    return timedelta(hours=hours)
