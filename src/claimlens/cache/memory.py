"""In-process analysis cache."""

import dataclasses
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from threading import Lock

from claimlens.cache.base import (
    DEFAULT_TTL_HOURS,
    AnalysisRecord,
    new_analysis_id,
    ttl_from_hours,
)
from claimlens.data import Analysis
from claimlens.errors import AnalysisNotFound

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class InMemoryAnalysisCache:
    """Thread-safe dictionary of analysis records with optional expiry.

    Good for single-process deployments and tests.

    Args:
        ttl_hours: Record lifetime; ``None`` or 0 keeps records forever.
        clock: Returns the current time (overridable for tests).
    """

    def __init__(
        self,
        ttl_hours: float | None = DEFAULT_TTL_HOURS,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._ttl = ttl_from_hours(ttl_hours)
        self._clock = clock
        self._records: dict[str, AnalysisRecord] = {}
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def store(self, analysis: Analysis) -> str:
        analysis_id = new_analysis_id()
        stored = dataclasses.replace(analysis, analysis_id=analysis_id)
        record = AnalysisRecord.create(analysis_id, stored, self._clock(), self._ttl)
        with self._lock:
            self._records[analysis_id] = record
        logger.info("Cached analysis %s", analysis_id)
        return analysis_id

    def retrieve(self, analysis_id: str) -> Analysis:
        with self._lock:
            record = self._records.get(analysis_id)
            if record is not None and record.is_expired(self._clock()):
                del self._records[analysis_id]
                record = None
        if record is None:
            raise AnalysisNotFound(analysis_id)
        return record.to_analysis()
