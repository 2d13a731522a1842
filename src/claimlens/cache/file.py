"""Analysis cache that writes one JSON document per analysis."""

import dataclasses
import logging
import re
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from claimlens.cache.base import (
    DEFAULT_TTL_HOURS,
    AnalysisRecord,
    new_analysis_id,
    ttl_from_hours,
)
from claimlens.data import Analysis
from claimlens.errors import AnalysisNotFound, CacheWriteFailure

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class JsonFileAnalysisCache:
    """Persist analyses as ``<cache_dir>/<id>.json`` documents.

    Each document holds ``id``, ``created_at``, ``expire_at`` and the
    serialized ``analysis``. Expired documents read as not found.

    Args:
        cache_dir: Directory for the JSON documents (created on first write).
        ttl_hours: Record lifetime; ``None`` or 0 keeps records forever.
        clock: Returns the current time (overridable for tests).
    """

    def __init__(
        self,
        cache_dir: Path | str,
        ttl_hours: float | None = DEFAULT_TTL_HOURS,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._cache_dir = Path(cache_dir)
        self._ttl = ttl_from_hours(ttl_hours)
        self._clock = clock

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def _path(self, analysis_id: str) -> Path | None:
        if not _ID_PATTERN.match(analysis_id):
            return None
        return self._cache_dir / f"{analysis_id}.json"

    def store(self, analysis: Analysis) -> str:
        analysis_id = new_analysis_id()
        stored = dataclasses.replace(analysis, analysis_id=analysis_id)
        record = AnalysisRecord.create(analysis_id, stored, self._clock(), self._ttl)
        filepath = self._cache_dir / f"{analysis_id}.json"
        try:
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            filepath.write_text(record.model_dump_json(indent=2))
        except OSError as e:
            raise CacheWriteFailure(f"Could not write {filepath}: {e}") from e
        logger.info("Cached analysis %s at %s", analysis_id, filepath)
        return analysis_id

    def retrieve(self, analysis_id: str) -> Analysis:
        filepath = self._path(analysis_id)
        if filepath is None or not filepath.is_file():
            raise AnalysisNotFound(analysis_id)

        try:
            record = AnalysisRecord.model_validate_json(filepath.read_text())
            if record.is_expired(self._clock()):
                logger.info("Cached analysis %s expired at %s", analysis_id, record.expire_at)
                raise AnalysisNotFound(analysis_id)
            return record.to_analysis()
        except (ValidationError, UnicodeDecodeError, OSError):
            logger.warning("Unreadable cache record %s", filepath, exc_info=True)
            raise AnalysisNotFound(analysis_id) from None
