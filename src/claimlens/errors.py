"""Exceptions raised by ClaimLens components."""


class ClaimLensError(Exception):
    """Base class for ClaimLens errors."""


class CollaboratorUnavailable(ClaimLensError):
    """The external retrieval/extraction/stance service could not be reached.

    Covers network errors, timeouts and non-2xx responses. Never retried;
    aborts the analysis in progress.
    """


class MalformedCollaboratorResponse(ClaimLensError):
    """The collaborator replied with text that is not the expected JSON shape.

    Analysts recover from this locally with text heuristics.
    """


class CacheWriteFailure(ClaimLensError):
    """Persisting a completed analysis failed."""


class AnalysisNotFound(ClaimLensError):
    """No stored analysis exists under the requested id."""

    def __init__(self, analysis_id: str) -> None:
        super().__init__(f"Analysis not found: {analysis_id}")
        self.analysis_id = analysis_id
