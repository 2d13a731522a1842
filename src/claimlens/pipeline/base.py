"""Pipeline protocol for claim analysis."""

from typing import Protocol

from claimlens.data import Analysis, InputKind


class Pipeline(Protocol):
    """Interface for end-to-end claim analysis pipelines."""

    async def analyze(self, text: str, kind: InputKind = InputKind.HEADLINE) -> Analysis:
        """Analyze how outlets cover a story.

        Args:
            text: A headline, or a page URL when ``kind`` is ``url``.
            kind: What ``text`` is.

        Returns:
            The categorized analysis.
        """
        ...

    def retrieve(self, analysis_id: str) -> Analysis:
        """Load a previously cached analysis."""
        ...
