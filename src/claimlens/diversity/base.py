"""Protocol for outlet diversification."""

from typing import Protocol

from claimlens.data import Source


class OutletDiversifier(Protocol):
    """Interface for narrowing candidate sources to independent outlets."""

    def diversify(self, sources: list[Source]) -> list[Source]:
        """Select a diverse subset of sources.

        Args:
            sources: Candidate sources in retrieval rank order.

        Returns:
            Selected sources, preserving their relative rank order.
        """
        ...
