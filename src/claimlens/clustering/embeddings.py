"""Embedding-based claim similarity.

A drop-in alternative to ``JaccardSimilarity`` for the greedy clusterer. It
changes only the pairwise score, so clustering stays single-pass and
first-seed-wins, but results differ from the lexical version and are tagged
with their own ``version``.
"""

from typing import Protocol

import numpy as np
from numpy.typing import NDArray
from sentence_transformers import SentenceTransformer


class TextEmbedder(Protocol):
    """Interface for text embedding models."""

    def embed(self, texts: list[str]) -> NDArray[np.float32]:
        """Embed a batch of texts.

        Args:
            texts: List of strings to embed.

        Returns:
            Array of shape (len(texts), embedding_dim).
        """
        ...


class SentenceTransformerEmbedder:
    """Embedder using sentence-transformers library."""

    def __init__(self, model_name: str = "all-MiniLM-L6-v2") -> None:
        self._model: SentenceTransformer = SentenceTransformer(model_name)

    def embed(self, texts: list[str]) -> NDArray[np.float32]:
        """Embed texts using sentence-transformers."""
        embeddings: NDArray[np.float32] = self._model.encode(texts, convert_to_numpy=True).astype(
            np.float32
        )
        return embeddings


class EmbeddingSimilarity:
    """Cosine similarity of claim embeddings, clipped to [0.0, 1.0].

    Embeddings are memoized per text, so a clustering pass embeds each
    distinct claim once.

    Args:
        embedder: Embedding model. Defaults to a ``SentenceTransformerEmbedder``
            for ``model_name``.
        model_name: sentence-transformers model used when no embedder is given.
    """

    version = "embedding-v1"

    def __init__(
        self,
        embedder: TextEmbedder | None = None,
        model_name: str = "all-MiniLM-L6-v2",
    ) -> None:
        self._embedder = embedder or SentenceTransformerEmbedder(model_name)
        self._vectors: dict[str, NDArray[np.float32]] = {}

    def _vector(self, text: str) -> NDArray[np.float32]:
        if text not in self._vectors:
            self._vectors[text] = self._embedder.embed([text])[0]
        return self._vectors[text]

    def score(self, a: str, b: str) -> float:
        if not a.strip() or not b.strip():
            return 0.0
        va = self._vector(a)
        vb = self._vector(b)
        denom = float(np.linalg.norm(va) * np.linalg.norm(vb))
        if denom == 0:
            return 0.0
        cosine = float(va @ vb) / denom
        return max(0.0, min(1.0, cosine))
