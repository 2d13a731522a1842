"""Lexical claim similarity."""

import string

_EDGE_PUNCTUATION = string.punctuation + "“”‘’"


def _tokens(text: str) -> set[str]:
    """Lower-cased whitespace tokens with surrounding punctuation removed."""
    words = (token.strip(_EDGE_PUNCTUATION) for token in text.lower().split())
    return {word for word in words if word}


def jaccard_similarity(a: str, b: str) -> float:
    """Jaccard index of the word sets of two texts.

    Words are lower-cased whitespace tokens stripped of leading and trailing
    punctuation, so "$10" and "10" are the same word.

    Returns:
        |A ∩ B| / |A ∪ B|, or 0.0 when both texts have no words.
    """
    set_a = _tokens(a)
    set_b = _tokens(b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


class JaccardSimilarity:
    """Word-overlap similarity between claim texts."""

    version = "jaccard-v1"

    def score(self, a: str, b: str) -> float:
        return jaccard_similarity(a, b)
