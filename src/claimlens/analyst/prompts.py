"""Prompt templates shared by the LLM-backed analysts."""

from claimlens.data import ClaimCluster, Source

ENTITY_SYSTEM_PROMPT = """\
Extract key named entities (people, organizations, locations, events) from \
the headline. Return ONLY a JSON array of strings (no markdown fences, no \
commentary).\
"""

RETRIEVAL_SYSTEM_PROMPT = """\
Find diverse news coverage of this story from multiple mainstream outlets \
(national, international, regional). List 6-10 different news sources with \
a brief description of what each outlet reports. Provide citations.\
"""

CLAIM_SYSTEM_PROMPT = """\
You are a fact-checking assistant. Read the given news article and extract \
the atomic, checkable factual claims it makes about the story. Respond ONLY \
with a JSON array (no markdown fences, no commentary) of at most {max_claims} \
objects with these fields:
- "text": the claim as one short declarative sentence
- "entities": array of named entities the claim mentions
- "numbers": array of {{"value": number, "unit": string}} for every quantity \
stated in the claim\
"""

STANCE_SYSTEM_PROMPT = """\
You are a neutral media analyst. Decide how the given news article treats \
the given claim. Respond ONLY with a JSON object (no markdown fences, no \
commentary) with these fields:
- "stance": one of: supports, refutes, neutral, not_mentioned
- "quote": a short verbatim quote from the article backing the stance, or \
an empty string when the claim is not mentioned
- "confidence": float 0.0-1.0\
"""


def retrieval_query(headline: str, entities: list[str]) -> str:
    """Search query for coverage of a headline, biased by its top entities."""
    parts = [headline, *entities[:3], "news coverage multiple outlets"]
    return " ".join(p for p in parts if p)


def _source_block(source: Source) -> str:
    parts = [f"URL: {source.url}", f"Outlet: {source.domain}"]
    if source.title:
        parts.append(f"Title: {source.title}")
    if source.snippet:
        parts.append(f"Excerpt: {source.snippet}")
    return "\n".join(parts)


def claim_user_prompt(source: Source, headline: str) -> str:
    return f"Story: {headline}\n\nArticle:\n{_source_block(source)}"


def stance_user_prompt(cluster: ClaimCluster, source: Source) -> str:
    return f"Claim: {cluster.canonical_text}\n\nArticle:\n{_source_block(source)}"
