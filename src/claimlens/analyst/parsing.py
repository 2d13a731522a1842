"""Parsing of collaborator replies, with text fallbacks for malformed output.

The collaborator is asked for JSON but does not always comply. Each parser
first decodes the expected shape and, on ``MalformedCollaboratorResponse``,
degrades to a naive heuristic instead of failing the analysis:

- entities: quoted strings in the reply, else long headline words
- claims: the first sentences of the reply (or of the source excerpt)
- stance: the earliest stance keyword in the reply, else neutral at 0.5
"""

import json
import logging
import re
from typing import Any

from claimlens.data import Claim, ClaimCluster, NumberMention, OutletStance, Source, Stance
from claimlens.errors import MalformedCollaboratorResponse

logger = logging.getLogger(__name__)

FALLBACK_ENTITY_COUNT = 5
FALLBACK_CLAIM_COUNT = 3
FALLBACK_CONFIDENCE = 0.5

_QUOTED = re.compile(r'"([^"]+)"')
_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")
_CITATION_MARK = re.compile(r"\[\d+\]")

# Multi-word labels the collaborator writes instead of the enum value
_STANCE_KEYWORDS: dict[str, Stance] = {
    "not mentioned": Stance.NOT_MENTIONED,
    "not_mentioned": Stance.NOT_MENTIONED,
    "refutes": Stance.REFUTES,
    "supports": Stance.SUPPORTS,
}


def strip_code_fences(text: str) -> str:
    """Remove surrounding markdown code fences, if any."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = [line for line in cleaned.split("\n") if not line.strip().startswith("```")]
        cleaned = "\n".join(lines).strip()
    return cleaned


def load_json(text: str) -> Any:
    """Decode a JSON reply.

    Raises:
        MalformedCollaboratorResponse: If the reply is not valid JSON.
    """
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        error = e

    # Search-grounded replies sometimes wrap the JSON payload in prose
    for opener, closer in (("[", "]"), ("{", "}")):
        start, end = cleaned.find(opener), cleaned.rfind(closer)
        if start != -1 and end > start:
            try:
                embedded = json.loads(cleaned[start : end + 1])
            except json.JSONDecodeError:
                continue
            # A bare citation mark like "[1]" is not a payload
            if isinstance(embedded, dict) or (
                embedded and all(isinstance(item, (str, dict)) for item in embedded)
            ):
                return embedded
    raise MalformedCollaboratorResponse(f"Reply is not JSON: {error}") from error


def _unwrap_list(parsed: Any, key: str) -> list[Any]:
    if isinstance(parsed, dict) and isinstance(parsed.get(key), list):
        parsed = parsed[key]
    if not isinstance(parsed, list):
        raise MalformedCollaboratorResponse(f"Expected a JSON array of {key}")
    return parsed


# ============================================================
# Entities
# ============================================================


def fallback_entities(headline: str) -> list[str]:
    """Headline words longer than three characters, first five."""
    return [w for w in headline.split() if len(w) > 3][:FALLBACK_ENTITY_COUNT]


def parse_entities(text: str, headline: str) -> list[str]:
    """Parse the entity list from an entity-extraction reply."""
    try:
        items = _unwrap_list(load_json(text), "entities")
        return [str(item).strip() for item in items if str(item).strip()]
    except MalformedCollaboratorResponse as e:
        logger.warning("Malformed entity reply (%s), using text fallback", e)

    quoted = [m.strip() for m in _QUOTED.findall(text) if m.strip()]
    if quoted:
        return quoted
    return fallback_entities(headline)


# ============================================================
# Claims
# ============================================================


def split_sentences(text: str, limit: int = FALLBACK_CLAIM_COUNT) -> list[str]:
    """First ``limit`` sentences of ``text``, citation marks removed."""
    cleaned = _CITATION_MARK.sub("", text)
    sentences = (s.strip() for s in _SENTENCE_SPLIT.split(cleaned.strip()))
    return [s for s in sentences if s][:limit]


def _parse_number(raw: Any) -> NumberMention | None:
    if not isinstance(raw, dict):
        return None
    value = raw.get("value")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        try:
            value = float(str(value).replace(",", ""))
        except ValueError:
            return None
    return NumberMention(value=float(value), unit=str(raw.get("unit", "")))


def _parse_claim(raw: Any, source: Source) -> Claim | None:
    if isinstance(raw, str):
        return Claim(text=raw.strip(), source=source) if raw.strip() else None
    if not isinstance(raw, dict):
        return None
    text = str(raw.get("text") or raw.get("claim") or "").strip()
    if not text:
        return None

    raw_entities = raw.get("entities", [])
    entities = (
        tuple(str(e) for e in raw_entities if str(e).strip())
        if isinstance(raw_entities, list)
        else ()
    )
    raw_numbers = raw.get("numbers", [])
    numbers: list[NumberMention] = []
    if isinstance(raw_numbers, list):
        for n in raw_numbers:
            number = _parse_number(n)
            if number is not None:
                numbers.append(number)

    return Claim(text=text, source=source, entities=entities, numbers=tuple(numbers))


def parse_claims(text: str, source: Source, max_claims: int = 5) -> list[Claim]:
    """Parse a claim-extraction reply into claims attributed to ``source``."""
    try:
        items = _unwrap_list(load_json(text), "claims")
    except MalformedCollaboratorResponse as e:
        logger.warning("Malformed claim reply for %s (%s), splitting sentences", source.url, e)
        sentences = split_sentences(text) or split_sentences(source.snippet)
        return [Claim(text=s, source=source) for s in sentences]

    claims = [c for c in (_parse_claim(item, source) for item in items) if c is not None]
    return claims[:max_claims]


# ============================================================
# Stance
# ============================================================


def _coerce_stance(value: str) -> Stance | None:
    normalized = value.strip().lower().replace("-", "_")
    try:
        return Stance(normalized)
    except ValueError:
        return _STANCE_KEYWORDS.get(normalized.replace("_", " "))


def keyword_stance(text: str) -> Stance | None:
    """Stance named by the earliest stance keyword in ``text``, if any."""
    lowered = text.lower()
    hits = [(lowered.find(k), stance) for k, stance in _STANCE_KEYWORDS.items() if k in lowered]
    if not hits:
        return None
    return min(hits, key=lambda hit: hit[0])[1]


def _clamp(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return max(0.0, min(1.0, float(value)))


def parse_stance(text: str, cluster: ClaimCluster, source: Source) -> OutletStance:
    """Parse a stance-tagging reply for one (cluster, source) pair."""
    try:
        parsed = load_json(text)
        if not isinstance(parsed, dict):
            raise MalformedCollaboratorResponse("Expected a JSON object")
        stance = _coerce_stance(str(parsed.get("stance", "")))
        if stance is None:
            raise MalformedCollaboratorResponse(f"Unknown stance {parsed.get('stance')!r}")
        quote = "" if stance == Stance.NOT_MENTIONED else str(parsed.get("quote", "") or "")
        return OutletStance(
            domain=source.domain,
            url=source.url,
            stance=stance,
            quote=quote,
            confidence=_clamp(parsed.get("confidence"), FALLBACK_CONFIDENCE),
        )
    except MalformedCollaboratorResponse as e:
        logger.warning(
            "Malformed stance reply for %s on %s (%s), matching keywords",
            source.domain,
            cluster.id,
            e,
        )

    return OutletStance(
        domain=source.domain,
        url=source.url,
        stance=keyword_stance(text) or Stance.NEUTRAL,
        confidence=FALLBACK_CONFIDENCE,
    )
