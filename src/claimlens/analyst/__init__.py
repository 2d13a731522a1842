"""LLM collaborator module."""

from claimlens.analyst.base import ClaimAnalyst, Completion, PromptedAnalyst
from claimlens.analyst.claude import ClaudeAnalyst
from claimlens.analyst.perplexity import PerplexityAnalyst

__all__ = [
    "ClaimAnalyst",
    "ClaudeAnalyst",
    "Completion",
    "PerplexityAnalyst",
    "PromptedAnalyst",
]
