"""
Query classification policy.

Decides whether a query asks about the corpus as a whole ("general":
summarize, list, overview) or about particular content ("specific"). The
rule is a plain heuristic with known false positives ("list the steps to
deploy" is general) and false negatives ("what are these files about?" is
specific), so its inputs are a policy object rather than literals buried in
the retrieval path.

Rule:
    general  if any query token is a trigger word
             or the query has fewer than min_specific_tokens tokens
    specific otherwise
"""

from dataclasses import dataclass, field
from enum import Enum

from voltai.config import (
    DEFAULT_TRIGGER_WORDS,
    GENERAL_QUERY_MAX_DOCS,
    MIN_SPECIFIC_TOKENS,
    Settings,
)
from voltai.index.tokenizer import tokenize


class QueryType(Enum):
    """Retrieval mode chosen for a query."""

    GENERAL = "general"
    SPECIFIC = "specific"


@dataclass(frozen=True)
class QueryPolicy:
    """
    Parameters of the general/specific heuristic.

    Attributes:
        trigger_words: Tokens that mark a whole-corpus request
        min_specific_tokens: Queries shorter than this are treated as general
        general_max_docs: How many documents a general query may pull in
    """

    trigger_words: frozenset[str] = field(default=DEFAULT_TRIGGER_WORDS)
    min_specific_tokens: int = MIN_SPECIFIC_TOKENS
    general_max_docs: int = GENERAL_QUERY_MAX_DOCS

    @classmethod
    def from_settings(cls, settings: Settings) -> "QueryPolicy":
        """Build the policy from the 'query' section of the settings file."""
        words = settings.get('query', 'trigger_words', default=sorted(DEFAULT_TRIGGER_WORDS))
        return cls(
            trigger_words=frozenset(w.lower() for w in words),
            min_specific_tokens=int(settings.get('query', 'min_specific_tokens', default=MIN_SPECIFIC_TOKENS)),
            general_max_docs=int(settings.get('query', 'general_max_docs', default=GENERAL_QUERY_MAX_DOCS)),
        )


DEFAULT_POLICY = QueryPolicy()


def is_general_query(query: str, policy: QueryPolicy = DEFAULT_POLICY) -> bool:
    """True if ``query`` should be answered from the whole corpus."""
    tokens = tokenize(query)
    if len(tokens) < policy.min_specific_tokens:
        return True
    return any(token in policy.trigger_words for token in tokens)


def classify_query(query: str, policy: QueryPolicy = DEFAULT_POLICY) -> QueryType:
    """
    Classify a query as GENERAL or SPECIFIC.

    Example:
        >>> classify_query("summarize all documents")
        <QueryType.GENERAL: 'general'>
        >>> classify_query("kubernetes deployment best practices")
        <QueryType.SPECIFIC: 'specific'>
    """
    return QueryType.GENERAL if is_general_query(query, policy) else QueryType.SPECIFIC
