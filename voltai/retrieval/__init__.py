"""
Retrieval Package for VoltAI.

- QueryPolicy / classify_query: general vs. specific query heuristic
- Retriever: cosine scoring, stable ranking, top-K or whole-corpus selection

Example:
    from voltai.retrieval import Retriever

    result = Retriever(index).retrieve("Explain docker containers", k=2)
"""

from voltai.retrieval.query_policy import (
    DEFAULT_POLICY,
    QueryPolicy,
    QueryType,
    classify_query,
    is_general_query,
)
from voltai.retrieval.retriever import RetrievalResult, RetrievedDocument, Retriever

__all__ = [
    "DEFAULT_POLICY",
    "QueryPolicy",
    "QueryType",
    "RetrievalResult",
    "RetrievedDocument",
    "Retriever",
    "classify_query",
    "is_general_query",
]
