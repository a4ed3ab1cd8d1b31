"""
Cosine-similarity retriever over a loaded Index.

Scoring is a single matrix-vector product: document vectors and the query
vector are both unit length, so each dot product is a cosine similarity in
[0, 1] (weights are never negative). Ranking is a stable descending sort,
so documents with equal scores keep their index order.

Example:
    retriever = Retriever(load_index("voltai_index.json"))
    result = retriever.retrieve("kubernetes deployment best practices", k=3)
    for hit in result.documents:
        print(f"{hit.score:.3f}  {hit.document.path}")
"""

import time
from dataclasses import dataclass, field

import numpy as np

from voltai.config import DEBUG_MODE, DEFAULT_TOP_K
from voltai.index.store import Document, Index
from voltai.index.tokenizer import tokenize
from voltai.index.vectors import encode_query
from voltai.logging_config import debug_log
from voltai.retrieval.query_policy import DEFAULT_POLICY, QueryPolicy, QueryType, classify_query


@dataclass(frozen=True)
class RetrievedDocument:
    """
    A document selected for a query.

    Attributes:
        position: Row of the document in the index
        document: The indexed document
        score: Cosine similarity to the query (0.0-1.0)
    """

    position: int
    document: Document
    score: float


@dataclass
class RetrievalResult:
    """
    Documents selected for one query.

    Attributes:
        query: The query text
        query_type: GENERAL (first N in index order) or SPECIFIC (top K)
        documents: Selected documents in presentation order
        processing_time_ms: Time spent scoring and selecting
    """

    query: str
    query_type: QueryType
    documents: list[RetrievedDocument] = field(default_factory=list)
    processing_time_ms: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.documents


class Retriever:
    """
    Scores, ranks and selects documents from an Index.

    Args:
        index: A loaded or freshly built Index
        policy: General/specific classification policy
    """

    def __init__(self, index: Index, policy: QueryPolicy = DEFAULT_POLICY):
        self.index = index
        self.policy = policy

    def score(self, query: str) -> list[tuple[int, float]]:
        """
        Cosine similarity of the query against every document.

        Returns:
            (document_index, score) for all documents in index order; empty
            when the index has no documents or no vocabulary
        """
        if self.index.is_empty:
            return []

        query_vector = encode_query(tokenize(query), self.index.vocabulary)
        scores = self.index.vectors @ query_vector
        return [(i, float(s)) for i, s in enumerate(scores)]

    def rank(self, query: str) -> list[tuple[int, float]]:
        """All (document_index, score) pairs by descending score, ties in index order."""
        scored = self.score(query)
        if not scored:
            return []
        scores = np.array([s for _, s in scored])
        order = np.argsort(-scores, kind="stable")
        return [scored[i] for i in order]

    def top_k(self, query: str, k: int = DEFAULT_TOP_K) -> list[RetrievedDocument]:
        """The k highest-scoring documents."""
        if k <= 0:
            return []
        return [self._hit(i, s) for i, s in self.rank(query)[:k]]

    def general_selection(self, query: str) -> list[RetrievedDocument]:
        """The first general_max_docs documents in index order, regardless of score."""
        scored = self.score(query)
        return [self._hit(i, s) for i, s in scored[:self.policy.general_max_docs]]

    def retrieve(self, query: str, k: int = DEFAULT_TOP_K) -> RetrievalResult:
        """
        Classify the query and select documents accordingly.

        Args:
            query: Free-text query
            k: Number of documents for a specific query

        Returns:
            RetrievalResult (empty for an empty index, never an error)
        """
        start_time = time.perf_counter()
        query_type = classify_query(query, self.policy)

        if query_type is QueryType.GENERAL:
            documents = self.general_selection(query)
        else:
            documents = self.top_k(query, k)

        elapsed_ms = (time.perf_counter() - start_time) * 1000

        if DEBUG_MODE:
            debug_log(
                f"[RETRIEVER] '{query[:50]}' -> {query_type.value}, "
                f"{len(documents)} document(s) in {elapsed_ms:.1f}ms"
            )
            for i, hit in enumerate(documents[:3]):
                debug_log(f"  [{i + 1}] score={hit.score:.3f} | {hit.document.filename}")

        return RetrievalResult(
            query=query,
            query_type=query_type,
            documents=documents,
            processing_time_ms=elapsed_ms,
        )

    def _hit(self, position: int, score: float) -> RetrievedDocument:
        return RetrievedDocument(position=position, document=self.index.documents[position], score=score)
