"""
Vocabulary construction from document frequencies.

The vocabulary is every term that appears in at least one document, ordered
by descending document frequency. Vectors are positional, so the order has
to be reproducible: equal-frequency terms keep the order in which they were
first seen while walking the documents in scan order.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable


@dataclass(frozen=True)
class Vocabulary:
    """
    Ordered term list plus the lookups derived from it.

    Attributes:
        terms: Terms in dimension order
        document_frequency: term -> number of documents containing it
    """

    terms: tuple[str, ...]
    document_frequency: dict[str, int] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        # Frozen dataclass: bypass __setattr__ for the derived mapping
        object.__setattr__(self, '_positions', {t: i for i, t in enumerate(self.terms)})

    def __len__(self) -> int:
        return len(self.terms)

    def __contains__(self, term: str) -> bool:
        return term in self._positions

    def position(self, term: str) -> int | None:
        """Dimension index of ``term``, or None if out of vocabulary."""
        return self._positions.get(term)

    @property
    def positions(self) -> dict[str, int]:
        """term -> dimension index. Shared, so callers must not mutate it."""
        return self._positions


def count_document_frequency(token_lists: Iterable[list[str]]) -> Counter:
    """
    Count, for each term, how many documents contain it.

    Multiplicity inside a document is collapsed. The returned Counter keeps
    first-seen insertion order, which the vocabulary sort relies on for ties.
    """
    doc_freq: Counter = Counter()
    for tokens in token_lists:
        # dict.fromkeys keeps first-occurrence order where set() would not
        for term in dict.fromkeys(tokens):
            doc_freq[term] += 1
    return doc_freq


def build_vocabulary(token_lists: Iterable[list[str]]) -> Vocabulary:
    """
    Build the ordered vocabulary for a corpus.

    Args:
        token_lists: Tokenized documents, in document order

    Returns:
        Vocabulary sorted by descending document frequency
    """
    doc_freq = count_document_frequency(token_lists)
    # sorted() is stable, so ties stay in first-seen order
    terms = sorted(doc_freq, key=lambda term: doc_freq[term], reverse=True)
    return Vocabulary(terms=tuple(terms), document_frequency=dict(doc_freq))
