"""
Prompt Builder for Ollama Queries

Turns a RetrievalResult into the text sent to the model:
- Specific queries: the full text of each selected document as context,
  followed by the question.
- General queries: one line per document with its most characteristic terms,
  so a whole-corpus request stays small enough for the model's context.

With no selected documents the prompt is the bare query.
"""

import numpy as np

from voltai.config import PROMPT_KEYWORDS_PER_DOC
from voltai.index.store import Index
from voltai.nlp.summarization import is_content_word
from voltai.retrieval import QueryType, RetrievalResult, RetrievedDocument

CONTEXT_HEADER = "Use the following documents as context:\n"
GENERAL_HEADER = (
    "You are given an overview of a document collection. "
    "Each line lists a file and its most characteristic terms:\n"
)


def top_keywords(index: Index, position: int, count: int = PROMPT_KEYWORDS_PER_DOC) -> list[str]:
    """
    Highest-weighted vocabulary terms of one document.

    Stop words and terms shorter than three characters are skipped. Equal
    weights keep vocabulary order (most widespread terms first).

    Args:
        index: The index holding the document
        position: Row of the document in the index
        count: Maximum number of terms

    Returns:
        Up to ``count`` terms, heaviest first
    """
    if index.is_empty or count <= 0:
        return []

    row = index.vectors[position]
    order = np.argsort(-row, kind="stable")
    terms = index.vocabulary.terms

    keywords = []
    for dim in order:
        if row[dim] <= 0:
            break
        term = terms[dim]
        if is_content_word(term):
            keywords.append(term)
            if len(keywords) == count:
                break
    return keywords


def build_specific_prompt(query: str, documents: list[RetrievedDocument]) -> str:
    """Full-text context prompt for a specific query."""
    if not documents:
        return query

    context = "".join(
        f"Document: {hit.document.path}\n{hit.document.text}\n---\n" for hit in documents
    )
    return f"{CONTEXT_HEADER}{context}\nQuestion: {query}"


def build_general_prompt(
    query: str,
    documents: list[RetrievedDocument],
    index: Index,
    keywords_per_doc: int = PROMPT_KEYWORDS_PER_DOC,
) -> str:
    """Keyword-overview prompt for a whole-corpus request."""
    if not documents:
        return query

    lines = []
    for hit in documents:
        keywords = top_keywords(index, hit.position, keywords_per_doc)
        lines.append(f"- {hit.document.filename}: {', '.join(keywords) or '(no indexed terms)'}")

    overview = "\n".join(lines)
    return (
        f"{GENERAL_HEADER}{overview}\n\n"
        f"Request: {query}\n"
        "Summarize what this collection covers, referring to the files by name."
    )


def build_prompt(result: RetrievalResult, index: Index) -> str:
    """Prompt for a retrieval result, by query type."""
    if result.query_type is QueryType.GENERAL:
        return build_general_prompt(result.query, result.documents, index)
    return build_specific_prompt(result.query, result.documents)
