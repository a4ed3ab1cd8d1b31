"""
Index Package

Tokenizer, vocabulary, vector encoding, the Index value object with its JSON
persistence, and the directory index builder.

Example:
    from voltai.index import index_directory, load_index

    index_directory("docs/", "voltai_index.json")
    index = load_index("voltai_index.json")
"""

from voltai.index.builder import IndexBuilder, build_index, index_directory, scan_directory
from voltai.index.store import (
    Document,
    Index,
    index_from_dict,
    index_to_dict,
    load_index,
    save_index,
)
from voltai.index.tokenizer import tokenize
from voltai.index.vectors import cosine_similarity, encode_document, encode_query, l2_normalize
from voltai.index.vocabulary import Vocabulary, build_vocabulary, count_document_frequency

__all__ = [
    "Document",
    "Index",
    "IndexBuilder",
    "Vocabulary",
    "build_index",
    "build_vocabulary",
    "cosine_similarity",
    "count_document_frequency",
    "encode_document",
    "encode_query",
    "index_directory",
    "index_from_dict",
    "index_to_dict",
    "l2_normalize",
    "load_index",
    "save_index",
    "scan_directory",
    "tokenize",
]
