"""
Index value objects and JSON persistence.

An Index is produced whole by one build and never mutated afterwards. On
disk it is a single JSON document:

    {
      "docs":    [{"id": "doc-a.txt", "path": "...", "text": "..."}, ...],
      "terms":   ["learning", "deep", ...],
      "vectors": [[0.57, 0.0, ...], ...]
    }

Floats are written with repr precision, so a saved index loads back bit for
bit. Loading validates the shape invariants and raises IndexFormatError
instead of repairing anything.
"""

import json
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from voltai.errors import IndexFormatError
from voltai.index.vocabulary import Vocabulary
from voltai.logging_config import debug_log


@dataclass(frozen=True)
class Document:
    """
    One indexed source file.

    Attributes:
        id: Deterministic identifier derived from the file name ("doc-<name>")
        path: Source path as scanned
        text: Extracted text ('' when extraction failed)
    """

    id: str
    path: str
    text: str

    @property
    def filename(self) -> str:
        return Path(self.path).name

    @classmethod
    def from_path(cls, path: str | Path, text: str) -> "Document":
        path = Path(path)
        return cls(id=f"doc-{path.name}", path=str(path), text=text)


@dataclass(frozen=True, eq=False)
class Index:
    """
    The persisted aggregate: documents, vocabulary and aligned vectors.

    Invariants (checked on construction):
        len(documents) == vectors.shape[0]
        len(vocabulary) == vectors.shape[1]
    """

    documents: tuple[Document, ...]
    vocabulary: Vocabulary
    vectors: np.ndarray

    def __post_init__(self):
        if self.vectors.ndim != 2:
            raise IndexFormatError(
                f"Vectors must be a 2-D matrix, got {self.vectors.ndim} dimension(s)"
            )
        if self.vectors.shape[0] != len(self.documents):
            raise IndexFormatError(
                f"Document/vector count mismatch: {len(self.documents)} documents, "
                f"{self.vectors.shape[0]} vectors"
            )
        if self.vectors.shape[1] != len(self.vocabulary):
            raise IndexFormatError(
                f"Vector length {self.vectors.shape[1]} does not match "
                f"vocabulary size {len(self.vocabulary)}"
            )

    @classmethod
    def empty(cls) -> "Index":
        return cls(documents=(), vocabulary=Vocabulary(terms=()), vectors=np.zeros((0, 0)))

    @property
    def document_count(self) -> int:
        return len(self.documents)

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to score against."""
        return not self.documents or len(self.vocabulary) == 0


def index_to_dict(index: Index) -> dict[str, Any]:
    """Convert an Index to its JSON-ready mapping."""
    return {
        "docs": [
            {"id": doc.id, "path": doc.path, "text": doc.text}
            for doc in index.documents
        ],
        "terms": list(index.vocabulary.terms),
        "vectors": [row.tolist() for row in index.vectors],
    }


def _is_weight(value: Any) -> bool:
    # bool is an int subclass but never a valid weight
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # JSON integers too large for a float
        return False


def index_from_dict(data: Any) -> Index:
    """
    Rebuild an Index from its JSON mapping.

    Raises:
        IndexFormatError: Missing fields, wrong types, duplicate terms,
                          non-finite weights, or violated shape invariants
    """
    if not isinstance(data, dict):
        raise IndexFormatError("Index root must be a JSON object")

    for key in ("docs", "terms", "vectors"):
        if key not in data:
            raise IndexFormatError(f"Index is missing the '{key}' field")
        if not isinstance(data[key], list):
            raise IndexFormatError(f"Index field '{key}' must be a list")

    documents = []
    for i, raw in enumerate(data["docs"]):
        if not isinstance(raw, dict):
            raise IndexFormatError(f"Document {i} is not an object")
        try:
            documents.append(Document(id=str(raw["id"]), path=str(raw["path"]), text=str(raw["text"])))
        except KeyError as e:
            raise IndexFormatError(f"Document {i} is missing field {e}") from e

    terms = data["terms"]
    if not all(isinstance(t, str) for t in terms):
        raise IndexFormatError("Vocabulary terms must be strings")
    if len(set(terms)) != len(terms):
        raise IndexFormatError("Vocabulary contains duplicate terms")

    raw_vectors = data["vectors"]
    if len(raw_vectors) != len(documents):
        raise IndexFormatError(
            f"Document/vector count mismatch: {len(documents)} documents, "
            f"{len(raw_vectors)} vectors"
        )
    for i, row in enumerate(raw_vectors):
        if not isinstance(row, list):
            raise IndexFormatError(f"Vector {i} is not a list")
        if len(row) != len(terms):
            raise IndexFormatError(
                f"Vector {i} has length {len(row)}, vocabulary size is {len(terms)}"
            )
        for value in row:
            if not _is_weight(value):
                raise IndexFormatError(f"Vector {i} contains a non-numeric weight: {value!r}")

    vectors = np.array(raw_vectors, dtype=np.float64).reshape(len(documents), len(terms))
    # Weights are positive exactly where a document contains the term
    doc_freq = (vectors > 0).sum(axis=0)
    vocabulary = Vocabulary(
        terms=tuple(terms),
        document_frequency={term: int(df) for term, df in zip(terms, doc_freq)},
    )
    return Index(documents=tuple(documents), vocabulary=vocabulary, vectors=vectors)


def save_index(index: Index, path: str | Path) -> Path:
    """
    Write an index to disk as JSON.

    The file is written next to its destination and renamed into place, so
    readers never see a half-written index.

    Raises:
        OSError: If the destination cannot be written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")

    try:
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(index_to_dict(index), f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    debug_log(
        f"[STORE] Saved index to {path}: {index.document_count} documents, "
        f"{len(index.vocabulary)} terms"
    )
    return path


def load_index(path: str | Path) -> Index:
    """
    Load and validate an index file.

    Raises:
        OSError: If the file cannot be read (including FileNotFoundError)
        IndexFormatError: If the content is not a valid index
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise IndexFormatError(f"{path} is not valid JSON: {e}") from e

    index = index_from_dict(data)
    debug_log(
        f"[STORE] Loaded index from {path}: {index.document_count} documents, "
        f"{len(index.vocabulary)} terms"
    )
    return index
