"""
Index Builder

Builds a complete Index from a directory in four phases:

1. Scan: walk the directory, keep allowed extensions, sort by path
2. Extract + tokenize: per document, on the worker pool
3. Vocabulary: sequential barrier over all token lists
4. Encode: per document, on the worker pool, against the final vocabulary

Every build is a full rebuild. A file that cannot be read or extracted
becomes a document with an empty body; the build itself only fails if the
source directory is missing.
"""

from functools import partial
from pathlib import Path
from typing import Callable, Iterable

import numpy as np

from voltai.config import get_settings
from voltai.extraction import ContentExtractor
from voltai.index.store import Document, Index, save_index
from voltai.index.tokenizer import tokenize
from voltai.index.vectors import encode_document
from voltai.index.vocabulary import build_vocabulary
from voltai.logging_config import Timer, debug_log, info, warning
from voltai.parallel import ExecutorStrategy, ParallelTaskRunner, TaskResult, ThreadPoolStrategy

# (completed, total, path) -> None
ProgressCb = Callable[[int, int, str], None]


def scan_directory(directory: str | Path, allowed_extensions: Iterable[str] | None = None) -> list[Path]:
    """
    List indexable files under ``directory``, recursively, sorted by path.

    Files whose lower-cased extension is not allowed are skipped silently.

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path is not a directory
    """
    root = Path(directory)
    if not root.exists():
        raise FileNotFoundError(f"Source directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    if allowed_extensions is None:
        allowed = get_settings().allowed_extensions
    else:
        allowed = frozenset(ext.lower() for ext in allowed_extensions)

    return sorted(
        p for p in root.rglob("*")
        if p.is_file() and p.suffix.lower() in allowed
    )


class IndexBuilder:
    """
    Builds an Index from a directory of documents.

    Args:
        strategy: Execution strategy for per-document work. When omitted a
                  ThreadPoolStrategy is created per build and shut down after.
        extractor: Content extractor (defaults to ContentExtractor())
        allowed_extensions: Override the configured extension allow-list
        progress: Optional callback (completed, total, path) per extracted file

    Example:
        builder = IndexBuilder()
        index = builder.build("docs/")
        save_index(index, "voltai_index.json")
    """

    def __init__(
        self,
        strategy: ExecutorStrategy | None = None,
        extractor: ContentExtractor | None = None,
        allowed_extensions: Iterable[str] | None = None,
        progress: ProgressCb | None = None,
    ):
        self.strategy = strategy
        self.extractor = extractor or ContentExtractor()
        self.allowed_extensions = allowed_extensions
        self.progress = progress

    def build(self, directory: str | Path) -> Index:
        """
        Build a fresh index over ``directory``.

        Returns:
            The finished Index (empty if the directory has no indexable files)
        """
        files = scan_directory(directory, self.allowed_extensions)
        info(f"Indexing {len(files)} file(s) from {directory}")

        if not files:
            return Index.empty()

        if self.strategy is not None:
            return self._build(files, self.strategy)

        with ThreadPoolStrategy(max_workers=get_settings().max_workers) as strategy:
            return self._build(files, strategy)

    def _build(self, files: list[Path], strategy: ExecutorStrategy) -> Index:
        with Timer(f"Index build ({len(files)} files)"):
            documents = self._read_documents(files, strategy)

            with Timer("Tokenization"):
                token_lists = list(strategy.map(tokenize, [doc.text for doc in documents]))

            # Barrier: dimensions are only known once every document is counted
            with Timer("Vocabulary build"):
                vocabulary = build_vocabulary(token_lists)
            debug_log(f"[INDEX] Vocabulary: {len(vocabulary)} terms")

            with Timer("Vector encoding"):
                encode = partial(encode_document, vocabulary=vocabulary)
                rows = list(strategy.map(encode, token_lists))

        vectors = np.vstack(rows) if rows else np.zeros((0, len(vocabulary)))
        return Index(documents=tuple(documents), vocabulary=vocabulary, vectors=vectors)

    def _read_documents(self, files: list[Path], strategy: ExecutorStrategy) -> list[Document]:
        """Extract every file on the worker pool; failures become empty bodies."""
        total = len(files)
        completed = 0

        def on_complete(task_id: str, result: TaskResult):
            nonlocal completed
            completed += 1
            if self.progress:
                self.progress(completed, total, task_id)

        runner = ParallelTaskRunner(strategy=strategy, on_task_complete=on_complete)
        results = runner.run(self.extractor.extract, [(str(p), p) for p in files])

        return [
            Document.from_path(path, self._text_or_empty(task))
            for path, task in zip(files, results)
        ]

    def _text_or_empty(self, task: TaskResult) -> str:
        if not task.success:
            warning(f"[INDEX] Reading {task.task_id} failed, indexing as empty: {task.error}")
            return ""
        extraction = task.result
        if not extraction.success:
            warning(f"[INDEX] {extraction.error_message}; indexing {task.task_id} as empty")
            return ""
        return extraction.text


def build_index(
    directory: str | Path,
    strategy: ExecutorStrategy | None = None,
    progress: ProgressCb | None = None,
) -> Index:
    """Build an index over ``directory`` with default extraction settings."""
    return IndexBuilder(strategy=strategy, progress=progress).build(directory)


def index_directory(
    directory: str | Path,
    output: str | Path,
    strategy: ExecutorStrategy | None = None,
    progress: ProgressCb | None = None,
) -> Index:
    """
    Build an index over ``directory`` and write it to ``output``.

    Raises:
        FileNotFoundError: If the source directory does not exist
        OSError: If the output cannot be written
    """
    index = build_index(directory, strategy=strategy, progress=progress)
    save_index(index, output)
    info(f"Wrote index to {output}")
    return index
