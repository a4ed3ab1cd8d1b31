"""
Execution strategies for the index build worker pool.

The builder never creates threads itself; it hands per-document work (file
reads, tokenization, vector encoding) to a strategy. ThreadPoolStrategy is
used for real builds, SequentialStrategy in tests where a deterministic,
single-threaded run is easier to reason about. Both expose the same three
operations, and map() always yields results in input order because document
rows must line up with the document list.

    with ThreadPoolStrategy(max_workers=4) as pool:
        rows = list(pool.map(encode, token_lists))
"""

from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Iterator, TypeVar

from voltai.config import PARALLEL_MAX_WORKERS

T = TypeVar('T')
R = TypeVar('R')


class ExecutorStrategy(ABC):
    """How per-document work is executed; ``max_workers`` is 1 when sequential."""

    max_workers: int

    @abstractmethod
    def submit(self, fn: Callable[[T], R], item: T) -> Future:
        """Schedule ``fn(item)`` and return its Future."""

    @abstractmethod
    def map(self, fn: Callable[[T], R], items: list[T]) -> Iterator[R]:
        """Apply ``fn`` to every item, yielding results in input order."""

    def shutdown(self, wait: bool = True) -> None:
        """Release worker resources (nothing to release by default)."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown(wait=True)
        return False


class ThreadPoolStrategy(ExecutorStrategy):
    """
    Runs work on a bounded thread pool.

    Threads pay off here: file reads and pdfplumber parsing wait on I/O, and
    numpy drops the GIL for the row arithmetic.

    Args:
        max_workers: Pool size; defaults to PARALLEL_MAX_WORKERS
                     (min(cpu_count, 4)). Values below 1 are raised to 1.
    """

    def __init__(self, max_workers: int | None = None):
        self.max_workers = max(1, max_workers if max_workers is not None else PARALLEL_MAX_WORKERS)
        self._pool = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="voltai-index")

    def submit(self, fn: Callable[[T], R], item: T) -> Future:
        return self._pool.submit(fn, item)

    def map(self, fn: Callable[[T], R], items: list[T]) -> Iterator[R]:
        return self._pool.map(fn, items)

    def shutdown(self, wait: bool = True) -> None:
        self._pool.shutdown(wait=wait)


class SequentialStrategy(ExecutorStrategy):
    """
    Runs work inline on the calling thread.

    submit() returns an already-resolved Future (holding either the value or
    the exception) so code written against futures works unchanged.
    """

    max_workers = 1

    def submit(self, fn: Callable[[T], R], item: T) -> Future:
        future: Future = Future()
        try:
            future.set_result(fn(item))
        except Exception as e:
            future.set_exception(e)
        return future

    def map(self, fn: Callable[[T], R], items: list[T]) -> Iterator[R]:
        return (fn(item) for item in items)
