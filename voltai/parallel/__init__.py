"""
Worker pool used by index builds.

ThreadPoolStrategy runs per-document work on threads; SequentialStrategy runs
it inline and is what tests pass to the builder. ParallelTaskRunner wraps a
strategy for per-file tasks whose failures must not stop the build.

    from voltai.index import build_index
    from voltai.parallel import SequentialStrategy

    index = build_index("docs/", strategy=SequentialStrategy())
"""

from voltai.parallel.executor_strategy import ExecutorStrategy, SequentialStrategy, ThreadPoolStrategy
from voltai.parallel.task_runner import ParallelTaskRunner, TaskResult

__all__ = [
    'ExecutorStrategy',
    'ParallelTaskRunner',
    'SequentialStrategy',
    'TaskResult',
    'ThreadPoolStrategy',
]
