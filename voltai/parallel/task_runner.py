"""
Per-file task runner for index builds.

Each source file becomes one task keyed by its path. A task that raises is
recorded as a failed TaskResult instead of propagating, so one unreadable
file cannot abort a build. The completion callback fires as tasks finish
(useful for progress output); the returned list follows the order the tasks
were given in, which is the order the builder needs for its document rows.

    runner = ParallelTaskRunner(pool, on_task_complete=report)
    results = runner.run(extractor.extract, [(str(p), p) for p in files])
"""

import time
from concurrent.futures import Future, as_completed
from dataclasses import dataclass
from typing import Any, Callable

from voltai.logging_config import debug_log
from voltai.parallel.executor_strategy import ExecutorStrategy


@dataclass
class TaskResult:
    """
    Outcome of one task.

    Attributes:
        task_id: Task key (the source path during index builds)
        success: False if the task raised
        result: Return value when successful
        error: The raised exception when not
        elapsed_ms: Time from the start of the run until this result was collected
    """
    task_id: str
    success: bool
    result: Any = None
    error: Exception | None = None
    elapsed_ms: float = 0.0


class ParallelTaskRunner:
    """
    Runs (task_id, payload) pairs through an ExecutorStrategy.

    Args:
        strategy: Where the work runs
        on_task_complete: Called as (task_id, TaskResult) when each task
                          finishes, successful or not, in completion order
    """

    def __init__(
        self,
        strategy: ExecutorStrategy,
        on_task_complete: Callable[[str, TaskResult], None] | None = None
    ):
        self.strategy = strategy
        self.on_task_complete = on_task_complete

    def run(self, fn: Callable[[Any], Any], items: list[tuple[str, Any]]) -> list[TaskResult]:
        """
        Apply ``fn`` to every payload.

        Returns:
            One TaskResult per item, in the same order as ``items``
        """
        if not items:
            return []

        started = time.perf_counter()
        futures: dict[Future, int] = {}
        for position, (_, payload) in enumerate(items):
            futures[self.strategy.submit(fn, payload)] = position

        results: list[TaskResult | None] = [None] * len(items)
        for future in as_completed(futures):
            position = futures[future]
            task_id = items[position][0]
            elapsed_ms = (time.perf_counter() - started) * 1000
            try:
                outcome = TaskResult(task_id, success=True, result=future.result(), elapsed_ms=elapsed_ms)
            except Exception as e:
                debug_log(f"[TASKS] {task_id} raised {type(e).__name__}: {e}")
                outcome = TaskResult(task_id, success=False, error=e, elapsed_ms=elapsed_ms)

            results[position] = outcome
            if self.on_task_complete:
                self.on_task_complete(task_id, outcome)

        return results
