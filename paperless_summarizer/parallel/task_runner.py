"""
Settle-all task runner.

Every submitted task runs to completion and its outcome (result or
exception) is collected before run() returns. A failing task never cancels
or blocks the others.

Usage:
    runner = ParallelTaskRunner(strategy=ThreadPoolStrategy(max_workers=4))

    items = [("7:1", (7, 1)), ("7:2", (7, 2))]
    results = runner.run(lambda ids: client.delete_note(*ids), items)

    for result in results:
        if not result.success:
            print(f"{result.task_id} failed: {result.error}")
"""

from concurrent.futures import as_completed
from dataclasses import dataclass
from typing import Any, Callable

from .executor_strategy import ExecutorStrategy


@dataclass
class TaskResult:
    """
    Outcome of a single task.

    Attributes:
        task_id: Identifier supplied with the task.
        success: True if the task completed without exception.
        result: Return value of the task function (if success=True).
        error: Exception raised by the task (if success=False).
    """
    task_id: str
    success: bool
    result: Any = None
    error: Exception = None


class ParallelTaskRunner:
    """
    Runs a group of tasks on an ExecutorStrategy and waits for all of them.

    Args:
        strategy: ExecutorStrategy used to execute the tasks.
        on_task_complete: Optional callback invoked for each successful task.
                         Signature: (task_id: str, result: Any) -> None
        on_task_failed: Optional callback invoked for each failed task.
                       Signature: (task_id: str, error: Exception) -> None
    """

    def __init__(
        self,
        strategy: ExecutorStrategy,
        on_task_complete: Callable[[str, Any], None] = None,
        on_task_failed: Callable[[str, Exception], None] = None,
    ):
        self.strategy = strategy
        self.on_task_complete = on_task_complete
        self.on_task_failed = on_task_failed

    def run(
        self,
        fn: Callable[[Any], Any],
        items: list[tuple[str, Any]]
    ) -> list[TaskResult]:
        """
        Run fn over every payload and collect all outcomes.

        Args:
            fn: Function called with each payload.
            items: List of (task_id, payload) tuples.

        Returns:
            List of TaskResult in completion order, one per item.
        """
        if not items:
            return []

        futures = {}
        for task_id, payload in items:
            futures[self.strategy.submit(fn, payload)] = task_id

        results = []
        for future in as_completed(futures):
            task_id = futures[future]
            try:
                result = future.result()
            except Exception as e:
                results.append(TaskResult(task_id=task_id, success=False, error=e))
                if self.on_task_failed:
                    self.on_task_failed(task_id, e)
                continue

            results.append(TaskResult(task_id=task_id, success=True, result=result))
            if self.on_task_complete:
                self.on_task_complete(task_id, result)

        return results
