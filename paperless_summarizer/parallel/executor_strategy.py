"""
Execution strategies for settle-all task groups.

Separates "what to run" from "how to run it":

    ThreadPoolStrategy - bounded thread pool, used for per-page note
                         deletions during all-mode cleanup
    SequentialStrategy - runs each task immediately in the caller's thread,
                         used for single-document cleanup and in tests

Both return concurrent.futures.Future objects so ParallelTaskRunner can
treat them identically.
"""

from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, TypeVar

from paperless_summarizer.config import CLEANUP_MAX_WORKERS

T = TypeVar('T')
R = TypeVar('R')


class ExecutorStrategy(ABC):
    """
    Abstract strategy for task execution.

    Attributes:
        max_workers: Number of concurrent workers (1 for sequential).
    """

    max_workers: int

    @abstractmethod
    def submit(self, fn: Callable[[T], R], item: T) -> Future:
        """
        Submit a single task for execution.

        Args:
            fn: Function to execute.
            item: Argument to pass to the function.

        Returns:
            Future object that will contain the result or exception.
        """

    @abstractmethod
    def shutdown(self, wait: bool = True) -> None:
        """Release resources, optionally waiting for pending tasks."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown(wait=True)
        return False


class ThreadPoolStrategy(ExecutorStrategy):
    """
    Thread-based execution strategy.

    Deletions are network-bound, so threads overlap the waiting time.

    Args:
        max_workers: Maximum concurrent threads. Defaults to CLEANUP_MAX_WORKERS
                    to bound load on the document service.
    """

    def __init__(self, max_workers: int = None):
        if max_workers is None:
            max_workers = CLEANUP_MAX_WORKERS

        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='cleanup')
        self.max_workers = max_workers

    def submit(self, fn: Callable[[T], R], item: T) -> Future:
        return self._executor.submit(fn, item)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


class SequentialStrategy(ExecutorStrategy):
    """
    Sequential execution strategy.

    Executes each task at submit time and wraps the outcome in a completed
    Future. Deterministic ordering makes it the strategy of choice for
    single-document cleanup and tests.
    """

    def __init__(self):
        self.max_workers = 1

    def submit(self, fn: Callable[[T], R], item: T) -> Future:
        future: Future = Future()
        try:
            future.set_result(fn(item))
        except Exception as e:
            future.set_exception(e)
        return future

    def shutdown(self, wait: bool = True) -> None:
        """No-op for sequential strategy (no resources to release)."""
