"""
Settle-all task execution for Paperless Summarizer.

Used by the cleanup workflow to delete summary notes: all deletions of a
page run concurrently on a ThreadPoolStrategy, while single-document cleanup
runs the same code path on a SequentialStrategy.

Components:
    ExecutorStrategy - Abstract base class defining the execution interface
    ThreadPoolStrategy - Bounded thread pool execution
    SequentialStrategy - In-thread execution (single document, tests)
    ParallelTaskRunner - Runs a task group and collects every outcome
    TaskResult - Outcome of one task
"""

from .executor_strategy import (
    ExecutorStrategy,
    SequentialStrategy,
    ThreadPoolStrategy,
)
from .task_runner import ParallelTaskRunner, TaskResult

__all__ = [
    'ExecutorStrategy',
    'ThreadPoolStrategy',
    'SequentialStrategy',
    'ParallelTaskRunner',
    'TaskResult',
]
