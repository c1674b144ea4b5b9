# ========================
# src/etlflow/pipeline/writer.py
# ========================

"""
Writer Module

Load step of the pipeline. Two construction modes:
- sink: wraps a consumer; resolves to the original input on success
- transform: wraps a T -> T function; resolves to its return value

Only sink mode preserves the written value for later post-write steps.
"""

from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from .tasks import Task

T = TypeVar('T')


@dataclass(frozen=True)
class ETLWriter(Generic[T]):
    """Writes data asynchronously."""

    write_fn: Callable[[T], Task[T]]

    def write(self, value: T) -> Task[T]:
        """
        Start writing ``value`` and return the handle immediately.

        Args:
            value: The data to write

        Returns:
            Task: Handle resolving when the write completes
        """
        return self.write_fn(value)


def create_writer(consumer: Callable[[T], Any],
                  executor: Optional[Executor] = None) -> ETLWriter[T]:
    """
    Create a sink-mode writer.

    The consumer's return value is discarded and the writer resolves to the
    value it was given.

    Args:
        consumer (callable): Function (or coroutine function) consuming the data
        executor (Executor): Optional pool overriding the shared one

    Returns:
        ETLWriter: Sink writer
    """
    return ETLWriter(
        lambda value: Task.spawn(consumer, value, executor=executor).then_apply(lambda _: value)
    )


def create_transform_writer(function: Callable[[T], T],
                            executor: Optional[Executor] = None) -> ETLWriter[T]:
    """
    Create a transform-mode writer resolving to ``function(value)``.

    Args:
        function (callable): Function (or coroutine function) writing the data
        executor (Executor): Optional pool overriding the shared one

    Returns:
        ETLWriter: Transform writer
    """
    return ETLWriter(lambda value: Task.spawn(function, value, executor=executor))
