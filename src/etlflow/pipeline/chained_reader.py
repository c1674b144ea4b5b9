# ========================
# src/etlflow/pipeline/chained_reader.py
# ========================

"""
Chained Reader Module

A read step that takes the previous step's value as its input.
"""

from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from .tasks import Task

T = TypeVar('T')
R = TypeVar('R')


@dataclass(frozen=True)
class ETLChainedReader(Generic[T, R]):
    """Asynchronously maps an input of type T to a result of type R."""

    read_fn: Callable[[T], Task[R]]

    def read(self, value: T) -> Task[R]:
        return self.read_fn(value)


def create_chained_reader(function: Callable[[T], R],
                          executor: Optional[Executor] = None) -> ETLChainedReader[T, R]:
    """
    Create a chained reader running ``function`` on the worker pool.

    Args:
        function (callable): Function (or coroutine function) of the input value
        executor (Executor): Optional pool overriding the shared one

    Returns:
        ETLChainedReader: Chained reader over the function
    """
    return ETLChainedReader(lambda value: Task.spawn(function, value, executor=executor))
