# ========================
# src/etlflow/pipeline/reader.py
# ========================

"""
Reader Module

Extract step of the pipeline: a zero-argument unit of work producing a value.
"""

from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from .tasks import Task

T = TypeVar('T')
T1 = TypeVar('T1')
T2 = TypeVar('T2')
R = TypeVar('R')


@dataclass(frozen=True)
class ETLReader(Generic[T]):
    """
    Reads data asynchronously.

    Wraps a function returning a fresh ``Task`` per call. Readers hold no
    state, so the same reader can be read any number of times.
    """

    read_fn: Callable[[], Task[T]]

    def read(self) -> Task[T]:
        """
        Start the read and return its handle immediately.

        Returns:
            Task: Handle resolving to the data read
        """
        return self.read_fn()


def create_reader(supplier: Callable[[], T],
                  executor: Optional[Executor] = None) -> ETLReader[T]:
    """
    Create a reader running ``supplier`` on the worker pool.

    Args:
        supplier (callable): Zero-argument function (or coroutine function) producing the data
        executor (Executor): Optional pool overriding the shared one

    Returns:
        ETLReader: Reader over the supplier
    """
    return ETLReader(lambda: Task.spawn(supplier, executor=executor))


def create_sequential_reader(first_read: Callable[[], T1],
                             second_read: Callable[[T1], T2],
                             merge: Optional[Callable[[T1, T2], R]] = None,
                             executor: Optional[Executor] = None) -> ETLReader:
    """
    Create a reader whose second read depends on the result of the first.

    Without ``merge`` the reader resolves to ``second_read(first)``, applied as
    a continuation of the first read. With ``merge`` the second read is
    scheduled as its own task and the reader resolves to
    ``merge(first, second)``.

    Args:
        first_read (callable): Supplier for the first read
        second_read (callable): Function of the first read's result
        merge (callable): Optional function combining both results
        executor (Executor): Optional pool overriding the shared one

    Returns:
        ETLReader: Reader running both reads in order
    """
    if merge is None:
        return ETLReader(lambda: Task.spawn(first_read, executor=executor).then_apply(second_read))

    def _read():
        return Task.spawn(first_read, executor=executor).then_compose(
            lambda first: Task.spawn(second_read, first, executor=executor).then_apply(
                lambda second: merge(first, second)
            )
        )

    return ETLReader(_read)
