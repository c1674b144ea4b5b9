# ========================
# src/etlflow/pipeline/combiners.py
# ========================

"""
Combiners Module

Composition algebra for units of work. ``combine_seq`` and ``combine_parallel``
dispatch on the kind of the first unit:

- two ETLReaders plus a merge function -> ETLReader
- two ETLChainedReaders plus a merge function -> ETLChainedReader
  (both receive the same input)
- two or more ETLWriters -> ETLWriter

Sequential combinations start each unit only after the previous one resolved.
Parallel combinations start every unit at once and join on all of them.
All argument checks happen here, before any task is created.
"""

import logging
from functools import singledispatch
from typing import Any, Callable

from .chained_reader import ETLChainedReader
from .reader import ETLReader
from .tasks import Task
from .writer import ETLWriter

logger = logging.getLogger(__name__)

MIN_WRITERS = 2


def _require(unit: Any, kind: type) -> None:
    if not isinstance(unit, kind):
        raise TypeError(f"Expected {kind.__name__}, got {type(unit).__name__}")


def _require_writers(writers) -> None:
    if len(writers) < MIN_WRITERS:
        raise ValueError("At least two writers are required")
    for writer in writers:
        _require(writer, ETLWriter)


@singledispatch
def combine_seq(first, *others):
    """
    Combine units of work sequentially.

    Readers: ``combine_seq(reader1, reader2, combine_function)``. reader2 is
    only started once reader1 resolved; resolves to
    ``combine_function(r1, r2)``.

    Chained readers: ``combine_seq(chained1, chained2, combine_function)``.
    Both read the same input value, chained2 after chained1 resolved.

    Writers: ``combine_seq(writer1, writer2, ...)``. Writes the value to each
    writer in listed order, each after the previous one resolved; resolves to
    the last writer's value.

    Raises:
        ValueError: fewer than two writers
        TypeError: unsupported or mixed unit kinds
    """
    raise TypeError(f"Cannot combine units of type {type(first).__name__}")


@singledispatch
def combine_parallel(first, *others):
    """
    Combine units of work in parallel.

    Readers: ``combine_parallel(reader1, reader2, combine_function)``. Both are
    started at once; ``combine_function`` runs on the worker pool once both
    resolved.

    Chained readers: ``combine_parallel(chained1, chained2, combine_function)``.
    Both read the same input value concurrently.

    Writers: ``combine_parallel(writer1, writer2, ...)``. Writes the value to
    all writers at once and resolves to that value after every writer
    completed. Writer results are discarded.

    Raises:
        ValueError: fewer than two writers
        TypeError: unsupported or mixed unit kinds
    """
    raise TypeError(f"Cannot combine units of type {type(first).__name__}")


@combine_seq.register(ETLReader)
def _combine_seq_readers(reader1: ETLReader, reader2: ETLReader,
                         combine_function: Callable[[Any, Any], Any]) -> ETLReader:
    _require(reader2, ETLReader)

    def _read() -> Task:
        return reader1.read().then_compose(
            lambda r1: reader2.read().then_apply(lambda r2: combine_function(r1, r2))
        )

    return ETLReader(_read)


@combine_parallel.register(ETLReader)
def _combine_parallel_readers(reader1: ETLReader, reader2: ETLReader,
                              combine_function: Callable[[Any, Any], Any]) -> ETLReader:
    _require(reader2, ETLReader)
    return ETLReader(lambda: reader1.read().then_combine(reader2.read(), combine_function))


@combine_seq.register(ETLChainedReader)
def _combine_seq_chained(reader1: ETLChainedReader, reader2: ETLChainedReader,
                         combine_function: Callable[[Any, Any], Any]) -> ETLChainedReader:
    _require(reader2, ETLChainedReader)

    def _read(value) -> Task:
        return reader1.read(value).then_compose(
            lambda r1: reader2.read(value).then_apply(lambda r2: combine_function(r1, r2))
        )

    return ETLChainedReader(_read)


@combine_parallel.register(ETLChainedReader)
def _combine_parallel_chained(reader1: ETLChainedReader, reader2: ETLChainedReader,
                              combine_function: Callable[[Any, Any], Any]) -> ETLChainedReader:
    _require(reader2, ETLChainedReader)
    return ETLChainedReader(
        lambda value: reader1.read(value).then_combine(reader2.read(value), combine_function)
    )


@combine_seq.register(ETLWriter)
def _combine_seq_writers(*writers: ETLWriter) -> ETLWriter:
    _require_writers(writers)
    logger.debug(f"Combining {len(writers)} writers sequentially")

    def _write(value) -> Task:
        task = writers[0].write(value)
        for writer in writers[1:]:
            task = task.then_compose(lambda _, writer=writer: writer.write(value))
        return task

    return ETLWriter(_write)


@combine_parallel.register(ETLWriter)
def _combine_parallel_writers(*writers: ETLWriter) -> ETLWriter:
    _require_writers(writers)
    logger.debug(f"Combining {len(writers)} writers in parallel")

    def _write(value) -> Task:
        return Task.all_of([writer.write(value) for writer in writers]).then_apply(lambda _: value)

    return ETLWriter(_write)
