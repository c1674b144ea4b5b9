# ========================
# src/etlflow/pipeline/tasks.py
# ========================

"""
Task Primitive

A thin handle over ``concurrent.futures.Future`` that resolves exactly once,
plus the shared worker pool every unit of work is scheduled on.

Continuations (``then_apply``, ``then_compose``) are attached as done
callbacks and run on whichever thread completes the predecessor; they never
start independent work. Only ``spawn`` and the merge step of ``then_combine``
submit work to the pool. ``join`` is the only blocking call.
"""

import asyncio
import inspect
import logging
import threading
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar

from .errors import PipelineExecutionError
from ..utils.config import Config

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')
U = TypeVar('U')

_executor: Optional[Executor] = None
_executor_lock = threading.Lock()


def get_executor(config: Optional[Config] = None) -> Executor:
    """
    Return the shared worker pool, creating it on first use.

    The pool is built from ``config`` (or the environment when omitted) only
    when no pool exists yet; an existing pool is returned unchanged.

    Args:
        config (Config): Settings for a pool created by this call

    Returns:
        Executor: Pool sized by ``Config.MAX_WORKERS``
    """
    global _executor
    with _executor_lock:
        if _executor is None:
            config = config or Config()
            _executor = ThreadPoolExecutor(
                max_workers=config.MAX_WORKERS,
                thread_name_prefix=config.THREAD_NAME_PREFIX
            )
            logger.debug(f"Created shared worker pool with {config.MAX_WORKERS} workers")
        return _executor


def set_executor(executor: Optional[Executor]) -> None:
    """Install a caller-owned pool as the shared one (None resets to lazy creation)."""
    global _executor
    with _executor_lock:
        _executor = executor


def shutdown_executor(wait: bool = True) -> None:
    """Shut down the shared pool and forget it."""
    global _executor
    with _executor_lock:
        executor, _executor = _executor, None
    if executor is not None:
        executor.shutdown(wait=wait)
        logger.debug("Shared worker pool shut down")


def _await(awaitable):
    async def _wrapper():
        return await awaitable
    return asyncio.run(_wrapper())


def _invoke(fn: Callable[..., Any], *args: Any) -> Any:
    result = fn(*args)
    if inspect.isawaitable(result):
        return _await(result)
    return result


def _failure_of(future: Future) -> Optional[BaseException]:
    if future.cancelled():
        return CancelledError()
    return future.exception()


class Task(Generic[T]):
    """
    Handle to a deferred computation resolving once to a value or a failure.
    """

    __slots__ = ('_future',)

    def __init__(self, future: Optional[Future] = None):
        self._future = future if future is not None else Future()

    @classmethod
    def spawn(cls, fn: Callable[..., T], *args: Any,
              executor: Optional[Executor] = None) -> 'Task[T]':
        """
        Schedule ``fn(*args)`` on the pool and return its handle immediately.

        Awaitables returned by ``fn`` are driven to completion on the worker
        thread with ``asyncio.run``.
        """
        pool = executor if executor is not None else get_executor()
        return cls(pool.submit(_invoke, fn, *args))

    @classmethod
    def completed(cls, value: T) -> 'Task[T]':
        task = cls()
        task._future.set_result(value)
        return task

    @classmethod
    def failed(cls, exc: BaseException) -> 'Task[Any]':
        task = cls()
        task._future.set_exception(exc)
        return task

    @classmethod
    def all_of(cls, tasks: Iterable['Task[Any]']) -> 'Task[List[Any]]':
        """
        Join N tasks.

        Resolves to the list of values in input order once every task has
        resolved. If any failed, resolves to the failure of the first failed
        task in input order; all inputs are still awaited first.
        """
        tasks = list(tasks)
        derived: Task[List[Any]] = cls()
        if not tasks:
            derived._future.set_result([])
            return derived

        lock = threading.Lock()
        remaining = [len(tasks)]

        def _on_done(_):
            with lock:
                remaining[0] -= 1
                if remaining[0]:
                    return
            for task in tasks:
                failure = _failure_of(task._future)
                if failure is not None:
                    derived._future.set_exception(failure)
                    return
            derived._future.set_result([task._future.result() for task in tasks])

        for task in tasks:
            task._future.add_done_callback(_on_done)
        return derived

    def then_apply(self, fn: Callable[[T], R]) -> 'Task[R]':
        """Derive a task resolving to ``fn(value)``; failures pass through untouched."""
        derived: Task[R] = Task()

        def _on_done(future):
            failure = _failure_of(future)
            if failure is not None:
                derived._future.set_exception(failure)
                return
            try:
                value = fn(future.result())
            except BaseException as e:
                derived._future.set_exception(e)
            else:
                derived._future.set_result(value)

        self._future.add_done_callback(_on_done)
        return derived

    def then_compose(self, fn: Callable[[T], 'Task[R]']) -> 'Task[R]':
        """Derive a task adopting the outcome of the task returned by ``fn(value)``."""
        derived: Task[R] = Task()

        def _adopt(future):
            failure = _failure_of(future)
            if failure is not None:
                derived._future.set_exception(failure)
            else:
                derived._future.set_result(future.result())

        def _on_done(future):
            failure = _failure_of(future)
            if failure is not None:
                derived._future.set_exception(failure)
                return
            try:
                next_task = fn(future.result())
                if not isinstance(next_task, Task):
                    raise TypeError(f"Continuation must return a Task, got {type(next_task).__name__}")
                next_task._future.add_done_callback(_adopt)
            except BaseException as e:
                derived._future.set_exception(e)

        self._future.add_done_callback(_on_done)
        return derived

    def then_combine(self, other: 'Task[U]', fn: Callable[[T, U], R],
                     executor: Optional[Executor] = None) -> 'Task[R]':
        """
        Join this task with ``other`` and merge their values.

        ``fn`` is scheduled on the pool once both have resolved, so it may run
        on any worker. Fails with this task's failure if it failed, otherwise
        with ``other``'s.
        """
        return Task.all_of([self, other]).then_compose(
            lambda values: Task.spawn(fn, values[0], values[1], executor=executor)
        )

    def done(self) -> bool:
        return self._future.done()

    def join(self) -> T:
        """
        Block until resolved.

        Returns:
            The resolved value

        Raises:
            PipelineExecutionError: wrapping the original failure
        """
        try:
            return self._future.result()
        except (CancelledError, Exception) as e:
            raise PipelineExecutionError(e) from e

    def __repr__(self) -> str:
        if not self._future.done():
            state = 'pending'
        elif _failure_of(self._future) is not None:
            state = 'failed'
        else:
            state = 'completed'
        return f"<Task {state}>"
