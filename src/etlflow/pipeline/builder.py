# ========================
# src/etlflow/pipeline/builder.py
# ========================

"""
Pipeline Builder Module

Fluent assembly of an extract -> transform -> load pipeline.

    ETLBuilder()
        .read(reader)            # ETLReaderBuilder[T]
        .chain(chained_reader)   # ETLReaderBuilder[R]
        .map(mapper)             # ETLReaderBuilder[R]
        .write(writer)           # ETLExecutorBuilder[T]
        .map(mapper)             # ETLExecutorBuilder[R]
        .post_write(action)      # ETLExecutorBuilder[R]
        .execute()

Every step returns a new builder; none is mutated in place, so intermediate
builders can be reused.
"""

import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from .chained_reader import ETLChainedReader
from .errors import PipelineExecutionError
from .reader import ETLReader
from .tasks import Task, get_executor
from .writer import ETLWriter
from ..utils.config import Config
from ..utils.performance_monitor import monitor_performance

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


class ETLBuilder:
    """
    Entry point for building an ETL pipeline.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        The shared worker pool is created from ``config`` if it does not
        exist yet; a pool that is already running keeps its settings.

        Args:
            config (Config): Configuration object
        """
        self.config = config or Config()
        get_executor(self.config)

    def read(self, reader: ETLReader[T]) -> 'ETLReaderBuilder[T]':
        """
        Start the pipeline with a reader.

        Args:
            reader (ETLReader): Reader responsible for extracting the data

        Returns:
            ETLReaderBuilder: Builder for the read phase
        """
        return ETLReaderBuilder(reader, self.config)


class ETLReaderBuilder(Generic[T]):
    """
    Read phase: chains and maps on top of a deferred reader.
    Nothing runs until ``write`` is called.
    """

    def __init__(self, reader: ETLReader[T], config: Config):
        self._reader = reader
        self._config = config

    def chain(self, chained_reader: ETLChainedReader[T, R]) -> 'ETLReaderBuilder[R]':
        """
        Feed the current reader's value into a chained reader.

        Args:
            chained_reader (ETLChainedReader): Reader taking the current value as input

        Returns:
            ETLReaderBuilder: Builder over the chained reader's result
        """
        reader = self._reader
        return ETLReaderBuilder(
            ETLReader(lambda: reader.read().then_compose(chained_reader.read)),
            self._config
        )

    def map(self, mapper: Callable[[T], R]) -> 'ETLReaderBuilder[R]':
        """
        Apply a transformation to the data read.

        Args:
            mapper (callable): Pure function of the current value

        Returns:
            ETLReaderBuilder: Builder over the transformed value
        """
        reader = self._reader
        return ETLReaderBuilder(ETLReader(lambda: reader.read().then_apply(mapper)), self._config)

    def write(self, writer: ETLWriter[T]) -> 'ETLExecutorBuilder[T]':
        """
        Seal the read phase and load the data.

        Starts the assembled reader chain now and feeds its result to
        ``writer``.

        Args:
            writer (ETLWriter): Writer responsible for loading the data

        Returns:
            ETLExecutorBuilder: Builder over the writer's completion
        """
        logger.debug("Starting read phase")
        return ETLExecutorBuilder(self._reader.read().then_compose(writer.write), self._config)


class ETLExecutorBuilder(Generic[T]):
    """
    Post-write phase over the pending result of the write.
    """

    def __init__(self, task: Task[T], config: Config):
        self._task = task
        self._config = config

    def map(self, mapper: Callable[[T], R]) -> 'ETLExecutorBuilder[R]':
        """Transform the writer's resolved value."""
        return ETLExecutorBuilder(self._task.then_apply(mapper), self._config)

    def post_write(self, action: Callable[[T], Any]) -> 'ETLExecutorBuilder[T]':
        """
        Run a side-effecting action after the write resolved.
        The carried value is left unchanged.
        """
        def _run(value: T) -> T:
            action(value)
            return value

        return ETLExecutorBuilder(self._task.then_apply(_run), self._config)

    def execute(self) -> T:
        """
        Block until the pipeline resolves.

        Returns:
            The final value carried by the pipeline

        Raises:
            PipelineExecutionError: any stage failed; ``cause`` holds the original exception
        """
        logger.info("Executing ETL pipeline...")
        try:
            if self._config.ENABLE_PERFORMANCE_MONITORING:
                with monitor_performance("ETL pipeline") as monitor:
                    result = self._task.join()
                    monitor.add_checkpoint('resolved')
            else:
                result = self._task.join()
        except PipelineExecutionError as e:
            logger.error(f"ETL pipeline failed: {e}")
            raise
        logger.info("ETL pipeline finished successfully.")
        return result
