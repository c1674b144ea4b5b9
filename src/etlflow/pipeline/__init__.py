# ========================
# src/etlflow/pipeline/__init__.py
# ========================

"""
ETL Pipeline Package

Core components of the asynchronous ETL engine:
- tasks: Task handle and the shared worker pool
- reader / chained_reader: Extract steps
- writer: Load steps (sink and transform modes)
- combiners: Sequential and parallel composition
- builder: Fluent pipeline assembly and execution
"""

from .builder import ETLBuilder, ETLReaderBuilder, ETLExecutorBuilder
from .chained_reader import ETLChainedReader, create_chained_reader
from .combiners import combine_seq, combine_parallel
from .errors import ETLError, PipelineExecutionError
from .reader import ETLReader, create_reader, create_sequential_reader
from .tasks import Task, get_executor, set_executor, shutdown_executor
from .writer import ETLWriter, create_writer, create_transform_writer

__all__ = [
    'ETLBuilder',
    'ETLReaderBuilder',
    'ETLExecutorBuilder',
    'ETLChainedReader',
    'create_chained_reader',
    'combine_seq',
    'combine_parallel',
    'ETLError',
    'PipelineExecutionError',
    'ETLReader',
    'create_reader',
    'create_sequential_reader',
    'Task',
    'get_executor',
    'set_executor',
    'shutdown_executor',
    'ETLWriter',
    'create_writer',
    'create_transform_writer'
]
