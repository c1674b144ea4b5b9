# ========================
# src/etlflow/pipeline/errors.py
# ========================

"""Error definitions for the ETL engine."""

from typing import Any, Dict


class ETLError(Exception):
    """Base exception for all ETL engine errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class PipelineExecutionError(ETLError):
    """
    A task resolved to a failure and the caller blocked on it.

    The original exception raised by the reader, writer or transform body
    is kept untouched in ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"{type(cause).__name__}: {cause}", cause_type=type(cause).__name__)
        self.cause = cause
