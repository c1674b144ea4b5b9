"""
etlflow

In-process asynchronous extract / transform / load pipelines with sequential
and parallel combinators.
"""

from .pipeline import *  # noqa: F401,F403
from .pipeline import __all__

__version__ = "1.0.0"
