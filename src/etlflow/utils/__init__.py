# ========================
# src/etlflow/utils/__init__.py
# ========================

"""
Utilities Package

Configuration, logging and performance helpers shared by the ETL engine.
"""

from .config import Config
from .performance_monitor import monitor_performance, PerformanceMonitor
from .logging_setup import setup_logging, get_logger

__all__ = [
    'Config',
    'monitor_performance',
    'PerformanceMonitor',
    'setup_logging',
    'get_logger'
]
