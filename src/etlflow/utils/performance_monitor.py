# ========================
# src/etlflow/utils/performance_monitor.py
# ========================

"""
Performance Monitoring Utilities

Wall-clock and memory tracking around a blocking pipeline execution.
"""

import os
import time
import logging
from contextlib import contextmanager
from typing import Dict, Any, Optional

import psutil

logger = logging.getLogger(__name__)


class PerformanceMonitor:
    """
    Tracks elapsed time, peak resident memory and named checkpoints
    for one pipeline execution.
    """

    def __init__(self, name: str = "Pipeline"):
        """
        Initialize performance monitor.

        Args:
            name (str): Name for this monitoring session
        """
        self.name = name
        self.start_time = None
        self.end_time = None
        self.peak_memory_mb = 0.0
        self.checkpoints = []

        logger.debug(f"PerformanceMonitor initialized: {name}")

    def start_monitoring(self) -> None:
        """Start performance monitoring."""
        self.start_time = time.time()
        self.peak_memory_mb = self._get_memory_usage_mb()

        logger.info(f"{self.name} - Performance monitoring started")
        logger.debug(f"Initial memory usage: {self.peak_memory_mb:.2f} MB")

    def add_checkpoint(self, name: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """
        Add a performance checkpoint.

        Args:
            name (str): Checkpoint name
            metadata (dict): Optional metadata to store
        """
        memory_mb = self._get_memory_usage_mb()
        self.peak_memory_mb = max(self.peak_memory_mb, memory_mb)
        checkpoint = {
            'name': name,
            'timestamp': time.time(),
            'memory_mb': memory_mb,
            'metadata': metadata or {}
        }
        self.checkpoints.append(checkpoint)
        logger.debug(f"Checkpoint '{name}': {checkpoint}")

    def stop_monitoring(self) -> Dict[str, Any]:
        """
        Stop monitoring and return performance summary.

        Returns:
            dict: Performance statistics
        """
        self.end_time = time.time()
        self.peak_memory_mb = max(self.peak_memory_mb, self._get_memory_usage_mb())
        total_time = self.end_time - self.start_time if self.start_time else 0

        summary = {
            'name': self.name,
            'total_processing_time_seconds': total_time,
            'peak_memory_usage_mb': self.peak_memory_mb,
            'checkpoints': self.checkpoints
        }

        self._log_summary(summary)
        return summary

    def _log_summary(self, summary: Dict[str, Any]) -> None:
        logger.info(
            f"{summary['name']} - finished in {summary['total_processing_time_seconds']:.3f}s, "
            f"peak memory {summary['peak_memory_usage_mb']:.2f} MB, "
            f"{len(summary['checkpoints'])} checkpoints"
        )

    def _get_memory_usage_mb(self) -> float:
        """Get current memory usage in MB."""
        process = psutil.Process(os.getpid())
        return process.memory_info().rss / (1024 * 1024)

    def get_current_stats(self) -> Dict[str, Any]:
        """Get current performance statistics."""
        elapsed = time.time() - self.start_time if self.start_time else 0
        return {
            'elapsed_seconds': elapsed,
            'current_memory_mb': self._get_memory_usage_mb(),
            'peak_memory_mb': self.peak_memory_mb,
            'checkpoints': len(self.checkpoints)
        }


@contextmanager
def monitor_performance(name: str = "Pipeline"):
    """
    Context manager for easy performance monitoring.

    Args:
        name (str): Name for this monitoring session

    Yields:
        PerformanceMonitor: Monitor instance
    """
    monitor = PerformanceMonitor(name)
    monitor.start_monitoring()
    try:
        yield monitor
    finally:
        monitor.stop_monitoring()
