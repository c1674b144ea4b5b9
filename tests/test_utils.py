# ========================
# tests/test_utils.py
# ========================

import logging
import os
import sys
import tempfile
import unittest
from unittest import mock

# Add the src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src'))

from etlflow.utils.config import Config
from etlflow.utils.logging_setup import get_logger, setup_logging
from etlflow.utils.performance_monitor import PerformanceMonitor, monitor_performance


class TestConfig(unittest.TestCase):
    """Test environment-backed configuration."""

    def test_environment_values(self):
        env = {
            'ETL_MAX_WORKERS': '6',
            'ETL_THREAD_NAME_PREFIX': 'loader',
            'LOG_LEVEL': 'DEBUG',
            'ETL_PERFORMANCE_MONITORING': 'TRUE',
        }
        with mock.patch.dict(os.environ, env):
            config = Config()

        self.assertEqual(config.MAX_WORKERS, 6)
        self.assertEqual(config.THREAD_NAME_PREFIX, 'loader')
        self.assertEqual(config.LOG_LEVEL, 'DEBUG')
        self.assertTrue(config.ENABLE_PERFORMANCE_MONITORING)

    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            config = Config()

        self.assertEqual(config.MAX_WORKERS, min(32, (os.cpu_count() or 1) + 4))
        self.assertEqual(config.THREAD_NAME_PREFIX, 'etl-worker')
        self.assertEqual(config.LOG_LEVEL, 'INFO')
        self.assertFalse(config.ENABLE_PERFORMANCE_MONITORING)

    def test_dict_overrides(self):
        """Keys are case-insensitive; unknown keys are ignored."""
        config = Config({'max_workers': 3, 'unknown_setting': 'x'})

        self.assertEqual(config.MAX_WORKERS, 3)
        self.assertFalse(hasattr(config, 'UNKNOWN_SETTING'))

    def test_validate_config(self):
        self.assertTrue(all(Config({'max_workers': 4, 'log_level': 'info'}).validate_config().values()))

        validations = Config({'max_workers': 1, 'log_level': 'verbose'}).validate_config()
        self.assertFalse(validations['max_workers'])
        self.assertFalse(validations['log_level'])

    def test_save_and_load(self):
        config = Config({'max_workers': 5, 'thread_name_prefix': 'saved'})

        with tempfile.TemporaryDirectory() as temp_dir:
            file_path = os.path.join(temp_dir, 'config.json')
            config.save_to_file(file_path)
            loaded = Config.load_from_file(file_path)

        self.assertEqual(loaded.MAX_WORKERS, 5)
        self.assertEqual(loaded.THREAD_NAME_PREFIX, 'saved')
        self.assertEqual(loaded.to_dict(), config.to_dict())

    def test_str(self):
        text = str(Config({'max_workers': 7}))
        self.assertTrue(text.startswith("Configuration Settings:"))
        self.assertIn("MAX_WORKERS: 7", text)


class TestLoggingSetup(unittest.TestCase):
    """Test root logger configuration."""

    def setUp(self):
        root_logger = logging.getLogger()
        self._handlers = list(root_logger.handlers)
        self._level = root_logger.level

    def tearDown(self):
        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            if handler not in self._handlers:
                handler.close()
        for handler in self._handlers:
            root_logger.addHandler(handler)
        root_logger.setLevel(self._level)

    def test_console_only(self):
        setup_logging("WARNING")

        root_logger = logging.getLogger()
        self.assertEqual(root_logger.level, logging.WARNING)
        self.assertEqual(len(root_logger.handlers), 1)
        self.assertIsInstance(root_logger.handlers[0], logging.StreamHandler)

    def test_level_defaults_to_config(self):
        """Without an explicit level, LOG_LEVEL from the environment applies."""
        with mock.patch.dict(os.environ, {'LOG_LEVEL': 'ERROR'}):
            setup_logging()

        self.assertEqual(logging.getLogger().level, logging.ERROR)

    def test_log_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            log_dir = os.path.join(temp_dir, 'logs')
            setup_logging("DEBUG", log_file="etl.log", log_dir=log_dir)
            get_logger("etlflow.test").debug("written to file")

            root_logger = logging.getLogger()
            for handler in root_logger.handlers:
                handler.flush()
            with open(os.path.join(log_dir, 'etl.log')) as f:
                contents = f.read()

            for handler in list(root_logger.handlers):
                if isinstance(handler, logging.FileHandler):
                    root_logger.removeHandler(handler)
                    handler.close()

        self.assertIn("etlflow.test - DEBUG - written to file", contents)

    def test_get_logger(self):
        self.assertIs(get_logger("etlflow.pipeline"), logging.getLogger("etlflow.pipeline"))


class TestPerformanceMonitor(unittest.TestCase):
    """Test the performance monitor."""

    def test_monitor_summary(self):
        monitor = PerformanceMonitor("unit")
        monitor.start_monitoring()
        monitor.add_checkpoint("halfway", {'stage': 'read'})
        summary = monitor.stop_monitoring()

        self.assertEqual(summary['name'], "unit")
        self.assertGreaterEqual(summary['total_processing_time_seconds'], 0)
        self.assertGreater(summary['peak_memory_usage_mb'], 0)
        self.assertEqual(len(summary['checkpoints']), 1)
        self.assertEqual(summary['checkpoints'][0]['metadata'], {'stage': 'read'})

    def test_current_stats(self):
        monitor = PerformanceMonitor()
        monitor.start_monitoring()
        stats = monitor.get_current_stats()

        self.assertGreater(stats['current_memory_mb'], 0)
        self.assertEqual(stats['checkpoints'], 0)

    def test_context_manager_stops_on_error(self):
        with self.assertRaises(ValueError):
            with monitor_performance("failing") as monitor:
                raise ValueError("inside")

        self.assertIsNotNone(monitor.end_time)


if __name__ == '__main__':
    unittest.main()
