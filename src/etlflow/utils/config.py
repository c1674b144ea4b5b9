# ========================
# src/etlflow/utils/config.py
# ========================

"""
Configuration Management

Centralized configuration for the ETL engine with environment support.
"""

import json
import os
from typing import Dict, Any, Optional


def _default_max_workers() -> int:
    return min(32, (os.cpu_count() or 1) + 4)


class Config:
    """
    Configuration class for the ETL engine.
    Supports environment variables and default values.
    """

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration.

        Args:
            config_dict (dict): Optional configuration overrides
        """
        # Worker Pool Configuration
        self.MAX_WORKERS = int(os.getenv('ETL_MAX_WORKERS', str(_default_max_workers())))
        self.THREAD_NAME_PREFIX = os.getenv('ETL_THREAD_NAME_PREFIX', 'etl-worker')

        # Logging Configuration
        self.LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

        # Performance Settings
        self.ENABLE_PERFORMANCE_MONITORING = os.getenv('ETL_PERFORMANCE_MONITORING', 'false').lower() == 'true'

        # Override with provided config
        if config_dict:
            self._update_from_dict(config_dict)

    def _update_from_dict(self, config_dict: Dict[str, Any]) -> None:
        """Update configuration from dictionary."""
        for key, value in config_dict.items():
            if hasattr(self, key.upper()):
                setattr(self, key.upper(), value)

    def validate_config(self) -> Dict[str, bool]:
        """
        Validate configuration values.

        Returns:
            dict: Validation results for each setting
        """
        validations = {}

        validations['max_workers'] = isinstance(self.MAX_WORKERS, int) and self.MAX_WORKERS >= 2
        validations['thread_name_prefix'] = bool(self.THREAD_NAME_PREFIX)

        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        validations['log_level'] = str(self.LOG_LEVEL).upper() in valid_log_levels

        return validations

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            attr: getattr(self, attr)
            for attr in dir(self)
            if not attr.startswith('_') and not callable(getattr(self, attr))
        }

    def save_to_file(self, file_path: str) -> None:
        """Save configuration to JSON file."""
        with open(file_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

    @classmethod
    def load_from_file(cls, file_path: str) -> 'Config':
        """Load configuration from JSON file."""
        with open(file_path, 'r') as f:
            config_dict = json.load(f)
        return cls(config_dict)

    def __str__(self) -> str:
        """String representation of configuration."""
        lines = ["Configuration Settings:"]
        config_dict = self.to_dict()
        for key, value in sorted(config_dict.items()):
            lines.append(f"  {key}: {value}")
        return "\n".join(lines)
