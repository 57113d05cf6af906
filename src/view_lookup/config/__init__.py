"""Configuration package."""

from .manager import ConfigurationManager
from .schemas import AppConfig, LoggingConfig, LookupConfig, validate_config

__all__ = [
    "ConfigurationManager",
    "AppConfig",
    "LookupConfig",
    "LoggingConfig",
    "validate_config",
]
