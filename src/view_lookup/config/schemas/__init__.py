"""Configuration schemas package."""

from .app_schema import AppConfig, validate_config
from .logging_schema import LoggingConfig
from .lookup_schema import LookupConfig

__all__ = [
    "AppConfig",
    "validate_config",
    "LookupConfig",
    "LoggingConfig",
]
