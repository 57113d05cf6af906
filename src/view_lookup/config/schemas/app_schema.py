"""Application configuration schema."""
from typing import Any, Dict
from pydantic import BaseModel, Field, ValidationError

from view_lookup.domain.core.exceptions import ConfigurationError

from .logging_schema import LoggingConfig
from .lookup_schema import LookupConfig


class AppConfig(BaseModel):
    """Application configuration."""

    lookup: LookupConfig = Field(default_factory=LookupConfig, description="Template lookup configuration")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")


def validate_config(config: Dict[str, Any]) -> AppConfig:
    """
    Validate a configuration dictionary.

    Args:
        config: Raw configuration

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    try:
        return AppConfig.model_validate(config)
    except ValidationError as e:
        fields = [".".join(str(part) for part in error["loc"]) for error in e.errors()]
        raise ConfigurationError(f"Invalid configuration: {e}", fields) from e
