"""Core domain primitives shared by all bounded contexts."""

from .exceptions import (
    ConfigurationError,
    DomainException,
    ResourceNotFoundError,
    ValidationError,
)

__all__ = [
    "DomainException",
    "ValidationError",
    "ResourceNotFoundError",
    "ConfigurationError",
]
