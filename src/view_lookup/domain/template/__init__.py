"""Template bounded context - located template candidates and lookup errors."""

from .exceptions import (
    DetailConfigurationError,
    InvalidDetailValueError,
    InvalidSearchPathError,
    TemplateNotFoundError,
    UnknownDetailError,
)
from .value_objects import Template, TemplateName

__all__ = [
    "Template",
    "TemplateName",
    "TemplateNotFoundError",
    "InvalidDetailValueError",
    "UnknownDetailError",
    "InvalidSearchPathError",
    "DetailConfigurationError",
]
