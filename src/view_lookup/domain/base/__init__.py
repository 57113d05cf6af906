"""Base domain layer - ports shared by the lookup and template contexts."""

from .ports import FormatRegistryPort, HandlerRegistryPort, LocalePort, ResolverPort

__all__ = [
    "ResolverPort",
    "FormatRegistryPort",
    "LocalePort",
    "HandlerRegistryPort",
]
