"""Domain ports - interfaces implemented by infrastructure collaborators."""

from .format_registry_port import FormatRegistryPort
from .handler_registry_port import HandlerRegistryPort
from .locale_port import LocalePort
from .resolver_port import ResolverPort

__all__ = [
    "ResolverPort",
    "FormatRegistryPort",
    "LocalePort",
    "HandlerRegistryPort",
]
