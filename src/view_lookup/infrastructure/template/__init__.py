"""Template infrastructure - resolvers and the format/handler registries."""

from .file_system_resolver import FileSystemResolver
from .format_registry import DEFAULT_FORMATS, FormatRegistry
from .handler_registry import HandlerRegistry
from .memory_resolver import InMemoryResolver
from .resolver import CachingResolver, PathResolver

__all__ = [
    "CachingResolver",
    "PathResolver",
    "FileSystemResolver",
    "InMemoryResolver",
    "FormatRegistry",
    "HandlerRegistry",
    "DEFAULT_FORMATS",
]
