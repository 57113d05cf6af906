"""Lookup Context Factory - builds per-request lookup contexts.

The factory owns the process-level collaborators: format and handler
registries, the locale context, the detail registry, the details key
registry and the fallback resolvers. Every context it creates shares them,
so details keys and resolver caches are reused across requests.
"""
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional

from view_lookup.config.manager import ConfigurationManager
from view_lookup.config.schemas import AppConfig
from view_lookup.domain.base.ports import FormatRegistryPort, HandlerRegistryPort, LocalePort, ResolverPort
from view_lookup.domain.lookup.details import DetailRegistry, register_default_details
from view_lookup.domain.lookup.details_key import DetailsKeyRegistry
from view_lookup.domain.lookup.lookup_context import LookupContext
from view_lookup.infrastructure.i18n.locale_context import LocaleContext
from view_lookup.infrastructure.logging.logger import get_logger
from view_lookup.infrastructure.template.file_system_resolver import FileSystemResolver
from view_lookup.infrastructure.template.format_registry import DEFAULT_FORMATS, FormatRegistry
from view_lookup.infrastructure.template.handler_registry import HandlerRegistry


class LookupContextFactory:
    """Creates lookup contexts sharing one set of process-level collaborators."""

    def __init__(self,
                 config: Optional[AppConfig] = None,
                 *,
                 format_registry: Optional[FormatRegistryPort] = None,
                 handler_registry: Optional[HandlerRegistryPort] = None,
                 locale_context: Optional[LocalePort] = None,
                 key_registry: Optional[DetailsKeyRegistry] = None):
        """
        Initialize the factory.

        Args:
            config: Application configuration, loaded through ConfigurationManager if None
            format_registry: Format registry, built from lookup.default_formats if None
            handler_registry: Handler registry, built from lookup.handler_extensions if None
            locale_context: Locale context, built from lookup.default_locale if None
            key_registry: Details key registry, the process-wide one if None
        """
        self.config = config or ConfigurationManager().get_config()
        lookup_config = self.config.lookup
        self._logger = get_logger(__name__)

        self.format_registry = format_registry or FormatRegistry(
            {symbol: DEFAULT_FORMATS.get(symbol, f"application/x-{symbol}")
             for symbol in lookup_config.default_formats}
        )
        self.handler_registry = handler_registry or HandlerRegistry(lookup_config.handler_extensions)
        self.locale_context = locale_context or LocaleContext(
            lookup_config.default_locale, lookup_config.available_locales
        )
        self.key_registry = key_registry or DetailsKeyRegistry.get_instance()
        self.detail_registry = register_default_details(
            DetailRegistry(),
            self.format_registry,
            self.locale_context,
            js_falls_back_to_html=lookup_config.js_format_falls_back_to_html,
        )
        self._resolvers: Dict[str, ResolverPort] = {}
        self._resolvers_lock = threading.Lock()
        self.fallbacks: List[ResolverPort] = [
            self.build_resolver(path) for path in lookup_config.fallback_paths
        ]

        self._logger.info(
            f"Lookup context factory ready: formats={self.format_registry.symbols()}, "
            f"handlers={self.handler_registry.extensions()}, "
            f"default locale={self.locale_context.locale}"
        )

    def build_resolver(self, path: str) -> ResolverPort:
        """Get the file system resolver for a path, shared by every context of this factory."""
        with self._resolvers_lock:
            resolver = self._resolvers.get(path)
            if resolver is None:
                resolver = FileSystemResolver(path, caching=self.config.lookup.cache_templates)
                self._resolvers[path] = resolver
            return resolver

    def create(self,
               view_paths: Iterable[Any],
               details: Optional[Mapping[str, Any]] = None) -> LookupContext:
        """
        Create a lookup context for one request.

        Args:
            view_paths: Resolvers or directory paths, in priority order
            details: Initial details, e.g. {"formats": ["json"], "locale": "pt"}

        Returns:
            A new LookupContext
        """
        return LookupContext(
            view_paths,
            details,
            detail_registry=self.detail_registry,
            handler_registry=self.handler_registry,
            key_registry=self.key_registry,
            fallbacks=self.fallbacks,
            location_factory=self.build_resolver,
        )
