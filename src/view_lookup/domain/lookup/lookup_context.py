"""Lookup Context - everything needed to look up templates for one request.

The lookup context holds the view paths and the details of a rendering
request, and hands resolvers an interned details key. Since the key is only
recomputed when a detail actually changes, resolver caches can be hit with
an identity comparison for every lookup of the request.
"""

import re
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from view_lookup.domain.base.ports import HandlerRegistryPort, ResolverPort
from view_lookup.domain.core.exceptions import ValidationError
from view_lookup.domain.lookup.details import (
    FORMATS_DETAIL,
    LOCALE_DETAIL,
    DetailRegistry,
    DetailSet,
)
from view_lookup.domain.lookup.details_key import DetailsKey, DetailsKeyRegistry
from view_lookup.domain.lookup.search_path import LocationFactory, SearchPath
from view_lookup.domain.template.value_objects import Template, TemplateName


class LookupContext:
    """
    Lookup state of one rendering request: view paths plus details.

    Created once per request and mutated as details are negotiated (for
    example the locale taken from a request header). Not thread-safe; the
    only shared state it touches is the details key registry.
    """

    def __init__(self,
                 view_paths: Iterable[Any],
                 details: Optional[Mapping[str, Any]] = None,
                 *,
                 detail_registry: DetailRegistry,
                 handler_registry: HandlerRegistryPort,
                 key_registry: Optional[DetailsKeyRegistry] = None,
                 fallbacks: Iterable[ResolverPort] = (),
                 location_factory: Optional[LocationFactory] = None):
        """
        Initialize the lookup context.

        Args:
            view_paths: Resolvers (or paths, given a location factory) in priority order
            details: Initial detail values; unset details get their defaults
            detail_registry: Registry of the known detail dimensions
            handler_registry: Source of the recognized template extensions
            key_registry: Details key registry, the process-wide one by default
            fallbacks: Locations appended by with_fallbacks()
            location_factory: Callable turning path strings into resolvers
        """
        self._handler_registry = handler_registry
        self._default_handlers: Optional[List[str]] = None
        self._handlers_regexp: Optional[re.Pattern] = None
        self._view_paths = SearchPath(
            view_paths, fallbacks=fallbacks, location_factory=location_factory
        )
        self._details = DetailSet(
            detail_registry,
            key_registry or DetailsKeyRegistry.get_instance(),
            handlers=self.default_handlers,
        )
        self._details.update_details(details or {}, force_defaults_for_missing=True)

    # View paths

    @property
    def view_paths(self) -> SearchPath:
        return self._view_paths

    @view_paths.setter
    def view_paths(self, locations: Iterable[Any]) -> None:
        self._view_paths.set(locations)

    def find(self, name: Any, prefix: Optional[str] = None, partial: bool = False) -> Template:
        """
        Find the best template for a name.

        Raises:
            TemplateNotFoundError: If no view path has a matching template
        """
        return self._view_paths.find(*self._args_for_lookup(name, prefix, partial))

    find_template = find

    def find_all(self, name: Any, prefix: Optional[str] = None, partial: bool = False) -> List[Template]:
        """Find all templates for a name, best first; empty when nothing matches."""
        return self._view_paths.find_all(*self._args_for_lookup(name, prefix, partial))

    def exists(self, name: Any, prefix: Optional[str] = None, partial: bool = False) -> bool:
        """Check whether a template exists for a name. Names with nothing to look up never exist."""
        try:
            name, prefix = self.normalize_name(name, prefix)
        except ValidationError:
            return False
        return self._view_paths.exists(*self._normalized_args(name, prefix, partial))

    template_exists = exists

    def with_fallbacks(self):
        """Add the fallback view paths while the block runs. Useful when rendering a file."""
        return self._view_paths.with_fallbacks()

    def _args_for_lookup(self,
                         name: Any,
                         prefix: Optional[str],
                         partial: bool) -> Tuple[str, str, bool, Dict[str, List[Any]], DetailsKey]:
        name, prefix = self.normalize_name(name, prefix)
        return self._normalized_args(name, prefix, partial)

    def _normalized_args(self,
                         name: str,
                         prefix: str,
                         partial: bool) -> Tuple[str, str, bool, Dict[str, List[Any]], DetailsKey]:
        details_key = self.details_key
        details = self._details.lookup_details()
        return name, prefix, bool(partial), details, details_key

    def normalize_name(self, name: Any, prefix: Optional[str] = None) -> Tuple[str, str]:
        """
        Split a template name into its bare name and prefix.

        Legacy callers pass names with a handler extension ("show.erb") or
        with part of the path in the name ("posts/show"). Both are accepted:
        the extension is dropped and the directories move into the prefix.
        Trailing slashes are ignored, so "posts/" names the "posts" template.

        Raises:
            ValidationError: If no name is left after normalization
        """
        name = self.handlers_regexp.sub("", str(name))
        parts = name.rstrip("/").split("/")
        bare_name = parts.pop()
        prefix = "/".join(part for part in [prefix, *parts] if part is not None)
        template_name = TemplateName(bare_name, prefix)
        return template_name.name, template_name.prefix

    @property
    def default_handlers(self) -> List[str]:
        if self._default_handlers is None:
            self._default_handlers = list(self._handler_registry.extensions())
        return list(self._default_handlers)

    @property
    def handlers_regexp(self) -> re.Pattern:
        if self._handlers_regexp is None:
            extensions = "|".join(re.escape(ext) for ext in self.default_handlers)
            self._handlers_regexp = re.compile(rf"\.(?:{extensions})$") if extensions else re.compile(r"(?!)")
        return self._handlers_regexp

    # Details

    @property
    def details(self) -> Dict[str, List[Any]]:
        return self._details.details

    @property
    def detail_set(self) -> DetailSet:
        return self._details

    @property
    def details_key(self) -> DetailsKey:
        return self._details.details_key

    def get_detail(self, name: str) -> Any:
        return self._details.get(name)

    def set_detail(self, name: str, value: Any) -> None:
        self._details.set(name, value)

    @property
    def formats(self) -> List[Any]:
        return [value for value in self._details.get(FORMATS_DETAIL) if value is not None]

    @formats.setter
    def formats(self, value: Any) -> None:
        self._details.set(FORMATS_DETAIL, value)

    @property
    def locale(self) -> Any:
        return self._details.get(LOCALE_DETAIL)

    @locale.setter
    def locale(self, value: Any) -> None:
        self._details.set(LOCALE_DETAIL, value)

    def update_details(self,
                       new_details: Mapping[str, Any],
                       force_defaults_for_missing: bool = False,
                       work: Optional[Callable[[], Any]] = None) -> Any:
        """
        Merge new details into the current ones.

        If ``work`` is given the details are only changed while it runs and
        reverted afterwards; its result is returned.
        """
        return self._details.update_details(new_details, force_defaults_for_missing, work=work)

    @contextmanager
    def scoped_details(self,
                       new_details: Mapping[str, Any],
                       force_defaults_for_missing: bool = False) -> Iterator['LookupContext']:
        """Context manager form of update_details() with a block."""
        with self._details.scoped(new_details, force_defaults_for_missing):
            yield self

    def __repr__(self) -> str:
        return f"LookupContext(view_paths={self._view_paths!r}, details={self.details!r})"
