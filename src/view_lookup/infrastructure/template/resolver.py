"""Base resolvers - cached, path-based template lookup.

CachingResolver memoizes lookups per details key and handler list. Because
details keys are interned, two lookups with equal details share a cache
entry and the key comparison is an identity check.

PathResolver turns a lookup into an ordered list of candidate file names:

    prefix/name{.locale,}{.format,}{.handler,}

expanded in the order of the detail values, so the best match comes first.
Subclasses only decide whether a candidate exists in their storage.
"""

import threading
from abc import abstractmethod
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from view_lookup.domain.base.ports import ResolverPort
from view_lookup.domain.template.value_objects import Template
from view_lookup.infrastructure.logging.logger import get_logger

CacheKey = Tuple[Any, str, str, bool, Tuple[str, ...]]


class CachingResolver(ResolverPort):
    """
    Resolver caching its results per (details key, name, prefix, partial, handlers).

    Resolvers can be shared by every request of the process (fallback
    locations are), so the cache is guarded by a lock.
    """

    def __init__(self, caching: bool = True):
        """
        Initialize the resolver.

        Args:
            caching: Whether lookups are memoized
        """
        self.caching = caching
        self._cache: Dict[CacheKey, Tuple[Template, ...]] = {}
        self._cache_lock = threading.RLock()
        self._logger = get_logger(__name__)

    def find_all(self,
                 name: str,
                 prefix: str,
                 partial: bool,
                 details: Mapping[str, Any],
                 details_key: Any) -> List[Template]:
        if not self.caching or details_key is None:
            return list(self._find_templates(name, prefix, partial, details))

        handlers = tuple(_options(details.get("handlers"))[:-1])
        cache_key = (details_key, name, prefix, bool(partial), handlers)
        templates = self._cache.get(cache_key)
        if templates is None:
            self._logger.debug("Cache miss for %s/%s in %s", prefix, name, self.describe())
            found = tuple(self._find_templates(name, prefix, partial, details))
            with self._cache_lock:
                templates = self._cache.setdefault(cache_key, found)
        return list(templates)

    def clear_cache(self) -> None:
        """Drop every cached lookup."""
        with self._cache_lock:
            self._cache.clear()

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    @abstractmethod
    def _find_templates(self,
                        name: str,
                        prefix: str,
                        partial: bool,
                        details: Mapping[str, Any]) -> List[Template]:
        """Perform an uncached lookup."""
        pass


class PathResolver(CachingResolver):
    """Resolver matching candidate file names built from the details."""

    def _find_templates(self,
                        name: str,
                        prefix: str,
                        partial: bool,
                        details: Mapping[str, Any]) -> List[Template]:
        path = self.build_path(name, prefix, partial)
        templates: List[Template] = []
        seen = set()
        for candidate, locale, format_, handler in self.candidates(path, details):
            identifier = self._locate(candidate)
            if identifier is None or identifier in seen:
                continue
            seen.add(identifier)
            templates.append(Template(
                identifier=identifier,
                virtual_path=path,
                handler=handler,
                format=format_,
                locale=locale,
                partial=bool(partial),
            ))
        return templates

    @staticmethod
    def build_path(name: str, prefix: str, partial: bool) -> str:
        """Build the virtual path of a template, partials get a leading underscore."""
        if partial:
            name = f"_{name}"
        return f"{prefix}/{name}" if prefix else name

    @staticmethod
    def candidates(path: str,
                   details: Mapping[str, Any]) -> Iterator[Tuple[str, Optional[str], Optional[str], Optional[str]]]:
        """
        Yield candidate file names with the locale, format and handler they encode.

        Candidates are ordered locale first, then format, then handler; for
        each of them the variant without that part comes last.
        """
        locales = _options(details.get("locale"))
        formats = _options(details.get("formats"))
        handlers = _options(details.get("handlers"))
        for locale in locales:
            for format_ in formats:
                for handler in handlers:
                    parts = [path] + [str(p) for p in (locale, format_, handler) if p is not None]
                    yield ".".join(parts), locale, format_, handler

    @abstractmethod
    def _locate(self, candidate: str) -> Optional[str]:
        """Return the identifier of the stored template for a candidate, or None."""
        pass


def _options(values: Any) -> List[Optional[str]]:
    if values is None:
        values = []
    elif isinstance(values, str) or not isinstance(values, Sequence):
        values = [values]
    return [str(value) for value in values if value is not None] + [None]
