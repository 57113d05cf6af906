"""Search Path - ordered resolver locations queried by a lookup context."""

from contextlib import contextmanager
from os import PathLike
from typing import Any, Callable, Iterable, Iterator, List, Mapping, Optional, Tuple

from view_lookup.domain.base.ports import ResolverPort
from view_lookup.domain.template.exceptions import InvalidSearchPathError, TemplateNotFoundError
from view_lookup.domain.template.value_objects import Template
from view_lookup.infrastructure.logging.logger import get_logger

LocationFactory = Callable[[str], ResolverPort]


class SearchPath:
    """
    Ordered, mutable list of resolver locations.

    The path owns its own list: the locations passed in are copied, so
    callers can keep mutating their list without affecting lookups. Plain
    strings and paths are turned into resolvers through the location factory.

    A search path belongs to a single lookup context and is not thread-safe.
    """

    def __init__(self,
                 locations: Iterable[Any] = (),
                 *,
                 fallbacks: Iterable[ResolverPort] = (),
                 location_factory: Optional[LocationFactory] = None):
        """
        Initialize the search path.

        Args:
            locations: Initial resolvers, or strings/paths when a factory is given
            fallbacks: Locations appended temporarily by with_fallbacks()
            location_factory: Callable turning a string path into a resolver
        """
        self._location_factory = location_factory
        self._locations: List[ResolverPort] = []
        self._fallbacks: Tuple[ResolverPort, ...] = tuple(self._to_location(f) for f in fallbacks)
        self._logger = get_logger(__name__)
        self.set(locations)

    def set(self, locations: Iterable[Any]) -> None:
        """Replace all locations with a normalized copy of the given ones."""
        if isinstance(locations, (str, PathLike, ResolverPort)):
            locations = [locations]
        self._locations = [self._to_location(location) for location in locations]

    @property
    def locations(self) -> Tuple[ResolverPort, ...]:
        return tuple(self._locations)

    @property
    def fallbacks(self) -> Tuple[ResolverPort, ...]:
        return self._fallbacks

    def push(self, location: Any) -> ResolverPort:
        """Append a location to the end of the path."""
        resolver = self._to_location(location)
        self._locations.append(resolver)
        return resolver

    def pop(self) -> ResolverPort:
        """Remove and return the last location."""
        return self._locations.pop()

    def find(self,
             name: str,
             prefix: str,
             partial: bool,
             details: Mapping[str, Any],
             details_key: Any) -> Template:
        """
        Find the first template matching the name across all locations.

        Raises:
            TemplateNotFoundError: If no location yields a template
        """
        for location in self._locations:
            templates = location.find_all(name, prefix, partial, details, details_key)
            if templates:
                return templates[0]

        self._logger.warning(
            "Template %s not found in %d view paths",
            f"{prefix}/{name}" if prefix else name,
            len(self._locations),
        )
        raise TemplateNotFoundError(
            name,
            prefix,
            partial,
            searched=[location.describe() for location in self._locations],
            details={k: v for k, v in details.items() if k != "handlers"},
        )

    def find_all(self,
                 name: str,
                 prefix: str,
                 partial: bool,
                 details: Mapping[str, Any],
                 details_key: Any) -> List[Template]:
        """Find every matching template, in location order then per-location order."""
        templates: List[Template] = []
        for location in self._locations:
            templates.extend(location.find_all(name, prefix, partial, details, details_key))
        return templates

    def exists(self,
               name: str,
               prefix: str,
               partial: bool,
               details: Mapping[str, Any],
               details_key: Any) -> bool:
        """Check whether any location has a matching template."""
        return any(
            location.exists(name, prefix, partial, details, details_key)
            for location in self._locations
        )

    @contextmanager
    def with_fallbacks(self) -> Iterator['SearchPath']:
        """
        Temporarily append the fallback locations to the path.

        Fallbacks already on the path are not added twice. Exactly the added
        locations are removed again, last one first, however the block exits.
        """
        added: List[ResolverPort] = []
        try:
            for fallback in self._fallbacks:
                if fallback in self._locations:
                    continue
                self._locations.append(fallback)
                added.append(fallback)
            if added:
                self._logger.debug("Added %d fallback view paths", len(added))
            yield self
        finally:
            for fallback in reversed(added):
                self._remove_last(fallback)

    def _remove_last(self, location: ResolverPort) -> None:
        for index in range(len(self._locations) - 1, -1, -1):
            if self._locations[index] is location:
                del self._locations[index]
                return

    def _to_location(self, location: Any) -> ResolverPort:
        if isinstance(location, ResolverPort):
            return location
        if isinstance(location, (str, PathLike)):
            if self._location_factory is None:
                raise InvalidSearchPathError(location, "no location factory configured for paths")
            return self._location_factory(str(location))
        raise InvalidSearchPathError(location, f"expected a resolver or a path, got {type(location).__name__}")

    def __len__(self) -> int:
        return len(self._locations)

    def __iter__(self) -> Iterator[ResolverPort]:
        return iter(list(self._locations))

    def __contains__(self, location: object) -> bool:
        return location in self._locations

    def __getitem__(self, index: int) -> ResolverPort:
        return self._locations[index]

    def __repr__(self) -> str:
        return f"SearchPath({[location.describe() for location in self._locations]!r})"
