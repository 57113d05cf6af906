"""Detail dimensions and the per-request detail set.

A detail is a named axis of template variation such as the output format or
the locale. Details are registered once at setup time in a DetailRegistry as
descriptors; every DetailSet dispatches its reads and writes through the
descriptor table, so details registered later are still settable and
gettable by name on existing sets.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

from view_lookup.domain.base.ports import FormatRegistryPort, LocalePort
from view_lookup.domain.lookup.details_key import (
    DetailsKey,
    DetailsKeyRegistry,
    DetailsSnapshot,
)
from view_lookup.domain.template.exceptions import (
    DetailConfigurationError,
    InvalidDetailValueError,
    UnknownDetailError,
)
from view_lookup.infrastructure.logging.logger import get_logger

HANDLERS_DETAIL = "handlers"
FORMATS_DETAIL = "formats"
LOCALE_DETAIL = "locale"
WILDCARD_FORMAT = "*/*"

logger = get_logger(__name__)


def normalize_detail_value(detail: str, value: Any) -> List[Any]:
    """
    Normalize a raw detail value into a deduplicated, ordered list.

    Args:
        detail: Name of the detail, used in error messages
        value: A single value, a list/tuple of values, or None

    Returns:
        List of values with None items and duplicates removed (may be empty)

    Raises:
        InvalidDetailValueError: If the value is a container that does not
            describe an ordered list, or an item is unhashable
    """
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        items = list(value)
    elif isinstance(value, (str, Enum)) or not hasattr(value, "__iter__"):
        items = [value]
    else:
        raise InvalidDetailValueError(
            detail, value, f"expected a value or a list of values, got {type(value).__name__}"
        )

    normalized: List[Any] = []
    for item in items:
        if item is None:
            continue
        try:
            hash(item)
        except TypeError:
            raise InvalidDetailValueError(detail, value, f"item {item!r} is not hashable")
        if item not in normalized:
            normalized.append(item)
    return normalized


@dataclass(frozen=True)
class DetailDescriptor:
    """
    Registration record of one detail dimension.

    Attributes:
        name: Detail name (e.g. 'formats', 'locale')
        default_provider: No-argument callable returning the default values
        write_hook: Optional callable applied to the normalized values on write
        read_hook: Optional callable producing the externally visible value
        restore_hook: Optional callable invoked with the restored values when
            a scoped update is rolled back
    """
    name: str
    default_provider: Callable[[], Sequence[Any]]
    write_hook: Optional[Callable[[List[Any]], List[Any]]] = None
    read_hook: Optional[Callable[[List[Any]], Any]] = None
    restore_hook: Optional[Callable[[List[Any]], None]] = None

    def defaults(self) -> List[Any]:
        """Get the normalized default values, which must not be empty."""
        values = normalize_detail_value(self.name, list(self.default_provider() or []))
        if not values:
            raise DetailConfigurationError(self.name, "default provider returned no values")
        return values


class DetailRegistry:
    """
    Registry of detail dimensions.

    Registration normally happens at process setup. Registering a name twice
    replaces its descriptor in place, keeping the original position so the
    ordering of details keys does not change.
    """

    def __init__(self):
        self._descriptors: Dict[str, DetailDescriptor] = {}
        self._registration_lock = threading.RLock()

    def register(self,
                 name: str,
                 default_provider: Callable[[], Sequence[Any]],
                 *,
                 write_hook: Optional[Callable[[List[Any]], List[Any]]] = None,
                 read_hook: Optional[Callable[[List[Any]], Any]] = None,
                 restore_hook: Optional[Callable[[List[Any]], None]] = None) -> DetailDescriptor:
        """
        Register a detail dimension.

        Args:
            name: Detail name
            default_provider: Callable returning the default values
            write_hook: Optional transformation of normalized values on write
            read_hook: Optional transformation of stored values on read
            restore_hook: Optional callback run when a scoped update is undone

        Returns:
            The registered descriptor

        Raises:
            DetailConfigurationError: If the name is empty or reserved
        """
        if not name:
            raise DetailConfigurationError(str(name), "detail name must not be empty")
        if name == HANDLERS_DETAIL:
            raise DetailConfigurationError(name, "the handlers detail is reserved")

        descriptor = DetailDescriptor(
            name=name,
            default_provider=default_provider,
            write_hook=write_hook,
            read_hook=read_hook,
            restore_hook=restore_hook,
        )
        with self._registration_lock:
            replaced = name in self._descriptors
            self._descriptors[name] = descriptor
        logger.debug("%s detail: %s", "Re-registered" if replaced else "Registered", name)
        return descriptor

    def get(self, name: str) -> DetailDescriptor:
        """Get the descriptor of a registered detail."""
        try:
            return self._descriptors[name]
        except KeyError:
            raise UnknownDetailError(name, self.names()) from None

    def names(self) -> List[str]:
        """Get the registered detail names in registration order."""
        return list(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __iter__(self) -> Iterator[DetailDescriptor]:
        return iter(list(self._descriptors.values()))

    def __len__(self) -> int:
        return len(self._descriptors)


class DetailSet:
    """
    Current detail values of one lookup context.

    Values are stored as tuples in a dict that is replaced, never mutated,
    on change, so a scoped update can roll back by restoring the previous
    dict. The details key is memoized and only dropped when a write actually
    changes a value.

    The handlers detail is fixed at construction and takes no part in
    equivalence or in the details key.
    """

    def __init__(self,
                 registry: DetailRegistry,
                 key_registry: Optional[DetailsKeyRegistry] = None,
                 handlers: Sequence[str] = ()):
        self._registry = registry
        self._key_registry = key_registry or DetailsKeyRegistry.get_instance()
        self._handlers: Tuple[str, ...] = tuple(handlers)
        self._details: Dict[str, Tuple[Any, ...]] = {}
        self._details_key: Optional[DetailsKey] = None

    @property
    def registry(self) -> DetailRegistry:
        return self._registry

    @property
    def handlers(self) -> List[str]:
        return list(self._handlers)

    def set(self, name: str, value: Any) -> None:
        """
        Set a detail, falling back to its defaults for empty values.

        Args:
            name: Registered detail name
            value: A single value, a list/tuple of values, or None

        Raises:
            UnknownDetailError: If the detail is not registered
            InvalidDetailValueError: If the value cannot be normalized
        """
        descriptor = self._registry.get(name)
        values = normalize_detail_value(name, value)
        if descriptor.write_hook is not None:
            values = normalize_detail_value(name, descriptor.write_hook(values))
        if not values:
            values = descriptor.defaults()

        stored = tuple(values)
        if stored == self._details.get(name):
            return

        self._details = {**self._details, name: stored}
        if self._details_key is not None:
            logger.debug("Detail %s changed to %r, dropping %r", name, values, self._details_key)
        self._details_key = None

    def get(self, name: str) -> Any:
        """Get the externally visible value of a detail."""
        descriptor = self._registry.get(name)
        values = self.values(name)
        if descriptor.read_hook is not None:
            return descriptor.read_hook(values)
        return values

    def values(self, name: str) -> List[Any]:
        """Get the stored value list of a detail, ignoring read hooks."""
        if name not in self._details:
            self.set(name, None)
        return list(self._details[name])

    @property
    def details(self) -> Dict[str, List[Any]]:
        """Copy of the stored values of every registered detail."""
        return {name: self.values(name) for name in self._registry.names()}

    def lookup_details(self) -> Dict[str, List[Any]]:
        """Details handed to resolvers: the stored values plus the handlers."""
        details = self.details
        details[HANDLERS_DETAIL] = self.handlers
        return details

    def snapshot(self) -> DetailsSnapshot:
        """Structural snapshot of the mutable details, in registration order."""
        return tuple((name, tuple(self.values(name))) for name in self._registry.names())

    @property
    def details_key(self) -> DetailsKey:
        """Interned key of the current details, computed lazily."""
        self._initialize_missing()
        if self._details_key is None:
            snapshot = self.snapshot()
            self._details_key = self._key_registry.key_for(snapshot)
        return self._details_key

    def is_equivalent(self, other: 'DetailSet') -> bool:
        """Check whether both sets hold the same mutable detail values."""
        return self.snapshot() == other.snapshot()

    def update_details(self,
                       new_details: Mapping[str, Any],
                       force_defaults_for_missing: bool = False,
                       work: Optional[Callable[[], Any]] = None) -> Any:
        """
        Apply several details at once.

        Each registered detail present in ``new_details`` is set; when
        ``force_defaults_for_missing`` is true the missing ones are reset to
        their defaults. If ``work`` is given the update only lasts while it
        runs and the previous details are restored afterwards.

        Args:
            new_details: Mapping of detail name to raw value
            force_defaults_for_missing: Reset details absent from the mapping
            work: Optional callable to run with the updated details

        Returns:
            The result of ``work``, or None

        Raises:
            UnknownDetailError: If the mapping names an unregistered detail
        """
        if work is None:
            self._apply(new_details, force_defaults_for_missing)
            return None
        with self.scoped(new_details, force_defaults_for_missing):
            return work()

    @contextmanager
    def scoped(self,
               new_details: Mapping[str, Any],
               force_defaults_for_missing: bool = False) -> Iterator['DetailSet']:
        """Context manager applying details and restoring the previous ones on exit."""
        self._check_known(new_details)
        self._initialize_missing()
        saved_details, saved_key = self._details, self._details_key
        try:
            self._apply(new_details, force_defaults_for_missing)
            yield self
        finally:
            self._restore(saved_details, saved_key)

    def _apply(self, new_details: Mapping[str, Any], force_defaults_for_missing: bool) -> None:
        self._check_known(new_details)
        for name in self._registry.names():
            if force_defaults_for_missing or name in new_details:
                self.set(name, new_details.get(name))

    def _initialize_missing(self) -> None:
        # Details registered after this set was created start at their defaults.
        if len(self._details) == len(self._registry):
            return
        for name in self._registry.names():
            if name not in self._details:
                self.set(name, None)

    def _check_known(self, new_details: Mapping[str, Any]) -> None:
        for name in new_details:
            if name not in self._registry:
                raise UnknownDetailError(name, self._registry.names())

    def _restore(self, saved_details: Dict[str, Tuple[Any, ...]], saved_key: Optional[DetailsKey]) -> None:
        current = self._details
        self._details, self._details_key = saved_details, saved_key
        for name, values in saved_details.items():
            # Only dimensions the scope changed are pushed back to their owners.
            if name not in self._registry or current.get(name) == values:
                continue
            descriptor = self._registry.get(name)
            if descriptor.restore_hook is not None:
                descriptor.restore_hook(list(values))

    def __repr__(self) -> str:
        return f"DetailSet({self.details!r})"


def register_format_detail(registry: DetailRegistry,
                           format_registry: FormatRegistryPort,
                           js_falls_back_to_html: bool = True) -> DetailDescriptor:
    """
    Register the formats detail.

    A wildcard-only value means "no preference" and collapses to the default
    formats. A request for exactly ``["js"]`` also accepts ``html`` templates
    when ``js_falls_back_to_html`` is enabled, since script responses commonly
    reuse HTML views.
    """
    def write_hook(values: List[Any]) -> List[Any]:
        if values == [WILDCARD_FORMAT]:
            return []
        if js_falls_back_to_html and values == ["js"]:
            return ["js", "html"]
        return values

    return registry.register(FORMATS_DETAIL, format_registry.symbols, write_hook=write_hook)


def register_locale_detail(registry: DetailRegistry, locale_port: LocalePort) -> DetailDescriptor:
    """
    Register the locale detail.

    The locale context is the source of truth: writes push the first value
    into it, the stored value is whatever locale it reports afterwards, and
    reads always return its current locale as a scalar.
    """
    def write_hook(values: List[Any]) -> List[Any]:
        if values:
            locale_port.locale = values[0]
        return [locale_port.locale]

    def read_hook(values: List[Any]) -> Any:
        return locale_port.locale

    def restore_hook(values: List[Any]) -> None:
        if values and locale_port.locale != values[0]:
            locale_port.locale = values[0]

    return registry.register(
        LOCALE_DETAIL,
        lambda: [locale_port.locale],
        write_hook=write_hook,
        read_hook=read_hook,
        restore_hook=restore_hook,
    )


def register_default_details(registry: DetailRegistry,
                             format_registry: FormatRegistryPort,
                             locale_port: LocalePort,
                             js_falls_back_to_html: bool = True) -> DetailRegistry:
    """Register the formats and locale details on a registry."""
    register_format_detail(registry, format_registry, js_falls_back_to_html)
    register_locale_detail(registry, locale_port)
    return registry
