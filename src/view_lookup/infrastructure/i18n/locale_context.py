"""Locale context - the current locale of each request thread."""

import threading
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional

from view_lookup.domain.base.ports import LocalePort
from view_lookup.domain.core.exceptions import ValidationError


class LocaleContext(LocalePort):
    """
    Thread-local holder of the current locale.

    Each thread starts out with the default locale; setting the locale only
    affects the calling thread. When available locales are configured, any
    other locale is rejected.
    """

    def __init__(self, default_locale: str = "en", available_locales: Optional[Iterable[str]] = None):
        self._available: Optional[List[str]] = list(available_locales) if available_locales else None
        self._local = threading.local()
        self.default_locale = self._validate(default_locale)

    @property
    def locale(self) -> str:
        return getattr(self._local, "locale", None) or self.default_locale

    @locale.setter
    def locale(self, value: Optional[str]) -> None:
        self._local.locale = self._validate(value) if value else None

    @property
    def available_locales(self) -> Optional[List[str]]:
        return list(self._available) if self._available is not None else None

    def reset(self) -> None:
        """Return the calling thread to the default locale."""
        self._local.locale = None

    @contextmanager
    def locale_scope(self, locale: str) -> Iterator[str]:
        """Switch the locale of the calling thread for the duration of the block."""
        previous = getattr(self._local, "locale", None)
        self.locale = locale
        try:
            yield self.locale
        finally:
            self._local.locale = previous

    def _validate(self, locale: str) -> str:
        locale = str(locale)
        if self._available is not None and locale not in self._available:
            raise ValidationError(
                f"Locale '{locale}' is not available, expected one of: {', '.join(self._available)}"
            )
        return locale
