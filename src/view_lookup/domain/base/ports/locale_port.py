"""Locale Port - access to the current request locale."""
from abc import ABC, abstractmethod


class LocalePort(ABC):
    """Port for the locale subsystem.

    The locale held here is authoritative: the lookup context writes
    negotiated locales through to it and reads the locale back from it.
    """

    @property
    @abstractmethod
    def locale(self) -> str:
        """Get the current locale."""
        pass

    @locale.setter
    @abstractmethod
    def locale(self, value: str) -> None:
        """Set the current locale."""
        pass
