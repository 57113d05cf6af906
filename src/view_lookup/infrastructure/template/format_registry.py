"""Format registry - known output formats and their MIME types."""

import threading
from typing import Dict, List, Mapping, Optional

from view_lookup.domain.base.ports import FormatRegistryPort
from view_lookup.infrastructure.logging.logger import get_logger

DEFAULT_FORMATS: Dict[str, str] = {
    "html": "text/html",
    "text": "text/plain",
    "js": "text/javascript",
    "css": "text/css",
    "ics": "text/calendar",
    "csv": "text/csv",
    "xml": "application/xml",
    "rss": "application/rss+xml",
    "atom": "application/atom+xml",
    "yaml": "application/x-yaml",
    "json": "application/json",
}


class FormatRegistry(FormatRegistryPort):
    """Ordered registry of format symbols. Registration order is default preference order."""

    def __init__(self, formats: Optional[Mapping[str, str]] = None):
        self._formats: Dict[str, str] = {}
        self._registration_lock = threading.RLock()
        self._logger = get_logger(__name__)
        for symbol, mime_type in (DEFAULT_FORMATS if formats is None else formats).items():
            self.register(symbol, mime_type)

    def register(self, symbol: str, mime_type: str) -> None:
        """
        Register a format.

        Raises:
            ValueError: If the symbol is empty
        """
        if not symbol:
            raise ValueError("Format symbol must not be empty")
        with self._registration_lock:
            self._formats[symbol] = mime_type
        self._logger.debug(f"Registered format: {symbol} ({mime_type})")

    def symbols(self) -> List[str]:
        return list(self._formats)

    def mime_type(self, symbol: str) -> Optional[str]:
        return self._formats.get(symbol)

    def symbol_for(self, mime_type: str) -> Optional[str]:
        """Get the first symbol registered for a MIME type."""
        for symbol, registered in self._formats.items():
            if registered == mime_type:
                return symbol
        return None

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._formats
