"""Handler registry - template file extensions and their handlers.

The handlers themselves (template parsers) live outside this package; the
registry only records which extensions are recognized so names can be
stripped of them and resolvers can match them.
"""

import threading
from typing import Any, Dict, Iterable, List, Optional

from view_lookup.domain.base.ports import HandlerRegistryPort
from view_lookup.infrastructure.logging.logger import get_logger


class HandlerRegistry(HandlerRegistryPort):
    """Ordered registry of template handler extensions."""

    def __init__(self, extensions: Iterable[str] = ()):
        self._handlers: Dict[str, Optional[Any]] = {}
        self._registration_lock = threading.RLock()
        self._logger = get_logger(__name__)
        for extension in extensions:
            self.register(extension)

    def register(self, extension: str, handler: Optional[Any] = None) -> None:
        """
        Register a template handler for an extension.

        Args:
            extension: File extension without the leading dot (e.g. 'erb')
            handler: Opaque handler object, None when only the extension matters

        Raises:
            ValueError: If the extension is empty or contains a dot
        """
        extension = extension.lstrip(".")
        if not extension or "." in extension:
            raise ValueError(f"Invalid handler extension: {extension!r}")
        with self._registration_lock:
            self._handlers[extension] = handler
        self._logger.debug(f"Registered template handler: {extension}")

    def extensions(self) -> List[str]:
        return list(self._handlers)

    def handler_for(self, extension: str) -> Optional[Any]:
        return self._handlers.get(extension.lstrip("."))

    def __contains__(self, extension: object) -> bool:
        return extension in self._handlers
