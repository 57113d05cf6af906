"""Details Key Registry - interned cache keys for detail combinations.

Resolvers cache lookups per combination of detail values. Comparing detail
mappings structurally on every cache access is wasteful, so each distinct
combination is interned into a DetailsKey whose equality and hash are plain
object identity. Equal combinations always map to the same key instance.
"""

import itertools
import threading
from typing import Dict, Optional, Tuple

from view_lookup.infrastructure.logging.logger import get_logger

DetailsSnapshot = Tuple[Tuple[str, Tuple[object, ...]], ...]


class DetailsKey:
    """Opaque identity token for one combination of detail values.

    Equality and hashing are inherited from ``object`` and therefore based
    on identity only; the key carries no structural data to compare.
    """

    __slots__ = ("_serial",)

    _serials = itertools.count(1)

    def __init__(self):
        self._serial = next(DetailsKey._serials)

    def __repr__(self) -> str:
        return f"<DetailsKey #{self._serial}>"


class DetailsKeyRegistry:
    """
    Process-wide table of interned details keys.

    The table is shared by every lookup context in the process and may be
    hit concurrently from several request threads. Lookups of existing keys
    go through a plain dict read; creation of a missing key happens under a
    lock so racing threads converge on a single stored instance.

    Entries are never evicted: the number of distinct format and locale
    combinations a process exercises is small and bounded by configuration.

    Thread-safe singleton implementation.
    """

    _instance: Optional['DetailsKeyRegistry'] = None
    _lock = threading.Lock()

    def __init__(self):
        """Initialize an empty key registry."""
        self._keys: Dict[DetailsSnapshot, DetailsKey] = {}
        self._registration_lock = threading.Lock()
        self._logger = get_logger(__name__)

    @classmethod
    def get_instance(cls) -> 'DetailsKeyRegistry':
        """Get singleton instance of the details key registry."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def key_for(self, snapshot: DetailsSnapshot) -> DetailsKey:
        """
        Get the canonical key for a detail snapshot, creating it if absent.

        Args:
            snapshot: Tuple of (detail name, tuple of values) pairs covering
                the mutable details only

        Returns:
            The interned DetailsKey for this exact combination
        """
        key = self._keys.get(snapshot)
        if key is not None:
            return key

        with self._registration_lock:
            key = self._keys.get(snapshot)
            if key is None:
                key = DetailsKey()
                self._keys[snapshot] = key
                self._logger.debug("Created %r for details %s", key, dict(snapshot))
            return key

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, snapshot: object) -> bool:
        return snapshot in self._keys
