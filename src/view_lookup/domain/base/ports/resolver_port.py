"""Resolver Port - Interface for a single template search location.

A resolver abstracts over a place templates can be found (a directory tree,
an in-memory fixture set, ...). The lookup context queries resolvers in
priority order and never inspects how they store templates.

Architecture:
- Domain layer defines the interface (this port)
- Infrastructure layer provides implementations (file system, memory)
- The details key handed to a resolver is an opaque cache key: resolvers may
  use it to index their own caches but must not look inside it
"""
from abc import ABC, abstractmethod
from typing import Any, List, Mapping

from view_lookup.domain.template.value_objects import Template


class ResolverPort(ABC):
    """Port for resolving a template name against one location."""

    @abstractmethod
    def find_all(self,
                 name: str,
                 prefix: str,
                 partial: bool,
                 details: Mapping[str, Any],
                 details_key: Any) -> List[Template]:
        """Find every template matching the name in this location.

        Args:
            name: Bare template name, without directories or extensions
            prefix: Directory prefix, possibly empty
            partial: Whether the lookup is for a partial
            details: Detail values (formats, locale, handlers, ...)
            details_key: Interned key for the mutable details

        Returns:
            Matching templates, best match first (empty if none)
        """
        pass

    def exists(self,
               name: str,
               prefix: str,
               partial: bool,
               details: Mapping[str, Any],
               details_key: Any) -> bool:
        """Check whether at least one template matches."""
        return bool(self.find_all(name, prefix, partial, details, details_key))

    def describe(self) -> str:
        """Human readable description used in lookup error messages."""
        return repr(self)
