"""In-memory resolver - templates held in a dictionary.

Useful for tests and for templates generated at runtime:

    >>> resolver = InMemoryResolver({"posts/index.en.html.erb": "<h1>Posts</h1>"})
"""

from typing import Mapping, Optional

from view_lookup.domain.template.value_objects import Template

from .resolver import PathResolver


class InMemoryResolver(PathResolver):
    """Resolver over a mapping of template paths to template sources."""

    def __init__(self, templates: Mapping[str, str], name: str = "memory", caching: bool = True):
        super().__init__(caching=caching)
        self.name = name
        self._templates = {path.lstrip("/"): source for path, source in templates.items()}

    def _locate(self, candidate: str) -> Optional[str]:
        candidate = candidate.lstrip("/")
        return candidate if candidate in self._templates else None

    def source(self, template: Template) -> str:
        """Get the source of a template found by this resolver."""
        return self._templates[template.identifier]

    def describe(self) -> str:
        return f"{self.name}:"

    def __repr__(self) -> str:
        return f"InMemoryResolver({self.name!r}, {len(self._templates)} templates)"
