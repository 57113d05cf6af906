"""View Lookup - Template lookup and detail negotiation for view rendering.

This package locates the template file a view-rendering layer should use for
a logical template name, given a set of detail dimensions (format, locale,
...) and a prioritized list of resolver locations.

Key Components:
    - domain: Detail sets, interned details keys, search paths and the
      lookup context that composes them
    - infrastructure: Resolvers, format/handler registries, locale context
      and logging
    - config: Configuration schemas and manager
    - application: Factory wiring the collaborators from configuration

Usage:
    >>> from view_lookup import LookupContextFactory
    >>> factory = LookupContextFactory()
    >>> context = factory.create(["app/views"], {"formats": ["html"]})
    >>> template = context.find("index", "posts")
"""

from ._version import __version__
from .application.lookup.factory import LookupContextFactory
from .domain.lookup import (
    DetailRegistry,
    DetailSet,
    DetailsKey,
    DetailsKeyRegistry,
    LookupContext,
    SearchPath,
)
from .domain.template.exceptions import TemplateNotFoundError
from .domain.template.value_objects import Template

__all__ = [
    "__version__",
    "LookupContextFactory",
    "LookupContext",
    "DetailRegistry",
    "DetailSet",
    "DetailsKey",
    "DetailsKeyRegistry",
    "SearchPath",
    "Template",
    "TemplateNotFoundError",
]
