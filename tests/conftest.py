from typing import Any, Dict, Optional

import pytest

from view_lookup.domain.lookup.details import DetailRegistry, DetailSet, register_default_details
from view_lookup.domain.lookup.details_key import DetailsKeyRegistry
from view_lookup.domain.lookup.lookup_context import LookupContext
from view_lookup.infrastructure.i18n.locale_context import LocaleContext
from view_lookup.infrastructure.template.format_registry import FormatRegistry
from view_lookup.infrastructure.template.handler_registry import HandlerRegistry
from view_lookup.infrastructure.template.memory_resolver import InMemoryResolver

TEMPLATES = {
    "posts/index.html.erb": "<h1>Posts</h1>",
    "posts/index.pt.html.erb": "<h1>Artigos</h1>",
    "posts/index.json.builder": "json.posts []",
    "posts/_form.html.erb": "<form></form>",
    "posts/admin/edit.html.erb": "<h1>Edit</h1>",
    "layouts/application.html.erb": "<%= yield %>",
    "shared/footer.html.erb": "<footer></footer>",
}


@pytest.fixture
def locale_context():
    """Locale context defaulting to English."""
    return LocaleContext("en")


@pytest.fixture
def format_registry():
    return FormatRegistry({
        "html": "text/html",
        "js": "text/javascript",
        "json": "application/json",
    })


@pytest.fixture
def handler_registry():
    return HandlerRegistry(["erb", "builder", "html"])


@pytest.fixture
def key_registry():
    """Fresh key registry so tests do not share interned keys."""
    return DetailsKeyRegistry()


@pytest.fixture
def detail_registry(format_registry, locale_context):
    return register_default_details(DetailRegistry(), format_registry, locale_context)


@pytest.fixture
def detail_set(detail_registry, key_registry):
    return DetailSet(detail_registry, key_registry, handlers=["erb", "builder", "html"])


@pytest.fixture
def memory_resolver():
    return InMemoryResolver(TEMPLATES, name="app")


@pytest.fixture
def make_context(detail_registry, handler_registry, key_registry, memory_resolver):
    """Factory for lookup contexts over the in-memory templates."""
    def _make(details: Optional[Dict[str, Any]] = None, view_paths=None, **kwargs) -> LookupContext:
        return LookupContext(
            view_paths if view_paths is not None else [memory_resolver],
            details,
            detail_registry=detail_registry,
            handler_registry=handler_registry,
            key_registry=key_registry,
            **kwargs,
        )
    return _make
