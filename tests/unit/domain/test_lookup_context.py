"""Tests for the lookup context."""

from pathlib import PurePosixPath
from unittest.mock import Mock

import pytest

from view_lookup.domain.base.ports import ResolverPort
from view_lookup.domain.core.exceptions import ValidationError
from view_lookup.domain.lookup.details_key import DetailsKey
from view_lookup.domain.template.exceptions import TemplateNotFoundError, UnknownDetailError
from view_lookup.infrastructure.template.memory_resolver import InMemoryResolver


class TestNormalizeName:
    """Test splitting of legacy template names."""

    @pytest.fixture(autouse=True)
    def _context(self, make_context):
        self.context = make_context()

    def test_path_moves_into_prefix(self):
        assert self.context.normalize_name("foo/bar.html", None) == ("bar", "foo")

    def test_path_is_appended_to_prefix(self):
        assert self.context.normalize_name("sub/name.html", "prefix") == ("name", "prefix/sub")

    def test_handler_extension_is_stripped(self):
        assert self.context.normalize_name("show.erb", "posts") == ("show", "posts")

    def test_unknown_extension_is_kept(self):
        assert self.context.normalize_name("show.haml", "posts") == ("show.haml", "posts")

    def test_only_trailing_extension_is_stripped(self):
        assert self.context.normalize_name("erb.show", None) == ("erb.show", "")

    def test_plain_name(self):
        assert self.context.normalize_name("index", None) == ("index", "")
        assert self.context.normalize_name("index", "posts") == ("index", "posts")

    def test_non_string_names_are_converted(self):
        assert self.context.normalize_name(PurePosixPath("posts/index"), None) == ("index", "posts")

    def test_trailing_slash_is_ignored(self):
        assert self.context.normalize_name("posts/", None) == ("posts", "")
        assert self.context.normalize_name("admin/edit/", "posts") == ("edit", "posts/admin")

    def test_empty_name_is_rejected(self):
        with pytest.raises(ValidationError):
            self.context.normalize_name("", "posts")

    def test_exists_is_false_for_empty_names(self):
        assert self.context.exists("posts/") is False
        assert self.context.exists("", "posts") is False
        assert self.context.exists("/") is False

    def test_equivalent_calls_find_the_same_template(self):
        assert self.context.find("posts/index.html") == self.context.find("index", "posts")


class TestLookupContextFind:
    """Test lookups through the context."""

    def test_construction_applies_defaults(self, make_context):
        context = make_context()

        assert context.formats == ["html", "js", "json"]
        assert context.locale == "en"

    def test_construction_applies_given_details(self, make_context, locale_context):
        context = make_context({"formats": ["json"], "locale": "pt"})

        assert context.formats == ["json"]
        assert context.locale == "pt"
        assert locale_context.locale == "pt"

    def test_construction_rejects_unknown_details(self, make_context):
        with pytest.raises(UnknownDetailError):
            make_context({"variants": ["phone"]})

    def test_find(self, make_context):
        template = make_context().find("index", "posts")

        assert template.identifier == "posts/index.html.erb"
        assert template.virtual_path == "posts/index"
        assert template.format == "html"
        assert template.handler == "erb"
        assert template.locale is None

    def test_find_template_alias(self, make_context):
        context = make_context()

        assert context.find_template("index", "posts") == context.find("index", "posts")

    def test_find_prefers_localized_template(self, make_context):
        context = make_context()
        context.locale = "pt"

        template = context.find("index", "posts")

        assert template.identifier == "posts/index.pt.html.erb"
        assert template.locale == "pt"

    def test_find_uses_format_order(self, make_context):
        context = make_context({"formats": ["json", "html"]})

        assert context.find("index", "posts").identifier == "posts/index.json.builder"

    def test_find_partial(self, make_context):
        template = make_context().find("form", "posts", partial=True)

        assert template.identifier == "posts/_form.html.erb"
        assert template.partial is True

    def test_find_raises_template_not_found(self, make_context):
        with pytest.raises(TemplateNotFoundError) as exc_info:
            make_context().find("missing", "posts")

        assert exc_info.value.searched == ["app:"]

    def test_exists_never_raises(self, make_context):
        context = make_context()

        assert context.exists("index", "posts")
        assert not context.exists("missing", "posts")
        assert context.template_exists("admin/edit", "posts")

    def test_find_all_returns_every_match_in_order(self, make_context, memory_resolver):
        other = InMemoryResolver({"posts/index.html.erb": "other"}, name="other")
        context = make_context({"locale": "pt"}, view_paths=[memory_resolver, other])

        templates = context.find_all("index", "posts")

        assert [t.identifier for t in templates] == [
            "posts/index.pt.html.erb",
            "posts/index.html.erb",
            "posts/index.json.builder",
            "posts/index.html.erb",
        ]
        assert templates[-1] is not templates[1]

    def test_find_all_empty(self, make_context):
        assert make_context().find_all("missing") == []

    def test_resolver_receives_details_with_handlers_and_key(self, make_context):
        resolver = Mock(spec=ResolverPort)
        resolver.find_all.return_value = []
        context = make_context({"formats": "html"}, view_paths=[resolver])

        context.find_all("sub/name.erb", "prefix", partial=True)

        resolver.find_all.assert_called_once_with(
            "name",
            "prefix/sub",
            True,
            {"formats": ["html"], "locale": ["en"], "handlers": ["erb", "builder", "html"]},
            context.details_key,
        )

    def test_view_paths_setter_replaces_locations(self, make_context):
        context = make_context()
        context.view_paths = [InMemoryResolver({"posts/index.html.erb": ""}, name="only")]

        assert [location.describe() for location in context.view_paths] == ["only:"]


class TestLookupContextDetails:
    """Test detail handling through the context."""

    def test_details_key_is_stable_across_lookups(self, make_context):
        context = make_context()
        key = context.details_key

        context.find("index", "posts")
        context.exists("missing")

        assert isinstance(key, DetailsKey)
        assert context.details_key is key

    def test_contexts_with_equal_details_share_key(self, make_context):
        first = make_context({"formats": ["html"]})
        second = make_context({"formats": "html"})

        assert first.details_key is second.details_key

    def test_changing_formats_changes_key(self, make_context):
        context = make_context()
        key = context.details_key

        context.formats = ["json"]
        assert context.details_key is not key

        context.formats = None
        assert context.details_key is key

    def test_setting_same_locale_keeps_key(self, make_context):
        context = make_context({"locale": "en"})
        key = context.details_key

        context.locale = "en"

        assert context.details_key is key

    def test_locale_change_is_never_served_stale(self, make_context):
        context = make_context()
        assert context.find("index", "posts").locale is None

        context.locale = "pt"

        assert context.find("index", "posts").locale == "pt"

    def test_update_details_with_work(self, make_context):
        context = make_context()

        result = context.update_details(
            {"formats": ["json"]}, work=lambda: context.find("index", "posts").identifier
        )

        assert result == "posts/index.json.builder"
        assert context.formats == ["html", "js", "json"]

    def test_update_details_without_work_persists(self, make_context):
        context = make_context()

        context.update_details({"formats": ["json"]})

        assert context.formats == ["json"]

    def test_scoped_details_restores_on_error(self, make_context, locale_context):
        context = make_context()
        key = context.details_key

        with pytest.raises(TemplateNotFoundError):
            with context.scoped_details({"locale": "pt", "formats": "js"}):
                assert context.formats == ["js", "html"]
                context.find("missing")

        assert context.details_key is key
        assert context.locale == "en"
        assert locale_context.locale == "en"

    def test_scoped_formats_keep_locale_negotiated_elsewhere(self, make_context, locale_context):
        context = make_context({"locale": "en"})
        locale_context.locale = "es"

        context.update_details({"formats": "json"}, work=lambda: None)

        assert locale_context.locale == "es"
        assert context.locale == "es"

    def test_scoped_details_can_force_defaults(self, make_context):
        context = make_context({"formats": ["json"]})

        with context.scoped_details({"locale": "pt"}, force_defaults_for_missing=True):
            assert context.formats == ["html", "js", "json"]

        assert context.formats == ["json"]

    def test_update_details_positional_arguments(self, make_context):
        context = make_context({"formats": ["json"]})

        result = context.update_details({}, True, lambda: list(context.formats))

        assert result == ["html", "js", "json"]
        assert context.formats == ["json"]

    def test_generic_detail_accessors(self, make_context):
        context = make_context()
        context.set_detail("formats", ["json", "html"])

        assert context.get_detail("formats") == ["json", "html"]
        assert context.details == {"formats": ["json", "html"], "locale": ["en"]}


class TestLookupContextFallbacks:
    """Test fallback view paths through the context."""

    def test_with_fallbacks(self, make_context):
        fallback = InMemoryResolver({"tmp/report.html.erb": "report"}, name="fallback")
        context = make_context(fallbacks=[fallback])

        assert not context.exists("tmp/report.html")
        with context.with_fallbacks():
            assert context.find("tmp/report.html").identifier == "tmp/report.html.erb"
        assert len(context.view_paths) == 1
