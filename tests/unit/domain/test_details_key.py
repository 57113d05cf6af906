"""Tests for interned details keys."""

import threading

from view_lookup.domain.lookup.details_key import DetailsKey, DetailsKeyRegistry

HTML_EN = (("formats", ("html",)), ("locale", ("en",)))
JSON_EN = (("formats", ("json",)), ("locale", ("en",)))


class TestDetailsKey:
    """Test the identity semantics of details keys."""

    def test_keys_compare_by_identity(self):
        first, second = DetailsKey(), DetailsKey()

        assert first == first
        assert first != second
        assert hash(first) == hash(first)
        assert len({first, second}) == 2

    def test_keys_are_usable_as_dict_keys(self):
        key = DetailsKey()
        cache = {(key, "index"): "template"}

        assert cache[(key, "index")] == "template"
        assert (DetailsKey(), "index") not in cache


class TestDetailsKeyRegistry:
    """Test interning of detail snapshots."""

    def test_same_snapshot_returns_same_key(self, key_registry):
        assert key_registry.key_for(HTML_EN) is key_registry.key_for(HTML_EN)

    def test_equal_but_distinct_snapshots_share_key(self, key_registry):
        rebuilt = tuple((name, tuple(list(values))) for name, values in HTML_EN)

        assert rebuilt is not HTML_EN
        assert key_registry.key_for(rebuilt) is key_registry.key_for(HTML_EN)

    def test_different_snapshots_get_different_keys(self, key_registry):
        assert key_registry.key_for(HTML_EN) is not key_registry.key_for(JSON_EN)
        assert len(key_registry) == 2

    def test_order_of_values_matters(self, key_registry):
        first = (("formats", ("html", "json")),)
        second = (("formats", ("json", "html")),)

        assert key_registry.key_for(first) is not key_registry.key_for(second)

    def test_contains(self, key_registry):
        assert HTML_EN not in key_registry
        key_registry.key_for(HTML_EN)
        assert HTML_EN in key_registry

    def test_registries_are_independent(self):
        assert DetailsKeyRegistry().key_for(HTML_EN) is not DetailsKeyRegistry().key_for(HTML_EN)

    def test_get_instance_is_a_singleton(self):
        assert DetailsKeyRegistry.get_instance() is DetailsKeyRegistry.get_instance()

    def test_concurrent_creation_converges(self, key_registry):
        """Racing threads must all receive the single stored key."""
        thread_count = 16
        barrier = threading.Barrier(thread_count)
        results = []
        results_lock = threading.Lock()

        def worker():
            barrier.wait()
            for snapshot in (HTML_EN, JSON_EN):
                key = key_registry.key_for(snapshot)
                with results_lock:
                    results.append((snapshot, key))

        threads = [threading.Thread(target=worker) for _ in range(thread_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(key_registry) == 2
        for snapshot, key in results:
            assert key is key_registry.key_for(snapshot)
