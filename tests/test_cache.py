"""Tests for dashboard/cache.py"""

from dashboard import cache as cache_module
from dashboard.cache import PageCache


def _counting_loader():
    calls = []

    def load():
        calls.append(1)
        return len(calls)

    return load, calls


def test_second_lookup_is_served_from_cache():
    cache = PageCache(ttl_seconds=60)
    load, calls = _counting_loader()

    assert cache.get_or_load("/dashboard/invoices", "page=1", load) == 1
    assert cache.get_or_load("/dashboard/invoices", "page=1", load) == 1
    assert len(calls) == 1


def test_query_string_is_part_of_the_key():
    cache = PageCache(ttl_seconds=60)
    load, calls = _counting_loader()

    cache.get_or_load("/dashboard/invoices", "page=1", load)
    cache.get_or_load("/dashboard/invoices", "page=2", load)

    assert len(calls) == 2
    assert len(cache) == 2


def test_revalidate_drops_every_query_for_the_path_only():
    cache = PageCache(ttl_seconds=60)
    cache.get_or_load("/dashboard/invoices", "page=1", lambda: "a")
    cache.get_or_load("/dashboard/invoices", "page=2", lambda: "b")
    cache.get_or_load("/dashboard/customers", "query=", lambda: "c")

    assert cache.revalidate_path("/dashboard/invoices") == 2
    assert len(cache) == 1
    assert cache.get_or_load("/dashboard/invoices", "page=1", lambda: "fresh") == "fresh"


def test_revalidate_unknown_path_is_a_no_op():
    cache = PageCache(ttl_seconds=60)

    assert cache.revalidate_path("/nowhere") == 0


def test_entries_expire_after_ttl(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(cache_module.time, "monotonic", lambda: now[0])
    cache = PageCache(ttl_seconds=10)
    load, calls = _counting_loader()

    cache.get_or_load("/dashboard", "", load)
    now[0] += 11
    assert cache.get_or_load("/dashboard", "", load) == 2
    assert len(calls) == 2


def test_zero_ttl_disables_caching():
    cache = PageCache(ttl_seconds=0)
    load, calls = _counting_loader()

    cache.get_or_load("/dashboard", "", load)
    cache.get_or_load("/dashboard", "", load)

    assert not cache.enabled
    assert len(calls) == 2
    assert len(cache) == 0


def test_clear():
    cache = PageCache(ttl_seconds=60)
    cache.get_or_load("/dashboard", "", lambda: 1)

    cache.clear()

    assert len(cache) == 0


def test_load_overlapping_a_revalidation_is_not_stored():
    cache = PageCache(ttl_seconds=60)

    def load_then_write():
        # a write action lands while the page is still being built
        cache.revalidate_path("/dashboard/invoices")
        return "stale"

    assert cache.get_or_load("/dashboard/invoices", "page=1", load_then_write) == "stale"
    assert len(cache) == 0
    assert cache.get_or_load("/dashboard/invoices", "page=1", lambda: "fresh") == "fresh"


def test_revalidating_another_path_does_not_discard_a_load():
    cache = PageCache(ttl_seconds=60)

    def load():
        cache.revalidate_path("/dashboard/customers")
        return "a"

    cache.get_or_load("/dashboard/invoices", "page=1", load)

    assert len(cache) == 1


def test_load_overlapping_a_clear_is_not_stored():
    cache = PageCache(ttl_seconds=60)

    def load():
        cache.clear()
        return "stale"

    cache.get_or_load("/dashboard", "", load)

    assert len(cache) == 0
