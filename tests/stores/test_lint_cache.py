"""Tests for the lint report cache."""

from __future__ import annotations

from obdlint.linter import LintReport
from obdlint.stores import LintCache, document_key


class _Clock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_lint_cache_round_trip() -> None:
    cache = LintCache()
    report = LintReport()
    cache.store('{"commands": []}', signature="sig-1", report=report)

    assert cache.get('{"commands": []}', signature="sig-1") is report
    assert cache.get('{"commands": [ ]}', signature="sig-1") is None
    assert len(cache) == 1


def test_lint_cache_invalidates_on_signature_change() -> None:
    cache = LintCache()
    cache.store("{}", signature="sig-1", report=LintReport())

    assert cache.get("{}", signature="sig-2") is None
    assert cache.get("{}", signature="sig-1") is not None


def test_lint_cache_entries_expire() -> None:
    clock = _Clock()
    cache = LintCache(ttl_seconds=60, clock=clock)
    cache.store("{}", signature="s", report=LintReport())

    clock.now += 59
    assert cache.get("{}", signature="s") is not None
    clock.now += 1
    assert cache.get("{}", signature="s") is None
    assert len(cache) == 0


def test_lint_cache_prune_removes_unused_and_expired() -> None:
    clock = _Clock()
    cache = LintCache(ttl_seconds=60, clock=clock)
    cache.store("a", signature="s", report=LintReport())
    cache.store("b", signature="s", report=LintReport())

    cache.prune([document_key("a")])
    assert cache.get("a", signature="s") is not None
    assert cache.get("b", signature="s") is None

    clock.now += 120
    cache.prune()
    assert len(cache) == 0


def test_lint_cache_store_evicts_expired_entries() -> None:
    clock = _Clock()
    cache = LintCache(ttl_seconds=60, clock=clock)
    for index in range(5):
        cache.store(f"doc-{index}", signature="s", report=LintReport())

    clock.now += 60
    cache.store("fresh", signature="s", report=LintReport())

    assert len(cache) == 1
    assert cache.get("fresh", signature="s") is not None
