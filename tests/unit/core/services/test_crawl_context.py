from __future__ import annotations

"""
Unit tests for the Traversal Context.

Verifies that claims are atomic check-and-mark operations, including under
concurrent callers.
"""

import threading
from typing import List

from htlgraph.core.services.crawl_context import CrawlContext
from htlgraph.domain.graph_models import BundleDependency


def test_claim_component_once() -> None:
    """TC-01: Only the first claim of a key succeeds."""
    ctx = CrawlContext()

    assert ctx.claim_component("acme/components/card") is True
    assert ctx.claim_component("acme/components/card") is False
    assert ctx.is_visited("acme/components/card")
    assert ctx.visited == ["acme/components/card"]


def test_category_registry() -> None:
    """TC-02: A recorded bundle is returned to later callers."""
    ctx = CrawlContext()
    bundle = BundleDependency(category="site")

    assert ctx.claim_category("site") is True
    ctx.record_bundle(bundle)

    assert ctx.claim_category("site") is False
    assert ctx.bundle_for("site") is bundle
    assert ctx.bundle_for("other") is None


def test_concurrent_claims_have_single_winner() -> None:
    """TC-03: Many threads racing for one key produce exactly one winner."""
    ctx = CrawlContext()
    results: List[bool] = []
    barrier = threading.Barrier(8)

    def worker() -> None:
        barrier.wait()
        results.append(ctx.claim_component("shared"))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 1
    assert len(results) == 8


def test_contexts_are_independent() -> None:
    """TC-04: Claims made in one run do not leak into another."""
    first, second = CrawlContext(), CrawlContext()
    first.claim_component("x")

    assert second.claim_component("x") is True
