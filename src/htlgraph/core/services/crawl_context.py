from __future__ import annotations

"""
Traversal Context.

Carries the claim-once state of a single crawl: which components have been
analysed and which clientlib categories have been resolved, together with
the completed sub-graphs and resolved entries so later referrers share
them. Passed explicitly into every recursive call; never shared between runs.
"""

import threading
from typing import Dict, List, Optional, Set

from htlgraph.domain.graph_models import BundleDependency, DependencyGraph


class CrawlContext:
    """
    Run-scoped registry of claimed identifiers and shared results.

    `claim_*` methods are atomic check-and-mark operations guarded by a
    single lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._visited: Set[str] = set()
        self._processed: Set[str] = set()
        self._bundles: Dict[str, BundleDependency] = {}
        self._graphs: Dict[str, DependencyGraph] = {}

    # -------------------------------------------------------------------------
    # Components
    # -------------------------------------------------------------------------

    def claim_component(self, key: str) -> bool:
        """Mark a component as visited. False if it was already claimed."""
        with self._lock:
            if key in self._visited:
                return False
            self._visited.add(key)
            return True

    def is_visited(self, key: str) -> bool:
        with self._lock:
            return key in self._visited

    @property
    def visited(self) -> List[str]:
        with self._lock:
            return sorted(self._visited)

    def record_graph(self, key: str, graph: DependencyGraph) -> None:
        with self._lock:
            self._graphs[key] = graph

    def graph_for(self, key: str) -> Optional[DependencyGraph]:
        """Completed sub-graph of a claimed component; None while it is still being analysed."""
        with self._lock:
            return self._graphs.get(key)

    # -------------------------------------------------------------------------
    # Clientlib categories
    # -------------------------------------------------------------------------

    def claim_category(self, category: str) -> bool:
        """Mark a category as processed. False if it was already claimed."""
        with self._lock:
            if category in self._processed:
                return False
            self._processed.add(category)
            return True

    def record_bundle(self, bundle: BundleDependency) -> None:
        with self._lock:
            self._bundles[bundle.category] = bundle

    def bundle_for(self, category: str) -> Optional[BundleDependency]:
        with self._lock:
            return self._bundles.get(category)

    @property
    def processed_categories(self) -> List[str]:
        with self._lock:
            return sorted(self._processed)
