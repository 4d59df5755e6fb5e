from __future__ import annotations

"""
htlgraph: dependency-graph crawler for AEM components.

Reconstructs the dependency closure of a component (template, clientlibs,
Sling Models, child components, dialogs, inheritance) over the repository's
HTTP/JSON interface, as input for a migration to another UI framework.
"""

from htlgraph.core.crawler import ComponentGraphCrawler, crawl
from htlgraph.domain.config import CrawlOptions
from htlgraph.domain.errors import ComponentIdentityError, HtlGraphError, TransportError
from htlgraph.domain.graph_models import DependencyGraph
from htlgraph.infra.network import ContentClient

__version__ = "0.1.0"

__all__ = [
    "ComponentGraphCrawler",
    "ComponentIdentityError",
    "ContentClient",
    "CrawlOptions",
    "DependencyGraph",
    "HtlGraphError",
    "TransportError",
    "crawl",
    "__version__",
]
