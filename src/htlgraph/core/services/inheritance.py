from __future__ import annotations

"""
Resource Super Type Chain Walker.

Follows `sling:resourceSuperType` from a component until the chain ends,
reaches an excluded namespace, the metadata cannot be fetched, or an
identifier repeats.
"""

import logging
from typing import Any, Dict, List, Optional, Set, Tuple

from htlgraph.core.services.locator import RepositoryLocator
from htlgraph.domain.graph_models import InheritanceLink
from htlgraph.infra.network import ContentClient

logger = logging.getLogger(__name__)

SUPER_TYPE_PROPERTY = "sling:resourceSuperType"
TITLE_PROPERTY = "jcr:title"


class InheritanceWalker:
    """Produces the ordered inheritance chain of a component."""

    def __init__(self, client: ContentClient, locator: RepositoryLocator) -> None:
        self.client = client
        self.locator = locator

    def walk(
            self,
            start: str,
            first: Optional[Tuple[str, Dict[str, Any]]] = None,
            *,
            prefetched: bool = False,
    ) -> List[InheritanceLink]:
        """
        Walk the super type chain starting at (and including) `start`.

        Args:
            start: Component path or resource type.
            first: (path, metadata) of `start` when the caller already fetched it.
            prefetched: `first` is authoritative; None means the start component
                has no metadata and nothing is fetched for it again.

        Returns:
            List[InheritanceLink]: Links from the start component upwards.
        """
        chain: List[InheritanceLink] = []
        seen: Set[str] = set()
        current: Optional[str] = start
        use_first = prefetched

        while current:
            key = self.locator.normalize_resource_type(current)
            if key in seen:
                logger.warning(f"Inheritance: Cycle detected at '{current}'; chain truncated.")
                break
            seen.add(key)

            if use_first:
                fetched, use_first = first, False
            else:
                fetched = self.fetch_metadata(current)
            if fetched is None:
                logger.debug(f"Inheritance: No metadata for '{current}'; chain ends.")
                break

            path, metadata = fetched
            super_type = metadata.get(SUPER_TYPE_PROPERTY) or None
            chain.append(InheritanceLink(
                identifier=path,
                title=metadata.get(TITLE_PROPERTY),
                super_type=super_type,
            ))

            if not super_type or self.locator.is_excluded(super_type):
                break
            current = super_type

        logger.info(f"Inheritance: {len(chain)} level(s) for '{start}'.")
        return chain

    def fetch_metadata(self, identifier: str) -> Optional[Tuple[str, Dict[str, Any]]]:
        """First (path, metadata) pair found among the identifier's candidate paths."""
        for path in self.locator.component_candidates(identifier):
            data = self.client.find_json(f"{path}.json")
            if isinstance(data, dict):
                return path, data
        return None
