from __future__ import annotations

"""
Clientlib Dependency Resolver.

Resolves clientlib categories to their repository folders and member files,
then follows the `dependencies` and `embed` categories they declare,
breadth-first. Each category is resolved at most once per run, so cyclic
declarations terminate.
"""

import logging
from collections import deque
from typing import Any, Deque, Dict, Iterable, List, Optional, Set, Tuple

from htlgraph.core.services.crawl_context import CrawlContext
from htlgraph.core.services.locator import RepositoryLocator, parse_array_property
from htlgraph.domain.errors import TransportError
from htlgraph.domain.graph_models import BUNDLE_KINDS, BundleDependency, BundleFile
from htlgraph.infra.network import ContentClient

logger = logging.getLogger(__name__)

_SKIPPED_PREFIXES = ("jcr:", "sling:")


class BundleResolver:
    """
    Breadth-first resolver over the clientlib category graph.

    Args:
        client: Remote Content Accessor.
        locator: Path heuristics for clientlib folders.
        context: Run context shared with the crawler; a fresh one when omitted.
    """

    def __init__(
            self,
            client: ContentClient,
            locator: RepositoryLocator,
            context: Optional[CrawlContext] = None,
    ) -> None:
        self.client = client
        self.locator = locator
        self.context = context or CrawlContext()

    # ==========================================================================
    # PUBLIC API
    # ==========================================================================

    def resolve_all(self, seeds: Dict[str, List[str]]) -> Dict[str, BundleDependency]:
        """
        Resolve the seed categories and everything they transitively declare.

        Args:
            seeds: Category name -> referenced kinds, as extracted from a template.

        Returns:
            Dict[str, BundleDependency]: One entry per category reached.
        """
        result: Dict[str, BundleDependency] = {}
        processed: Set[str] = set()
        queue: Deque[Tuple[str, List[str]]] = deque(seeds.items())

        while queue:
            category, kinds = queue.popleft()
            if category in processed:
                continue
            processed.add(category)

            bundle = self._obtain(category)
            bundle.add_kinds(kinds)
            result[category] = bundle

            for declared in bundle.dependencies + bundle.embed:
                if declared not in processed:
                    queue.append((declared, list(bundle.kinds)))

        resolved = sum(1 for b in result.values() if b.resolved)
        logger.info(f"Clientlibs: {resolved}/{len(result)} categories resolved.")
        return result

    def resolve(self, category: str) -> BundleDependency:
        """
        Locate one category and list its css and js members.

        An unresolved category is returned with `path=None` and no files.
        """
        located = self._locate(category)
        if located is None:
            logger.warning(f"Clientlibs: Category '{category}' could not be located.")
            return BundleDependency(category=category)

        path, metadata = located
        files: List[BundleFile] = []
        for kind in BUNDLE_KINDS:
            files.extend(self._list_files(path, kind))

        bundle = BundleDependency(
            category=category,
            path=path,
            files=files,
            dependencies=parse_array_property(metadata.get("dependencies")),
            embed=parse_array_property(metadata.get("embed")),
        )
        logger.debug(f"Clientlibs: '{category}' -> {path} ({len(files)} files)")
        return bundle

    # ==========================================================================
    # PRIVATE HELPERS
    # ==========================================================================

    def _obtain(self, category: str) -> BundleDependency:
        """Resolve a category once per run; later callers reuse the recorded entry."""
        if not self.context.claim_category(category):
            existing = self.context.bundle_for(category)
            if existing is not None:
                return existing

        bundle = self.resolve(category)
        self.context.record_bundle(bundle)
        return bundle

    def _locate(self, category: str) -> Optional[Tuple[str, Dict[str, Any]]]:
        for candidate in self.locator.clientlib_candidates(category):
            try:
                metadata = self.client.get_json(f"{candidate}.json")
            except TransportError as e:
                logger.debug(f"Clientlibs: Candidate miss for '{category}' ({e})")
                continue
            return candidate, (metadata if isinstance(metadata, dict) else {})
        return None

    def _list_files(self, clientlib_path: str, kind: str) -> Iterable[BundleFile]:
        dir_path = f"{clientlib_path}/{kind}"
        listing = self.client.find_json(f"{dir_path}.json")
        if not isinstance(listing, dict):
            return []

        files: List[BundleFile] = []
        for name in listing:
            if name.startswith(_SKIPPED_PREFIXES):
                continue

            file_path = f"{dir_path}/{name}"
            content = self.client.find_text(file_path)
            if content is None:
                # Sub-folders and unreadable members are skipped
                continue
            files.append(BundleFile(
                name=name,
                path=file_path,
                kind=kind,
                size=len(content),
                content=content,
            ))
        return files
