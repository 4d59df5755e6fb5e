from __future__ import annotations

"""
Component Graph Crawler.

Drives the analysis of a component: metadata, template, reference
extraction, authoring configuration, clientlibs, models and inheritance,
then (optionally) the same sequence for every child component it renders.
Every remote fetch degrades to "missing data" on failure; only a root
component that cannot be identified at all aborts the crawl.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from htlgraph.core.extraction.template_extractor import extract
from htlgraph.core.services.bundle_resolver import BundleResolver
from htlgraph.core.services.crawl_context import CrawlContext
from htlgraph.core.services.inheritance import (
    SUPER_TYPE_PROPERTY,
    TITLE_PROPERTY,
    InheritanceWalker,
)
from htlgraph.core.services.locator import RepositoryLocator, parse_array_property
from htlgraph.core.services.model_sources import collect_model_sources
from htlgraph.domain.config import CrawlOptions
from htlgraph.domain.errors import ComponentIdentityError
from htlgraph.domain.graph_models import (
    EXPANSION_DEPTH_LIMIT,
    EXPANSION_DISABLED,
    EXPANSION_EXCLUDED,
    EXPANSION_EXPANDED,
    EXPANSION_VISITED,
    AssetReference,
    ComponentNode,
    DependencyGraph,
    ExtractionResult,
    TemplateRef,
)
from htlgraph.infra.network import ContentClient

logger = logging.getLogger(__name__)


class ComponentGraphCrawler:
    """
    Orchestrates the crawl of one root component.

    Args:
        client: Remote Content Accessor.
        locator: Repository path heuristics.
    """

    def __init__(self, client: ContentClient, locator: Optional[RepositoryLocator] = None) -> None:
        self.client = client
        self.locator = locator or RepositoryLocator()
        self.walker = InheritanceWalker(client, self.locator)

    # ==========================================================================
    # PUBLIC API
    # ==========================================================================

    def crawl(self, identifier: str, options: Optional[CrawlOptions] = None) -> DependencyGraph:
        """
        Build the dependency graph of a component.

        Args:
            identifier: Component path (e.g. /apps/acme/components/card) or resource type.
            options: Traversal switches. Defaults to a non-recursive full analysis.

        Returns:
            DependencyGraph: Graph rooted at the component.

        Raises:
            ComponentIdentityError: If the root component cannot be identified.
        """
        if not isinstance(identifier, str) or not identifier.strip():
            raise ComponentIdentityError(str(identifier), "empty component identifier")

        opts = options or CrawlOptions()
        context = CrawlContext()
        context.claim_component(self.locator.normalize_resource_type(identifier))

        logger.info(
            f"Crawl started: {identifier} (recursive={opts.recursive}, "
            f"max_depth={opts.max_depth}, dependencies={opts.include_dependencies})"
        )
        graph = self._analyze(identifier.strip(), opts, context, depth=0, is_root=True)
        logger.info(
            f"Crawl finished: {len(context.visited)} component(s), "
            f"{len(graph.bundles)} clientlib(s), {len(graph.models)} model(s)."
        )
        return graph

    # ==========================================================================
    # ANALYSIS SEQUENCE
    # ==========================================================================

    def _analyze(
            self,
            identifier: str,
            options: CrawlOptions,
            context: CrawlContext,
            depth: int,
            is_root: bool = False,
    ) -> DependencyGraph:
        logger.info(f"Analyzing component: {identifier} (depth {depth})")

        # 1. Metadata
        path, metadata = self._fetch_metadata(identifier)

        # 2. Template
        template = self._fetch_template(path)

        if is_root and metadata is None and template is None:
            raise ComponentIdentityError(identifier, "no metadata and no template found")

        props: Dict[str, Any] = metadata or {}

        # 3. Reference extraction
        extraction = extract(template.content) if template else ExtractionResult()

        # 4. Optional authoring configuration
        configurations = self._fetch_configurations(path)

        node = ComponentNode(
            identifier=path,
            resource_type=props.get("sling:resourceType") or identifier,
            analyzed_at=datetime.now(timezone.utc).isoformat(),
            super_type=props.get(SUPER_TYPE_PROPERTY) or None,
            title=props.get(TITLE_PROPERTY),
            description=props.get("jcr:description"),
            properties=dict(props),
            template=template,
            children=list(extraction.child_refs),
            dialog=configurations.get("dialog"),
            configurations=configurations,
            component_group=props.get("componentGroup"),
            is_container=props.get("cq:isContainer") is True,
            allow_parents=parse_array_property(props.get("allowParents")),
            allowed_children=parse_array_property(props.get("allowedChildren")),
            template_calls=list(extraction.template_calls),
            assets=self._collect_assets(path, extraction.asset_refs, options.fetch_assets),
        )

        graph = DependencyGraph(root=node, depth=depth)

        # 5. Clientlibs, models, inheritance
        if options.include_dependencies:
            resolver = BundleResolver(self.client, self.locator, context)
            graph.bundles = resolver.resolve_all(extraction.bundle_refs)
            graph.add_models(extraction.model_refs)
            graph.model_sources = collect_model_sources(self.client, self.locator, graph.models)
            graph.inheritance = self.walker.walk(
                path,
                (path, metadata) if metadata is not None else None,
                prefetched=True,
            )

        # 6. Children
        self._expand_children(graph, options, context, depth)
        return graph

    def _expand_children(
            self,
            graph: DependencyGraph,
            options: CrawlOptions,
            context: CrawlContext,
            depth: int,
    ) -> None:
        for child in graph.children:
            if not options.recursive:
                child.expansion = EXPANSION_DISABLED
                continue
            if self.locator.is_excluded(child.resource_type):
                child.expansion = EXPANSION_EXCLUDED
                continue
            if depth >= options.max_depth:
                child.expansion = EXPANSION_DEPTH_LIMIT
                continue
            key = self.locator.normalize_resource_type(child.resource_type)
            if not context.claim_component(key):
                logger.debug(f"Children: '{child.resource_type}' already analysed in this run.")
                child.expansion = EXPANSION_VISITED
                known = context.graph_for(key)
                if known is not None:
                    graph.merge_closure(known)
                continue

            sub_graph = self._analyze(child.resource_type, options, context, depth + 1)
            context.record_graph(key, sub_graph)
            child.resolved_dependencies = sub_graph
            child.expansion = EXPANSION_EXPANDED
            graph.merge_closure(sub_graph)

    # ==========================================================================
    # FETCH HELPERS
    # ==========================================================================

    def _fetch_metadata(self, identifier: str) -> Tuple[str, Optional[Dict[str, Any]]]:
        found = self.walker.fetch_metadata(identifier)
        if found is None:
            logger.warning(f"Component metadata unavailable: {identifier}")
            return self.locator.component_candidates(identifier)[0], None
        return found

    def _fetch_template(self, component_path: str) -> Optional[TemplateRef]:
        for candidate in self.locator.template_candidates(component_path):
            content = self.client.find_text(candidate)
            if content:
                kind = self.locator.template_kind(candidate)
                logger.debug(f"Template found: {candidate} ({kind})")
                return TemplateRef(path=candidate, kind=kind, content=content)

        logger.warning(f"No template found for {component_path}")
        return None

    def _fetch_configurations(self, component_path: str) -> Dict[str, Any]:
        configurations: Dict[str, Any] = {}
        for name, path in self.locator.configuration_paths(component_path):
            data = self.client.find_json(path)
            if data is not None:
                configurations[name] = data
        return configurations

    def _collect_assets(
            self,
            component_path: str,
            refs: List[str],
            download: bool,
    ) -> List[AssetReference]:
        if not download:
            return [AssetReference(path=ref) for ref in refs]

        assets: List[AssetReference] = []
        for ref in refs:
            target = ref if ref.startswith(("/", "http://", "https://")) else f"{component_path}/{ref}"
            payload = self.client.find_binary(target)
            assets.append(AssetReference(path=ref, size=len(payload) if payload is not None else None))
        return assets


def crawl(
        client: ContentClient,
        identifier: str,
        options: Optional[CrawlOptions] = None,
        locator: Optional[RepositoryLocator] = None,
) -> DependencyGraph:
    """Convenience wrapper around ComponentGraphCrawler.crawl()."""
    return ComponentGraphCrawler(client, locator).crawl(identifier, options)
