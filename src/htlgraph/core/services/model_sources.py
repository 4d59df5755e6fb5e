from __future__ import annotations

"""
Sling Model Source Collector.

Looks up the Java source of each referenced model class among the
conventional source roots of the application.
"""

import logging
from typing import Iterable, List, Optional

from htlgraph.core.services.locator import RepositoryLocator
from htlgraph.domain.graph_models import ModelSource
from htlgraph.infra.network import ContentClient

logger = logging.getLogger(__name__)


def collect_model_sources(
        client: ContentClient,
        locator: RepositoryLocator,
        class_names: Iterable[str],
) -> List[ModelSource]:
    """
    Fetch the sources that can be found; missing classes are logged and skipped.
    """
    sources: List[ModelSource] = []
    for class_name in class_names:
        source = find_model_source(client, locator, class_name)
        if source is None:
            logger.warning(f"Models: Source not found for '{class_name}'.")
            continue
        sources.append(source)
    return sources


def find_model_source(
        client: ContentClient,
        locator: RepositoryLocator,
        class_name: str,
) -> Optional[ModelSource]:
    for path in locator.model_source_candidates(class_name):
        content = client.find_text(path)
        if content is not None:
            logger.debug(f"Models: {class_name} -> {path}")
            return ModelSource(class_name=class_name, path=path, content=content)
    return None
