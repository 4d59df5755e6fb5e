from __future__ import annotations

"""
Repository Path Heuristics.

Knows where artifacts conventionally live in the repository: template file
names, clientlib folders, Java sources of Sling Models, authoring
configuration nodes and the search roots used to resolve relative resource
types. Pure path arithmetic; nothing here performs I/O.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from htlgraph.domain.config import (
    DEFAULT_APP_NAME,
    DEFAULT_EXCLUDED_NAMESPACES,
    DEFAULT_SEARCH_ROOTS,
)

# Optional authoring artifacts: (name in the graph, node suffix)
CONFIGURATION_ARTIFACTS: Tuple[Tuple[str, str], ...] = (
    ("dialog", "_cq_dialog"),
    ("design_dialog", "_cq_design_dialog"),
    ("edit_config", "_cq_editConfig"),
    ("html_tag", "_cq_htmlTag"),
    ("template", "_cq_template"),
    ("child_edit_config", "_cq_childEditConfig"),
)

_ARRAY_LITERAL_RX = re.compile(r"\[(.*?)\]")


@dataclass(frozen=True)
class RepositoryLocator:
    """
    Candidate-path generator configured for one repository layout.

    Attributes:
        app_name: Application folder under /apps.
        search_roots: Roots under which relative resource types resolve.
        excluded_namespaces: Resource type prefixes that are never expanded.
    """
    app_name: str = DEFAULT_APP_NAME
    search_roots: Sequence[str] = field(default_factory=lambda: list(DEFAULT_SEARCH_ROOTS))
    excluded_namespaces: Sequence[str] = field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_NAMESPACES)
    )

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> RepositoryLocator:
        return cls(
            app_name=cfg.get("app_name", DEFAULT_APP_NAME),
            search_roots=list(cfg.get("search_roots", DEFAULT_SEARCH_ROOTS)),
            excluded_namespaces=list(cfg.get("excluded_namespaces", DEFAULT_EXCLUDED_NAMESPACES)),
        )

    # -------------------------------------------------------------------------
    # Components
    # -------------------------------------------------------------------------

    def normalize_resource_type(self, identifier: str) -> str:
        """
        Strip a leading search root so '/apps/x/y' and 'x/y' compare equal.
        """
        value = identifier.strip().rstrip("/")
        for root in self.search_roots:
            prefix = root.rstrip("/") + "/"
            if value.startswith(prefix):
                return value[len(prefix):]
        return value

    def component_candidates(self, identifier: str) -> List[str]:
        """Repository paths a component identifier may live at, in lookup order."""
        value = identifier.strip().rstrip("/")
        if value.startswith("/"):
            return [value]
        return [f"{root.rstrip('/')}/{value}" for root in self.search_roots]

    def is_excluded(self, resource_type: str) -> bool:
        normalized = self.normalize_resource_type(resource_type)
        return any(normalized.startswith(ns) for ns in self.excluded_namespaces)

    def template_candidates(self, component_path: str) -> List[str]:
        name = component_path.rstrip("/").rsplit("/", 1)[-1]
        return [
            f"{component_path}/{name}.html",
            f"{component_path}/template.html",
            f"{component_path}/{name}.jsp",
        ]

    @staticmethod
    def template_kind(template_path: str) -> str:
        return "HTL" if template_path.endswith(".html") else "JSP"

    @staticmethod
    def configuration_paths(component_path: str) -> List[Tuple[str, str]]:
        return [(name, f"{component_path}/{node}.json") for name, node in CONFIGURATION_ARTIFACTS]

    # -------------------------------------------------------------------------
    # Clientlibs & Models
    # -------------------------------------------------------------------------

    def clientlib_candidates(self, category: str) -> List[str]:
        nested = category.replace(".", "/")
        leaf = category.split(".")[-1]
        return [
            f"/apps/{self.app_name}/clientlibs/{nested}",
            f"/apps/{self.app_name}/clientlibs/components/{leaf}",
            f"/etc/clientlibs/{nested}",
        ]

    def model_source_candidates(self, class_name: str) -> List[str]:
        """
        Java source paths for a model class.

        com.acme.models.Hero -> /apps/<app>/core/src/main/java/com/acme/models/Hero.java
        """
        parts = class_name.split(".")
        file_name = parts.pop()
        package_path = "/".join(parts)
        rel = f"{package_path}/{file_name}.java" if package_path else f"{file_name}.java"
        return [
            f"/apps/{self.app_name}/core/src/main/java/{rel}",
            f"/apps/{self.app_name}/bundle/src/main/java/{rel}",
            f"/apps/{self.app_name}/src/main/java/{rel}",
        ]


# ==============================================================================
# PROPERTY HELPERS
# ==============================================================================

def parse_array_property(value: Any) -> List[str]:
    """
    Read a multi-value repository property.

    Lists pass through, '[a, b]' strings are split, any other non-empty
    string becomes a one-element list.
    """
    if not value:
        return []
    if isinstance(value, list):
        return [str(v) for v in value]
    if isinstance(value, str):
        match = _ARRAY_LITERAL_RX.search(value)
        if match:
            return [s.strip() for s in match.group(1).split(",") if s.strip()]
        return [value]
    return []
