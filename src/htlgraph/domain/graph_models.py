from __future__ import annotations

"""
Dependency Graph Domain Models.

Defines the data structures produced by a crawl: the analysed component node,
its child references, the clientlib (bundle) dependency map, the inheritance
chain and the aggregated graph. Every model serialises itself into plain
JSON-compatible dictionaries through `to_dict()`.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

# -----------------------------------------------------------------------------
# CONSTANTS
# -----------------------------------------------------------------------------

KIND_CSS = "css"
KIND_JS = "js"
KIND_ALL = "all"
BUNDLE_KINDS = (KIND_CSS, KIND_JS)

# Outcome of a child descriptor once the crawler has looked at it
EXPANSION_PENDING = "pending"
EXPANSION_EXPANDED = "expanded"
EXPANSION_VISITED = "visited"
EXPANSION_EXCLUDED = "excluded"
EXPANSION_DEPTH_LIMIT = "depth_limit"
EXPANSION_DISABLED = "disabled"

# -----------------------------------------------------------------------------
# TEMPLATE LEVEL MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TemplateRef:
    """
    The markup template that was found for a component.

    Attributes:
        path: Repository path of the template.
        kind: 'HTL' for .html templates, 'JSP' otherwise.
        content: Raw template text.
    """
    path: str
    kind: str
    content: str

    @property
    def size(self) -> int:
        return len(self.content)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "type": self.kind,
            "size": self.size,
            "content": self.content,
        }


@dataclass(frozen=True)
class TemplateCall:
    """A `data-sly-call` invocation of template `method` on `object`."""
    object: str
    method: str

    def to_dict(self) -> Dict[str, Any]:
        return {"object": self.object, "method": self.method}


@dataclass(frozen=True)
class AssetReference:
    """An image referenced by the template; size is known only once downloaded."""
    path: str
    size: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "size": self.size}


@dataclass
class ChildComponentDescriptor:
    """
    A child component referenced from a parent template.

    Attributes:
        path: Resource path as written in the template.
        resource_type: Declared component type.
        expansion: What the crawler did with the reference.
        resolved_dependencies: Sub-graph attached when the child was expanded.
    """
    path: str
    resource_type: str
    expansion: str = EXPANSION_PENDING
    resolved_dependencies: Optional["DependencyGraph"] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "path": self.path,
            "resource_type": self.resource_type,
            "expansion": self.expansion,
        }
        if self.resolved_dependencies is not None:
            out["resolved_dependencies"] = self.resolved_dependencies.to_dict()
        return out


@dataclass(frozen=True)
class ExtractionResult:
    """
    Structured references discovered in one template.

    Attributes:
        bundle_refs: Category name -> kinds ('css'/'js'), in discovery order.
        model_refs: Distinct model class names.
        child_refs: One descriptor per child reference, duplicates preserved.
        template_calls: One entry per template call occurrence.
        asset_refs: Distinct image references.
    """
    bundle_refs: Dict[str, List[str]] = field(default_factory=dict)
    model_refs: List[str] = field(default_factory=list)
    child_refs: List[ChildComponentDescriptor] = field(default_factory=list)
    template_calls: List[TemplateCall] = field(default_factory=list)
    asset_refs: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.bundle_refs or self.model_refs or self.child_refs
            or self.template_calls or self.asset_refs
        )

# -----------------------------------------------------------------------------
# DEPENDENCY MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class BundleFile:
    """A member file of a clientlib folder."""
    name: str
    path: str
    kind: str
    size: int
    content: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "type": self.kind,
            "size": self.size,
            "content": self.content,
        }


@dataclass
class BundleDependency:
    """
    A clientlib category and everything resolved about it.

    Attributes:
        category: Category name, unique within a run.
        kinds: Referenced kinds, subset of ('css', 'js').
        path: Storage path of the clientlib folder, None when unresolved.
        files: Member files for both kinds, css first.
        dependencies: Categories declared as dependencies.
        embed: Categories declared as embedded.
    """
    category: str
    kinds: List[str] = field(default_factory=list)
    path: Optional[str] = None
    files: List[BundleFile] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)
    embed: List[str] = field(default_factory=list)

    @property
    def resolved(self) -> bool:
        return self.path is not None

    def add_kinds(self, kinds: Iterable[str]) -> None:
        """Union the given kinds into this entry, keeping css before js."""
        merged = set(self.kinds) | set(kinds)
        self.kinds = [k for k in BUNDLE_KINDS if k in merged]

    def files_of(self, kind: str) -> List[BundleFile]:
        return [f for f in self.files if f.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "types": list(self.kinds),
            "path": self.path,
            "files": [f.to_dict() for f in self.files],
            "dependencies": list(self.dependencies),
            "embed": list(self.embed),
        }


@dataclass(frozen=True)
class InheritanceLink:
    """One step of a `sling:resourceSuperType` chain."""
    identifier: str
    title: Optional[str] = None
    super_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.identifier,
            "title": self.title,
            "resource_super_type": self.super_type,
        }


@dataclass(frozen=True)
class ModelSource:
    """Java source located for a Sling Model class."""
    class_name: str
    path: str
    content: str

    @property
    def size(self) -> int:
        return len(self.content)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "class_name": self.class_name,
            "path": self.path,
            "size": self.size,
            "content": self.content,
        }

# -----------------------------------------------------------------------------
# COMPONENT & GRAPH
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ComponentNode:
    """
    The analysed state of one component. Built once, at the end of its analysis.

    Attributes:
        identifier: Repository path that was analysed.
        resource_type: Declared resource type (defaults to the identifier).
        super_type: Declared super type, if any.
        title: Component title.
        description: Component description.
        properties: Raw metadata record.
        template: Template found for the component.
        children: Child references in template order.
        dialog: Authoring dialog payload.
        configurations: Every optional configuration artifact found, by name.
        component_group: Authoring group.
        is_container: Whether the component is a container.
        allow_parents: Declared allowed parents.
        allowed_children: Declared allowed children.
        template_calls: Template calls found in the template.
        assets: Image references found in the template.
        analyzed_at: ISO-8601 UTC timestamp of the analysis.
    """
    identifier: str
    resource_type: str
    analyzed_at: str
    super_type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    properties: Dict[str, Any] = field(default_factory=dict)
    template: Optional[TemplateRef] = None
    children: List[ChildComponentDescriptor] = field(default_factory=list)
    dialog: Optional[Dict[str, Any]] = None
    configurations: Dict[str, Any] = field(default_factory=dict)
    component_group: Optional[str] = None
    is_container: bool = False
    allow_parents: List[str] = field(default_factory=list)
    allowed_children: List[str] = field(default_factory=list)
    template_calls: List[TemplateCall] = field(default_factory=list)
    assets: List[AssetReference] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.identifier.rstrip("/").rsplit("/", 1)[-1]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.identifier,
            "resource_type": self.resource_type,
            "resource_super_type": self.super_type,
            "title": self.title,
            "description": self.description,
            "component_group": self.component_group,
            "is_container": self.is_container,
            "allow_parents": list(self.allow_parents),
            "allowed_children": list(self.allowed_children),
            "properties": dict(self.properties),
            "template": self.template.to_dict() if self.template else None,
            "children": [c.to_dict() for c in self.children],
            "dialog": self.dialog,
            "configurations": dict(self.configurations),
            "template_calls": [t.to_dict() for t in self.template_calls],
            "assets": [a.to_dict() for a in self.assets],
            "analyzed_at": self.analyzed_at,
        }


@dataclass
class DependencyGraph:
    """
    Result of crawling one component.

    The bundle map and model list hold the closure of the component: the
    entries of every expanded child, and of children already analysed
    elsewhere in the run, are merged into every ancestor graph. A reference
    back to an ancestor still being analysed contributes nothing.
    """
    root: ComponentNode
    depth: int = 0
    bundles: Dict[str, BundleDependency] = field(default_factory=dict)
    models: List[str] = field(default_factory=list)
    inheritance: List[InheritanceLink] = field(default_factory=list)
    model_sources: List[ModelSource] = field(default_factory=list)

    @property
    def children(self) -> List[ChildComponentDescriptor]:
        return self.root.children

    def add_models(self, models: Iterable[str]) -> None:
        for m in models:
            if m not in self.models:
                self.models.append(m)

    def merge_closure(self, other: DependencyGraph) -> None:
        """Fold the bundles and models of a sub-graph into this graph."""
        for category, bundle in other.bundles.items():
            self.bundles.setdefault(category, bundle)
        self.add_models(other.models)

    def expanded_graphs(self) -> List[DependencyGraph]:
        """Every sub-graph reachable from this one, depth-first."""
        out: List[DependencyGraph] = []
        for child in self.children:
            sub = child.resolved_dependencies
            if sub is not None:
                out.append(sub)
                out.extend(sub.expanded_graphs())
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component": self.root.to_dict(),
            "depth": self.depth,
            "clientlibs": {k: v.to_dict() for k, v in self.bundles.items()},
            "sling_models": list(self.models),
            "model_sources": [m.to_dict() for m in self.model_sources],
            "inheritance": [link.to_dict() for link in self.inheritance],
        }
