from __future__ import annotations

"""
React Migration Report.

Maps a dependency graph onto a suggested React file layout, the props
derived from the authoring dialog and an ordered list of migration steps.
Stateless; reads the graph only.
"""

from typing import Any, Dict, List, Optional

from htlgraph.domain.graph_models import KIND_CSS, KIND_JS, DependencyGraph

# Dialog field resource type fragment -> TypeScript type
FIELD_TYPE_MAP: Dict[str, str] = {
    "textfield": "string",
    "textarea": "string",
    "numberfield": "number",
    "checkbox": "boolean",
    "pathfield": "string",
    "select": "string",
}
DEFAULT_PROP_TYPE = "string"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def build_migration_report(graph: DependencyGraph) -> Dict[str, Any]:
    """
    Derive the React migration report of a crawled component.

    Args:
        graph: Result of a crawl.

    Returns:
        Dict[str, Any]: JSON-compatible report.
    """
    node = graph.root
    component_dir = to_react_component_path(node.resource_type)
    name = node.name
    first_model = graph.models[0] if graph.models else None

    return {
        "component": node.resource_type,
        "react_structure": {
            "component_path": component_dir,
            "entry_file": f"src/components/{name}/{name}.tsx",
            "styles_path": f"{component_dir}/Component.module.css",
            "model_path": to_react_model_path(first_model),
            "assets_path": f"{component_dir}/assets",
        },
        "props": extract_props_from_dialog(node.dialog) if node.dialog else {},
        "dependencies": {
            "css_files": [f.path for b in graph.bundles.values() for f in b.files_of(KIND_CSS)],
            "js_files": [f.path for b in graph.bundles.values() for f in b.files_of(KIND_JS)],
            "models": list(graph.models),
            "child_components": [c.resource_type for c in node.children],
            "assets": [a.path for a in node.assets],
        },
        "migration_steps": generate_migration_steps(graph),
    }


def to_react_component_path(resource_type: str) -> str:
    """'/apps/acme/components/card' -> 'src/components/acme/components/card'."""
    parts = [p for p in resource_type.split("/") if p]
    return "src/components/" + "/".join(parts[1:])


def to_react_model_path(model_class: Optional[str]) -> Optional[str]:
    if not model_class:
        return None
    return f"src/models/{model_class.split('.')[-1]}.js"


def infer_prop_type(field_resource_type: str) -> str:
    for fragment, ts_type in FIELD_TYPE_MAP.items():
        if fragment in field_resource_type:
            return ts_type
    return DEFAULT_PROP_TYPE


def extract_props_from_dialog(dialog: Any) -> Dict[str, Dict[str, Any]]:
    """
    Collect one prop per dialog field node (a node with `name` and a resource type).

    `content` and nested `items` containers are walked depth-first.
    """
    props: Dict[str, Dict[str, Any]] = {}
    _collect_fields(dialog, props)
    return props


def generate_migration_steps(graph: DependencyGraph) -> List[str]:
    steps = [
        "Create the React component directory structure",
        "Migrate clientlib styles (CSS) into CSS modules",
    ]
    if graph.models:
        steps.append("Create data models from the Sling Models")
    steps.append("Implement the React component logic")
    steps.append("Integrate child components")
    if graph.root.dialog:
        steps.append("Convert the dialog configuration into component props")
    steps.append("Test and validate")
    return [f"{i}. {step}" for i, step in enumerate(steps, start=1)]


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _collect_fields(node: Any, props: Dict[str, Dict[str, Any]]) -> None:
    if not isinstance(node, dict):
        return

    field_name = node.get("name")
    field_type = node.get("sling:resourceType")
    if isinstance(field_name, str) and isinstance(field_type, str):
        key = field_name[2:] if field_name.startswith("./") else field_name
        props[key] = {
            "type": infer_prop_type(field_type),
            "required": node.get("required") is True,
            "description": node.get("fieldDescription") or node.get("fieldLabel"),
            "default": node.get("value"),
        }

    _collect_fields(node.get("content"), props)

    items = node.get("items")
    if isinstance(items, dict):
        for child in items.values():
            _collect_fields(child, props)
