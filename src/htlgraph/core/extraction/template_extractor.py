from __future__ import annotations

"""
HTL Template Reference Extractor.

Scans raw template markup for the block statements that name other
repository artifacts: clientlib categories, Sling Models, child resources,
template calls and image assets. Matching is regex based and best-effort:
constructs the patterns cannot see are skipped, never reported as errors.
"""

import re
from typing import Dict, List, Optional, Tuple

from htlgraph.domain.graph_models import (
    BUNDLE_KINDS,
    KIND_ALL,
    ChildComponentDescriptor,
    ExtractionResult,
    TemplateCall,
)

# -----------------------------------------------------------------------------
# PATTERNS
# -----------------------------------------------------------------------------

_CLIENTLIB_RX = re.compile(
    r"clientlib\.(css|js|all)\s*@\s*categories\s*=\s*['\"]([^'\"]+)['\"]"
)

_MODEL_RX = re.compile(
    r"data-sly-use\.\w+\s*=\s*['\"]([^'\"]+)['\"]"
)

# data-sly-use.m="${'com.acme.Model' @ param='x'}"
_MODEL_EXPR_RX = re.compile(
    r"data-sly-use\.\w+\s*=\s*['\"]\$\{\s*['\"]([^'\"]+)['\"]"
)
# Use-targets that are template libraries or script objects, not model classes
_NON_MODEL_SUFFIXES = (".html", ".htm", ".js")

# data-sly-resource="child1" ... resourceType="acme/components/text"
_RESOURCE_ATTR_RX = re.compile(
    r"data-sly-resource\s*=\s*['\"]([^'\"$]+)['\"][^>]*?resourceType\s*=\s*['\"]([^'\"]+)['\"]"
)

# data-sly-resource="${'child1' @ resourceType='acme/components/text'}"
_RESOURCE_EXPR_RX = re.compile(
    r"data-sly-resource\s*=\s*['\"]\$\{\s*['\"]([^'\"]+)['\"]\s*@([^}]*)\}"
)
_RESOURCE_TYPE_OPT_RX = re.compile(r"resourceType\s*=\s*['\"]([^'\"]+)['\"]")

_CALL_RX = re.compile(
    r"data-sly-call\s*=\s*['\"]?\$\{\s*(\w+)\.(\w+)\s*[@}]"
)

_ASSET_RX = re.compile(
    r"(?:src|data-src)\s*=\s*['\"]([^'\"]+\.(?:jpg|png|gif|svg|webp))['\"]",
    re.IGNORECASE,
)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def extract(markup: Optional[str]) -> ExtractionResult:
    """
    Extract every structural reference from a template.

    Pure function; malformed or empty markup yields an empty result.

    Args:
        markup: Raw template text.

    Returns:
        ExtractionResult: Discovered references.
    """
    if not markup:
        return ExtractionResult()

    return ExtractionResult(
        bundle_refs=extract_bundle_refs(markup),
        model_refs=extract_model_refs(markup),
        child_refs=extract_child_refs(markup),
        template_calls=extract_template_calls(markup),
        asset_refs=extract_asset_refs(markup),
    )


def extract_bundle_refs(markup: str) -> Dict[str, List[str]]:
    """
    Map each clientlib category to the kinds it is included as.

    'all' expands to both css and js; a category included several times
    collapses into one entry with the union of its kinds.
    """
    refs: Dict[str, List[str]] = {}
    for match in _CLIENTLIB_RX.finditer(markup):
        kind = match.group(1)
        kinds = BUNDLE_KINDS if kind == KIND_ALL else (kind,)

        for category in _split_categories(match.group(2)):
            merged = set(refs.get(category, [])) | set(kinds)
            refs[category] = [k for k in BUNDLE_KINDS if k in merged]
    return refs


def extract_model_refs(markup: str) -> List[str]:
    """Distinct `data-sly-use` model classes, in order of first appearance."""
    found: List[Tuple[int, str]] = []
    for match in _MODEL_RX.finditer(markup):
        found.append((match.start(), match.group(1).strip()))
    for match in _MODEL_EXPR_RX.finditer(markup):
        found.append((match.start(), match.group(1).strip()))
    found.sort(key=lambda item: item[0])

    models: List[str] = []
    for _, value in found:
        if not value or value.startswith("${") or value.endswith(_NON_MODEL_SUFFIXES):
            continue
        if value not in models:
            models.append(value)
    return models


def extract_child_refs(markup: str) -> List[ChildComponentDescriptor]:
    """One descriptor per typed `data-sly-resource`, document order, duplicates kept."""
    found: List[Tuple[int, str, str]] = []

    for match in _RESOURCE_ATTR_RX.finditer(markup):
        found.append((match.start(), match.group(1).strip(), match.group(2).strip()))

    for match in _RESOURCE_EXPR_RX.finditer(markup):
        type_match = _RESOURCE_TYPE_OPT_RX.search(match.group(2))
        if type_match:
            found.append((match.start(), match.group(1).strip(), type_match.group(1).strip()))

    found.sort(key=lambda item: item[0])
    return [ChildComponentDescriptor(path=p, resource_type=t) for _, p, t in found]


def extract_template_calls(markup: str) -> List[TemplateCall]:
    """One (object, method) pair per `data-sly-call` occurrence."""
    return [
        TemplateCall(object=m.group(1), method=m.group(2))
        for m in _CALL_RX.finditer(markup)
    ]


def extract_asset_refs(markup: str) -> List[str]:
    """Distinct image references from src/data-src attributes."""
    assets: List[str] = []
    for match in _ASSET_RX.finditer(markup):
        ref = match.group(1)
        if ref not in assets:
            assets.append(ref)
    return assets


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _split_categories(raw: str) -> List[str]:
    parts = [c.strip() for c in raw.split(",")]
    return [c for c in parts if c]
