from __future__ import annotations

"""
Unit tests for the Repository Path Heuristics.
"""

import pytest

from htlgraph.core.services.locator import RepositoryLocator, parse_array_property


@pytest.fixture
def locator() -> RepositoryLocator:
    return RepositoryLocator(app_name="shop")


def test_normalize_resource_type_strips_search_roots(locator) -> None:
    """TC-01: Absolute and relative forms of a type normalise to the same key."""
    assert locator.normalize_resource_type("/apps/acme/components/card/") == "acme/components/card"
    assert locator.normalize_resource_type("/libs/core/x") == "core/x"
    assert locator.normalize_resource_type("acme/components/card") == "acme/components/card"
    assert locator.normalize_resource_type("/content/site") == "/content/site"


def test_component_candidates(locator) -> None:
    """TC-02: Absolute paths are used as-is; relative types try every root."""
    assert locator.component_candidates("/apps/acme/card") == ["/apps/acme/card"]
    assert locator.component_candidates("acme/card") == ["/apps/acme/card", "/libs/acme/card"]


def test_is_excluded(locator) -> None:
    """TC-03: Excluded namespaces match both relative and absolute forms."""
    assert locator.is_excluded("foundation/components/parsys")
    assert locator.is_excluded("/libs/foundation/components/parsys")
    assert not locator.is_excluded("acme/components/foundationish")


def test_template_candidates_and_kind(locator) -> None:
    """TC-04: HTL names are tried before the generic template and JSP."""
    candidates = locator.template_candidates("/apps/acme/components/card")

    assert candidates == [
        "/apps/acme/components/card/card.html",
        "/apps/acme/components/card/template.html",
        "/apps/acme/components/card/card.jsp",
    ]
    assert locator.template_kind(candidates[0]) == "HTL"
    assert locator.template_kind(candidates[2]) == "JSP"


def test_clientlib_candidates(locator) -> None:
    """TC-05: Category dots become folders under the configured application."""
    assert locator.clientlib_candidates("site.base") == [
        "/apps/shop/clientlibs/site/base",
        "/apps/shop/clientlibs/components/base",
        "/etc/clientlibs/site/base",
    ]


def test_model_source_candidates(locator) -> None:
    """TC-06: The package path maps onto the Java source tree."""
    assert locator.model_source_candidates("com.acme.Card")[0] == (
        "/apps/shop/core/src/main/java/com/acme/Card.java"
    )


def test_configuration_paths(locator) -> None:
    """TC-07: Every optional authoring node is probed as JSON."""
    paths = dict(locator.configuration_paths("/apps/acme/card"))

    assert paths["dialog"] == "/apps/acme/card/_cq_dialog.json"
    assert paths["edit_config"] == "/apps/acme/card/_cq_editConfig.json"
    assert len(paths) == 6


def test_from_config() -> None:
    """TC-08: Configuration keys drive the locator fields."""
    loc = RepositoryLocator.from_config({
        "app_name": "site",
        "search_roots": ["/apps"],
        "excluded_namespaces": ["legacy/"],
    })

    assert loc.component_candidates("x/y") == ["/apps/x/y"]
    assert loc.is_excluded("legacy/thing")
    assert loc.clientlib_candidates("a")[0] == "/apps/site/clientlibs/a"


@pytest.mark.parametrize("value, expected", [
    (None, []),
    ("", []),
    (["a", "b"], ["a", "b"]),
    ("[a, b ,c]", ["a", "b", "c"]),
    ("single", ["single"]),
    (42, []),
])
def test_parse_array_property(value, expected) -> None:
    """TC-09: Multi-value properties are read from lists and literal strings."""
    assert parse_array_property(value) == expected
