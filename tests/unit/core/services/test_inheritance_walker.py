from __future__ import annotations

"""
Unit tests for the Resource Super Type Chain Walker.
"""

from htlgraph.core.services.inheritance import InheritanceWalker
from htlgraph.core.services.locator import RepositoryLocator


def _walker(client) -> InheritanceWalker:
    return InheritanceWalker(client, RepositoryLocator())


def test_chain_order_from_start_upwards(make_client) -> None:
    """TC-01: Links run from the start component to the top of the chain."""
    client = make_client(json_map={
        "/apps/acme/components/hero.json": {
            "jcr:title": "Hero",
            "sling:resourceSuperType": "acme/components/banner",
        },
        "/apps/acme/components/banner.json": {
            "jcr:title": "Banner",
            "sling:resourceSuperType": "core/wcm/components/teaser/v2/teaser",
        },
        "/libs/core/wcm/components/teaser/v2/teaser.json": {"jcr:title": "Teaser"},
    })

    chain = _walker(client).walk("/apps/acme/components/hero")

    assert [link.identifier for link in chain] == [
        "/apps/acme/components/hero",
        "/apps/acme/components/banner",
        "/libs/core/wcm/components/teaser/v2/teaser",
    ]
    assert [link.title for link in chain] == ["Hero", "Banner", "Teaser"]
    assert chain[-1].super_type is None


def test_excluded_super_type_stops_the_walk(make_client) -> None:
    """TC-02: A super type in an excluded namespace is recorded but not followed."""
    client = make_client(json_map={
        "/apps/acme/components/page.json": {
            "sling:resourceSuperType": "foundation/components/page",
        },
        "/libs/foundation/components/page.json": {"jcr:title": "Page"},
    })

    chain = _walker(client).walk("/apps/acme/components/page")

    assert len(chain) == 1
    assert chain[0].super_type == "foundation/components/page"
    assert client.count("/libs/foundation/components/page.json") == 0


def test_missing_metadata_ends_the_chain(make_client) -> None:
    """TC-03: An unreachable super type ends the chain without raising."""
    client = make_client(json_map={
        "/apps/acme/components/card.json": {"sling:resourceSuperType": "acme/components/gone"},
    })

    chain = _walker(client).walk("/apps/acme/components/card")

    assert [link.identifier for link in chain] == ["/apps/acme/components/card"]


def test_cycle_is_truncated(make_client) -> None:
    """TC-04: A chain that loops back is cut at the first repeated component."""
    client = make_client(json_map={
        "/apps/acme/components/a.json": {"sling:resourceSuperType": "acme/components/b"},
        "/apps/acme/components/b.json": {"sling:resourceSuperType": "/apps/acme/components/a"},
    })

    chain = _walker(client).walk("/apps/acme/components/a")

    assert [link.identifier for link in chain] == [
        "/apps/acme/components/a",
        "/apps/acme/components/b",
    ]
    assert client.count("/apps/acme/components/a.json") == 1


def test_fetch_metadata_searches_roots(make_client) -> None:
    """TC-05: A relative type resolves under /apps before /libs."""
    client = make_client(json_map={"/libs/acme/components/x.json": {"jcr:title": "X"}})

    found = _walker(client).fetch_metadata("acme/components/x")

    assert found == ("/libs/acme/components/x", {"jcr:title": "X"})
    assert client.requests == ["/apps/acme/components/x.json", "/libs/acme/components/x.json"]


def test_prefetched_start_is_not_fetched_again(make_client) -> None:
    """TC-06: Metadata handed in by the caller replaces the first fetch."""
    client = make_client(json_map={
        "/apps/acme/components/banner.json": {"jcr:title": "Banner"},
    })
    start = ("/apps/acme/components/hero", {"sling:resourceSuperType": "acme/components/banner"})

    chain = _walker(client).walk("/apps/acme/components/hero", start, prefetched=True)

    assert [link.identifier for link in chain] == [
        "/apps/acme/components/hero",
        "/apps/acme/components/banner",
    ]
    assert client.count("/apps/acme/components/hero.json") == 0


def test_prefetched_absence_ends_the_chain(make_client) -> None:
    """TC-07: A start component known to have no metadata gives an empty chain without requests."""
    client = make_client()

    chain = _walker(client).walk("/apps/acme/components/hero", None, prefetched=True)

    assert chain == []
    assert client.requests == []
