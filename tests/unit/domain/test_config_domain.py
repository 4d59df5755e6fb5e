from __future__ import annotations

"""
Unit tests for the Config Domain.

Verifies:
1. Default configuration generation.
2. Environment overrides for repository access.
3. Merge precedence and crawl option derivation.
"""

import pytest

from htlgraph.domain.config import (
    DEFAULT_DEPTH,
    CrawlOptions,
    get_default_config,
    load_env_overrides,
    merge_config,
)


def test_default_config_values():
    """Defaults describe a local author instance and a non-recursive crawl."""
    cfg = get_default_config()

    assert cfg["host"] == "http://localhost:4502"
    assert (cfg["user"], cfg["password"]) == ("admin", "admin")
    assert cfg["timeout"] == 30
    assert cfg["search_roots"] == ["/apps", "/libs"]
    assert cfg["recursive"] is False
    assert cfg["depth"] == DEFAULT_DEPTH
    assert cfg["format"] == "json"


def test_default_config_is_a_fresh_copy():
    """Mutating one default dictionary must not leak into the next."""
    first = get_default_config()
    first["search_roots"].append("/etc")

    assert get_default_config()["search_roots"] == ["/apps", "/libs"]


def test_env_overrides_host_and_credentials():
    """Host, user and password are read from the environment mapping."""
    env = {"AEM_HOST": "https://author.example.com", "AEM_USER": "bob", "AEM_PASS": "s3cret"}

    overrides = load_env_overrides(env)

    assert overrides == {"host": "https://author.example.com", "user": "bob", "password": "s3cret"}


def test_env_credentials_need_both_values():
    """A user without a password leaves the default credential untouched."""
    assert load_env_overrides({"AEM_USER": "bob"}) == {}
    assert load_env_overrides({"AEM_HOST": "   "}) == {}


def test_merge_ignores_unknown_and_none_values():
    """Only known keys with real values override the base."""
    base = get_default_config()

    merged = merge_config(base, {"depth": 5, "format": None, "bogus": 1})

    assert merged["depth"] == 5
    assert merged["format"] == "json"
    assert "bogus" not in merged
    assert base["depth"] == DEFAULT_DEPTH


def test_crawl_options_from_config():
    """The 'depth' key becomes the recursion ceiling."""
    cfg = dict(get_default_config(), recursive=True, depth=1, fetch_assets=True)

    opts = CrawlOptions.from_config(cfg)

    assert opts == CrawlOptions(recursive=True, max_depth=1, include_dependencies=True, fetch_assets=True)


def test_crawl_options_reject_negative_depth():
    """A negative ceiling is a programming error."""
    with pytest.raises(ValueError):
        CrawlOptions(max_depth=-1)
