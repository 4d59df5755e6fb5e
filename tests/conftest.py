from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. An in-memory Remote Content Accessor serving canned repository responses.
3. A representative component template and repository layout.
"""

import os
import sys
from typing import Any, Callable, Dict, List, Optional

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from htlgraph.domain.errors import TransportError  # noqa: E402
from htlgraph.infra.network import ContentClient  # noqa: E402


# -----------------------------------------------------------------------------
# Fake Remote Content Accessor
# -----------------------------------------------------------------------------
class FakeContentClient(ContentClient):
    """
    ContentClient that answers from dictionaries and records every request.

    Paths missing from the maps fail like an HTTP 404.
    """

    def __init__(
            self,
            json_map: Optional[Dict[str, Any]] = None,
            text_map: Optional[Dict[str, str]] = None,
            binary_map: Optional[Dict[str, bytes]] = None,
    ) -> None:
        super().__init__("http://aem.test", "admin", "admin")
        self.json_map: Dict[str, Any] = dict(json_map or {})
        self.text_map: Dict[str, str] = dict(text_map or {})
        self.binary_map: Dict[str, bytes] = dict(binary_map or {})
        self.requests: List[str] = []

    def get_json(self, path: str) -> Any:
        self.requests.append(path)
        if path not in self.json_map:
            raise TransportError(path, "HTTP 404", status=404)
        return self.json_map[path]

    def get_text(self, path: str) -> str:
        self.requests.append(path)
        if path not in self.text_map:
            raise TransportError(path, "HTTP 404", status=404)
        return self.text_map[path]

    def get_binary(self, path: str) -> bytes:
        self.requests.append(path)
        if path not in self.binary_map:
            raise TransportError(path, "HTTP 404", status=404)
        return self.binary_map[path]

    def count(self, path: str) -> int:
        return self.requests.count(path)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_client() -> Callable[..., FakeContentClient]:
    """Factory for FakeContentClient instances."""
    return FakeContentClient


HERO_TEMPLATE = """
<sly data-sly-use.clientlib="/libs/granite/sightly/templates/clientlib.html"/>
<sly data-sly-call="${clientlib.css @ categories='site.base'}"/>
<div class="hero" data-sly-use.hero="com.acme.models.Hero">
    <img src="images/banner.png" alt="${hero.title}"/>
    <div data-sly-resource="child1" data-sly-unwrap resourceType="acme/components/text"></div>
</div>
"""


@pytest.fixture
def hero_template() -> str:
    return HERO_TEMPLATE


@pytest.fixture
def hero_repository() -> Dict[str, Dict[str, Any]]:
    """
    Canned responses for /apps/acme/components/hero and its neighbourhood.

    Returns:
        Dict[str, Dict[str, Any]]: 'json' and 'text' maps for FakeContentClient.
    """
    root = "/apps/acme/components/hero"
    return {
        "json": {
            f"{root}.json": {
                "jcr:primaryType": "cq:Component",
                "jcr:title": "Hero",
                "jcr:description": "Full-width hero banner",
                "componentGroup": "Acme - Content",
                "sling:resourceSuperType": "core/wcm/components/teaser/v2/teaser",
            },
            f"{root}/_cq_dialog.json": {
                "jcr:title": "Hero",
                "items": {
                    "title": {
                        "name": "./title",
                        "sling:resourceType": "granite/ui/components/coral/foundation/form/textfield",
                        "fieldLabel": "Title",
                        "required": True,
                    },
                },
            },
            "/libs/core/wcm/components/teaser/v2/teaser.json": {
                "jcr:title": "Teaser (v2)",
            },
            "/apps/myapp/clientlibs/site/base.json": {
                "jcr:primaryType": "cq:ClientLibraryFolder",
                "categories": ["site.base"],
            },
            "/apps/myapp/clientlibs/site/base/css.json": {
                "jcr:primaryType": "nt:folder",
                "hero.css": {"jcr:primaryType": "nt:file"},
            },
            "/apps/acme/components/text.json": {
                "jcr:title": "Text",
            },
        },
        "text": {
            f"{root}/hero.html": HERO_TEMPLATE,
            "/apps/myapp/clientlibs/site/base/css/hero.css": ".hero { color: red; }",
            "/apps/myapp/core/src/main/java/com/acme/models/Hero.java": "public interface Hero {}",
            "/apps/acme/components/text/text.html": "<p>${properties.text}</p>",
        },
    }
