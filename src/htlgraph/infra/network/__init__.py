from __future__ import annotations

"""
Network Communication Infrastructure.

Exposes the Remote Content Accessor used by the crawler to read JSON, text
and binary payloads from the repository's HTTP interface.
"""

from htlgraph.infra.network.common import DEFAULT_TIMEOUT, USER_AGENT, join_url
from htlgraph.infra.network.content_client import ContentClient

__all__ = [
    "ContentClient",
    "DEFAULT_TIMEOUT",
    "USER_AGENT",
    "join_url",
]
