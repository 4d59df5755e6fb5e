from __future__ import annotations

USER_AGENT = "htlgraph-client/0.1.0"
DEFAULT_TIMEOUT = 30

ACCEPT_JSON = "application/json"
ACCEPT_TEXT = "text/html,text/plain,*/*;q=0.8"
ACCEPT_BINARY = "*/*"


def join_url(base_url: str, path: str) -> str:
    """Resolve a repository path against the host; absolute URLs pass through."""
    if path.startswith("http://") or path.startswith("https://"):
        return path
    base = base_url.rstrip("/")
    if not path.startswith("/"):
        path = "/" + path
    return f"{base}{path}"
