from __future__ import annotations

"""
Domain Error Taxonomy.

Separates recoverable transport problems (absent artifacts) from the single
fatal condition of the crawl: the root component cannot be identified.
"""

from typing import Optional


class HtlGraphError(Exception):
    """Base class for every error raised by the package."""


class TransportError(HtlGraphError):
    """
    A remote fetch failed (non-2xx status, timeout, connection or parse error).

    Attributes:
        path: Repository path (or URL) that was requested.
        reason: Human-readable failure description.
        status: HTTP status code when the server answered.
    """

    def __init__(self, path: str, reason: str, status: Optional[int] = None) -> None:
        self.path = path
        self.reason = reason
        self.status = status
        super().__init__(f"{path}: {reason}")

    @property
    def not_found(self) -> bool:
        return self.status == 404


class ComponentIdentityError(HtlGraphError):
    """The root component could not be determined; aborts the crawl."""

    def __init__(self, identifier: str, reason: str) -> None:
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Cannot identify component '{identifier}': {reason}")
