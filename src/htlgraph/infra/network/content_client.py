from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlsplit

import requests

from htlgraph.domain.errors import TransportError
from htlgraph.infra.network.common import (
    ACCEPT_BINARY,
    ACCEPT_JSON,
    ACCEPT_TEXT,
    DEFAULT_TIMEOUT,
    USER_AGENT,
    join_url,
)

logger = logging.getLogger(__name__)


class ContentClient:
    """
    Read-only accessor for the repository's HTTP/JSON interface.

    The `get_*` methods raise TransportError on any failure; the `find_*`
    variants report an absent artifact as None.
    """

    def __init__(
            self,
            host: str,
            user: str,
            password: str,
            timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.host = host.rstrip("/")
        self.timeout = timeout
        self._auth: Tuple[str, str] = (user, password)
        self._origin = _origin(self.host)

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> ContentClient:
        return cls(
            host=cfg["host"],
            user=cfg["user"],
            password=cfg["password"],
            timeout=cfg.get("timeout", DEFAULT_TIMEOUT),
        )

    # -------------------------------------------------------------------------
    # Raising accessors
    # -------------------------------------------------------------------------

    def get_json(self, path: str) -> Any:
        """Fetch and decode a JSON object or array."""
        response = self._get(path, ACCEPT_JSON)
        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(path, f"Unparsable JSON body: {e}") from e

        if not isinstance(data, (dict, list)):
            raise TransportError(path, f"Unexpected JSON root: {type(data).__name__}")
        return data

    def get_text(self, path: str) -> str:
        return self._get(path, ACCEPT_TEXT).text

    def get_binary(self, path: str) -> bytes:
        return self._get(path, ACCEPT_BINARY).content

    # -------------------------------------------------------------------------
    # Optional accessors
    # -------------------------------------------------------------------------

    def find_json(self, path: str) -> Optional[Any]:
        try:
            return self.get_json(path)
        except TransportError as e:
            logger.debug(f"Network: JSON artifact absent ({e})")
            return None

    def find_text(self, path: str) -> Optional[str]:
        try:
            return self.get_text(path)
        except TransportError as e:
            logger.debug(f"Network: Text artifact absent ({e})")
            return None

    def find_binary(self, path: str) -> Optional[bytes]:
        try:
            return self.get_binary(path)
        except TransportError as e:
            logger.debug(f"Network: Binary artifact absent ({e})")
            return None

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def _get(self, path: str, accept: str) -> requests.Response:
        url = join_url(self.host, path)
        headers = {"User-Agent": USER_AGENT, "Accept": accept}
        logger.debug(f"Network: GET {url}")

        response: Optional[requests.Response] = None
        try:
            response = requests.get(url, headers=headers, auth=self._auth_for(url), timeout=self.timeout)
            response.raise_for_status()
            return response
        except requests.exceptions.Timeout as e:
            raise TransportError(path, f"Timed out after {self.timeout}s") from e
        except requests.exceptions.HTTPError as e:
            status = getattr(e.response, "status_code", None)
            if status is None:
                status = getattr(response, "status_code", None)
            raise TransportError(path, f"HTTP {status}", status=status) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(path, f"Communication error: {e}") from e

    def _auth_for(self, url: str) -> Optional[Tuple[str, str]]:
        # Credentials only travel to the repository host
        if _origin(url) == self._origin:
            return self._auth
        return None


def _origin(url: str) -> Tuple[str, str]:
    parts = urlsplit(url)
    return parts.scheme.lower(), parts.netloc.lower()
