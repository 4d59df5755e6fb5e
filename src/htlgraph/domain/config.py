from __future__ import annotations

"""
Configuration Domain Management.

Defines the default runtime configuration, the environment variable overrides
recognised by the tool, and the immutable crawl options derived from a
validated configuration.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_HOST = "http://localhost:4502"
DEFAULT_USER = "admin"
DEFAULT_PASSWORD = "admin"
DEFAULT_TIMEOUT = 30
DEFAULT_APP_NAME = "myapp"
DEFAULT_OUTPUT_PATH = "component-dependencies.json"
DEFAULT_DEPTH = 3

OUTPUT_FORMATS: List[str] = ["json", "react"]
DEFAULT_SEARCH_ROOTS: List[str] = ["/apps", "/libs"]
DEFAULT_EXCLUDED_NAMESPACES: List[str] = ["foundation/"]

ENV_HOST = "AEM_HOST"
ENV_USER = "AEM_USER"
ENV_PASSWORD = "AEM_PASS"


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Repository access
        "host": DEFAULT_HOST,
        "user": DEFAULT_USER,
        "password": DEFAULT_PASSWORD,
        "timeout": DEFAULT_TIMEOUT,

        # Path-guessing heuristics
        "app_name": DEFAULT_APP_NAME,
        "search_roots": list(DEFAULT_SEARCH_ROOTS),
        "excluded_namespaces": list(DEFAULT_EXCLUDED_NAMESPACES),

        # Output
        "output_path": DEFAULT_OUTPUT_PATH,
        "format": "json",

        # Traversal
        "recursive": False,
        "depth": DEFAULT_DEPTH,
        "include_dependencies": True,
        "fetch_assets": False,
    }


def load_env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Read repository access overrides from the environment.

    The credential is only overridden when both user and password are set.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        Dict[str, Any]: Subset of configuration keys to override.
    """
    env = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}

    host = (env.get(ENV_HOST) or "").strip()
    if host:
        overrides["host"] = host

    user = env.get(ENV_USER)
    password = env.get(ENV_PASSWORD)
    if user and password:
        overrides["user"] = user
        overrides["password"] = password

    if overrides:
        logger.debug(f"Environment overrides applied: {sorted(overrides)}")
    return overrides


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of known, non-None override values into the base configuration.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out


# -----------------------------------------------------------------------------
# Crawl Options
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class CrawlOptions:
    """
    Traversal switches for a single crawl.

    Attributes:
        recursive: Expand child components.
        max_depth: Recursion ceiling; children deeper than this are not analysed.
        include_dependencies: Resolve clientlibs, models and inheritance.
        fetch_assets: Download referenced images to record their size.
    """
    recursive: bool = False
    max_depth: int = DEFAULT_DEPTH
    include_dependencies: bool = True
    fetch_assets: bool = False

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> CrawlOptions:
        return cls(
            recursive=bool(cfg.get("recursive", False)),
            max_depth=int(cfg.get("depth", DEFAULT_DEPTH)),
            include_dependencies=bool(cfg.get("include_dependencies", True)),
            fetch_assets=bool(cfg.get("fetch_assets", False)),
        )
