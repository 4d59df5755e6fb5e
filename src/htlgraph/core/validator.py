from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted inputs (CLI flags, environment variables) and
the crawler. Every key of the default configuration has a declared kind;
values are coerced to it, repository-specific rules are applied (URL scheme,
absolute search roots, namespace prefixes) and each correction is reported
as a warning, or raised in strict mode.
"""

import logging
from typing import Any, Dict, List, Tuple, Type

from htlgraph.domain.config import OUTPUT_FORMATS, get_default_config

logger = logging.getLogger(__name__)

_STR = "str"
_BOOL = "bool"
_LIST = "list"
_DEPTH = "depth"
_SECONDS = "seconds"

_FIELD_KINDS: Dict[str, str] = {
    "host": _STR,
    "user": _STR,
    "password": _STR,
    "app_name": _STR,
    "output_path": _STR,
    "format": _STR,
    "recursive": _BOOL,
    "include_dependencies": _BOOL,
    "fetch_assets": _BOOL,
    "search_roots": _LIST,
    "excluded_namespaces": _LIST,
    "depth": _DEPTH,
    "timeout": _SECONDS,
}

_TRUE_WORDS = ("true", "1", "yes", "y", "on")
_FALSE_WORDS = ("false", "0", "no", "n", "off")


class _Report:
    """Collects corrections; in strict mode the first one raises."""

    def __init__(self, strict: bool) -> None:
        self.strict = strict
        self.warnings: List[str] = []

    def note(self, msg: str) -> None:
        self.warnings.append(msg)

    def reject(self, msg: str, outcome: str, exc: Type[Exception] = TypeError) -> None:
        if self.strict:
            raise exc(msg)
        self.warnings.append(f"{msg} {outcome}")


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a crawl configuration.

    Args:
        config: Raw configuration, normally defaults merged with env and flags.
        strict: Raise TypeError/ValueError instead of correcting values.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Clean configuration and the corrections made.
    """
    report = _Report(strict)
    defaults = get_default_config()

    if not isinstance(config, dict):
        report.reject(f"Configuration must be a mapping, got {type(config).__name__}.", "Using defaults.")
        logger.warning(report.warnings[-1])
        return defaults, report.warnings

    clean: Dict[str, Any] = dict(defaults)
    clean.update(config)

    coercers = {
        _STR: _coerce_str,
        _BOOL: _coerce_bool,
        _LIST: _coerce_list,
        _DEPTH: _coerce_depth,
        _SECONDS: _coerce_seconds,
    }
    for key, kind in _FIELD_KINDS.items():
        clean[key] = coercers[kind](key, clean.get(key), defaults[key], report)

    clean["host"] = _normalize_host(clean["host"], defaults["host"], report)
    clean["format"] = _normalize_format(clean["format"], report)
    clean["search_roots"] = _normalize_search_roots(clean["search_roots"], report)
    clean["excluded_namespaces"] = [
        ns if ns.endswith("/") else f"{ns}/" for ns in clean["excluded_namespaces"]
    ]

    return clean, report.warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _coerce_str(key: str, value: Any, fallback: str, report: _Report) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip() or fallback
    report.reject(f"'{key}' must be text, got {type(value).__name__}.", "Default kept.")
    return fallback


def _coerce_bool(key: str, value: Any, fallback: bool, report: _Report) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not report.strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            report.note(f"'{key}' read as {bool(value)} from number {value}.")
            return bool(value)
        word = value.strip().lower() if isinstance(value, str) else None
        if word in _TRUE_WORDS or word in _FALSE_WORDS:
            parsed = word in _TRUE_WORDS
            report.note(f"'{key}' read as {parsed} from '{value}'.")
            return parsed

    report.reject(f"'{key}' must be a boolean, got {value!r}.", "Default kept.")
    return fallback


def _coerce_list(key: str, value: Any, fallback: List[str], report: _Report) -> List[str]:
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not report.strict:
        parts = [p.strip() for p in value.split(",") if p.strip()]
        if parts:
            report.note(f"'{key}' split from comma-separated text.")
        return parts or list(fallback)

    if not isinstance(value, (list, tuple)):
        report.reject(f"'{key}' must be a list of text, got {type(value).__name__}.", "Default kept.")
        return list(fallback)

    items: List[str] = []
    for pos, item in enumerate(value):
        if isinstance(item, str) and item.strip():
            items.append(item.strip())
        elif not isinstance(item, str):
            report.reject(f"'{key}[{pos}]' is not text.", "Entry dropped.")
    return items or list(fallback)


def _coerce_depth(key: str, value: Any, fallback: int, report: _Report) -> int:
    if value is None:
        return fallback

    parsed: Any = None
    if isinstance(value, int) and not isinstance(value, bool):
        parsed = value
    elif isinstance(value, str) and not report.strict:
        try:
            parsed = int(value.strip())
        except ValueError:
            parsed = None

    if parsed is None:
        report.reject(f"'{key}' must be an integer, got {value!r}.", "Default kept.")
        return fallback
    if parsed < 0:
        report.reject(f"'{key}' must be >= 0, got {parsed}.", "Clamped to 0.", ValueError)
        return 0
    return parsed


def _coerce_seconds(key: str, value: Any, fallback: float, report: _Report) -> float:
    if value is None:
        return fallback
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
        return value
    report.reject(f"'{key}' must be a positive number of seconds, got {value!r}.", "Default kept.", ValueError)
    return fallback


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: REPOSITORY RULES
# -----------------------------------------------------------------------------

def _normalize_host(host: str, fallback: str, report: _Report) -> str:
    if not host.startswith(("http://", "https://")):
        report.reject(f"Host '{host}' needs an http:// or https:// scheme.", "Default kept.", ValueError)
        host = fallback
    return host.rstrip("/")


def _normalize_format(value: str, report: _Report) -> str:
    fmt = value.strip().lower()
    if fmt in OUTPUT_FORMATS:
        return fmt
    report.reject(f"Unsupported output format '{value}', expected one of {OUTPUT_FORMATS}.",
                  "Using 'json'.", ValueError)
    return "json"


def _normalize_search_roots(roots: List[str], report: _Report) -> List[str]:
    out: List[str] = []
    for root in roots:
        absolute = "/" + root.strip("/")
        if absolute != root.rstrip("/"):
            report.note(f"Search root '{root}' read as '{absolute}'.")
        if absolute not in out:
            out.append(absolute)
    return out
