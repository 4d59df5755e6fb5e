from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the artifact destination and persists the crawl result as a JSON
document. Parent directories are created on demand.
"""

import json
import os
from typing import Any, Optional, Tuple

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a file path string into an absolute filesystem path.

    Expands environment variables and '~'. Reverts to fallback when the
    input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)

# -----------------------------------------------------------------------------
# ARTIFACT PERSISTENCE
# -----------------------------------------------------------------------------

def write_json_artifact(path: str, payload: Any) -> str:
    """
    Serialize a payload as indented UTF-8 JSON.

    Args:
        path: Destination file path.
        payload: JSON-compatible data.

    Returns:
        str: Absolute path of the written file.

    Raises:
        OSError: If the directory cannot be created or the file written.
    """
    target = os.path.abspath(path)
    parent = os.path.dirname(target)
    if parent:
        ok, err = safe_mkdir(parent)
        if not ok:
            raise OSError(f"Cannot create output directory '{parent}': {err}")

    with open(target, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    return target
