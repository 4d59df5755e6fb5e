from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict

from htlgraph.domain.config import (
    DEFAULT_DEPTH,
    DEFAULT_HOST,
    DEFAULT_OUTPUT_PATH,
    ENV_HOST,
    ENV_PASSWORD,
    ENV_USER,
    OUTPUT_FORMATS,
)

_EPILOG = f"""\
environment variables:
  {ENV_HOST:<12} repository host (default: {DEFAULT_HOST})
  {ENV_USER:<12} repository user (default: admin)
  {ENV_PASSWORD:<12} repository password (default: admin)

examples:
  htlgraph /apps/myapp/components/card --output card-deps.json
  htlgraph /apps/myapp/components/hero --format react --recursive --depth 2
"""

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the htlgraph CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="htlgraph",
        description="Crawl the dependency graph of an AEM component for framework migration.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    p.add_argument(
        "component_path",
        nargs="?",
        default=None,
        help="Component path, e.g. /apps/myapp/components/card",
    )

    # --- Output ---
    p.add_argument(
        "--output",
        dest="output_path",
        default=None,
        help=f"Output file path (default: {DEFAULT_OUTPUT_PATH})",
    )
    p.add_argument(
        "--format",
        dest="format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format: json or react (default: json)",
    )

    # --- Traversal ---
    p.add_argument(
        "--recursive",
        action="store_true",
        help="Recursively analyse child components.",
    )
    p.add_argument(
        "--depth",
        type=int,
        default=None,
        help=f"Maximum recursion depth (default: {DEFAULT_DEPTH})",
    )
    p.add_argument(
        "--no-dependencies",
        action="store_true",
        help="Skip clientlib, model and inheritance resolution.",
    )
    p.add_argument(
        "--assets",
        action="store_true",
        help="Download referenced images to record their size.",
    )
    p.add_argument(
        "--app-name",
        dest="app_name",
        default=None,
        help="Application folder used to guess clientlib and source paths.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration overrides dictionary.

    Flags that were not given are left out so lower-precedence sources survive.
    """
    overrides: Dict[str, Any] = {
        "output_path": args.output_path,
        "format": args.format,
        "depth": args.depth,
        "app_name": args.app_name,
    }

    if args.recursive:
        overrides["recursive"] = True
    if args.no_dependencies:
        overrides["include_dependencies"] = False
    if args.assets:
        overrides["fetch_assets"] = True

    return overrides
