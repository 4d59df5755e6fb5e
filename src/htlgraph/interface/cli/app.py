from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, environment, flags), the crawl itself, report derivation and
artifact persistence. A fatal failure never leaves a partial artifact.
"""

import sys
from typing import Any, Dict, List, Mapping, Optional

from htlgraph.core.crawler import ComponentGraphCrawler
from htlgraph.core.report.migration_report import build_migration_report
from htlgraph.core.services.locator import RepositoryLocator
from htlgraph.core.validator import validate_config
from htlgraph.domain.config import (
    CrawlOptions,
    get_default_config,
    load_env_overrides,
    merge_config,
)
from htlgraph.domain.errors import ComponentIdentityError
from htlgraph.domain.graph_models import DependencyGraph
from htlgraph.infra.fs import normalize_path, write_json_artifact
from htlgraph.infra.logging import LoggingConfig, configure_logging, get_logger
from htlgraph.infra.network import ContentClient
from htlgraph.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv[1:].
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        int: Process exit code (0 success, 1 usage or fatal failure, 130 interrupted).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Usage banner when no component was given
    if not args.component_path:
        parser.print_help(sys.stdout)
        return 1

    # 2. Logging bootstrap
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 3. Configuration hierarchy: defaults < environment < flags
    raw_conf = merge_config(get_default_config(), load_env_overrides(environ))
    raw_conf = merge_config(raw_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    output_path = normalize_path(clean_conf["output_path"], "component-dependencies.json")
    logger.info(f"Repository: {clean_conf['host']} | Output: {output_path} ({clean_conf['format']})")

    # 4. Crawl
    crawler = ComponentGraphCrawler(
        ContentClient.from_config(clean_conf),
        RepositoryLocator.from_config(clean_conf),
    )
    try:
        graph = crawler.crawl(args.component_path, CrawlOptions.from_config(clean_conf))
    except ComponentIdentityError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.warning("Crawl interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.critical(f"Crawl failed: {e}", exc_info=True)
        print(f"ERROR: Crawl failed: {e}", file=sys.stderr)
        return 1

    # 5. Artifact
    payload = _render_payload(graph, clean_conf["format"])
    try:
        written = write_json_artifact(output_path, payload)
    except OSError as e:
        logger.error(f"Cannot write artifact: {e}")
        print(f"ERROR: Cannot write artifact: {e}", file=sys.stderr)
        return 1

    _print_human_summary(graph, written)
    return 0

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _render_payload(graph: DependencyGraph, fmt: str) -> Dict[str, Any]:
    if fmt == "react":
        return build_migration_report(graph)
    return graph.to_dict()


def _print_human_summary(graph: DependencyGraph, output_path: str) -> None:
    expanded = len(graph.expanded_graphs())
    print(f"Component: {graph.root.identifier}")
    print(f"  Template: {graph.root.template.path if graph.root.template else 'not found'}")
    print(f"  Clientlibs: {len(graph.bundles)}")
    print(f"  Sling Models: {len(graph.models)}")
    print(f"  Child components: {len(graph.children)} ({expanded} expanded)")
    print(f"  Inheritance depth: {len(graph.inheritance)}")
    print(f"Result saved to: {output_path}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
