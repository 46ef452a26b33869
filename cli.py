#!/usr/bin/env python3
"""
AMD Trace CLI

A tool for tracing the dependency graph of an AMD (RequireJS) application
from its entry module and printing it in various formats.
"""

import argparse
import logging
import sys
from pathlib import Path

from amdtrace.config import RequireConfig, load_require_config
from amdtrace.errors import AMDTraceError
from amdtrace.resolver import create_require_resolver
from amdtrace.tracer import trace
from exporters import to_mermaid, to_ascii, to_json


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="amdtrace",
        description="Trace the dependency graph of AMD modules from an entry module.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  amdtrace app/main                          # Trace from app/main.js in the current directory
  amdtrace app/main -b static/js -f mermaid  # Mermaid output, modules under static/js
  amdtrace app/main -c require-config.json   # Apply paths/map/packages config
  amdtrace app/main -f json -o graph.json    # JSON output to file
  amdtrace app/main -v                       # Log every traced module
        """,
    )
    
    # Positional arguments
    parser.add_argument(
        "entry",
        help="Entry module id (e.g. app/main)",
    )
    
    parser.add_argument(
        "-b", "--base-dir",
        type=str,
        default=".",
        help="Directory module paths are relative to (default: current directory)",
    )
    
    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="RequireJS loader configuration file (JSON or YAML)",
    )
    
    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )
    
    parser.add_argument(
        "-f", "--format",
        choices=["ascii", "mermaid", "json"],
        default="ascii",
        help="Output format (default: ascii)",
    )
    
    # Mermaid-specific options
    parser.add_argument(
        "--orientation",
        choices=["LR", "TD", "TB", "RL", "BT"],
        default="LR",
        help="Mermaid flowchart orientation (default: LR)",
    )
    
    parser.add_argument(
        "--group-by-prefix",
        action="store_true",
        help="Group modules by the first segment of their id in Mermaid output",
    )
    
    # ASCII-specific options
    parser.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="ASCII output style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )
    
    # Logging options
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log each module as it is traced",
    )
    verbosity.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log errors",
    )
    
    return parser.parse_args(args)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging to stderr."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(name)-24s  %(levelname)-7s  %(message)s",
        stream=sys.stderr,
    )


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    setup_logging(parsed.verbose, parsed.quiet)
    
    base_dir = Path(parsed.base_dir).resolve()
    if not base_dir.is_dir():
        print(f"Error: '{parsed.base_dir}' is not a directory", file=sys.stderr)
        return 1
    
    # Trace the graph
    try:
        if parsed.config:
            config = load_require_config(Path(parsed.config))
        else:
            config = RequireConfig()
        entry = create_require_resolver(config)(parsed.entry)
        graph = trace(parsed.entry, config, base_dir)
    except (AMDTraceError, ValueError) as e:
        print(f"Error tracing dependencies: {e}", file=sys.stderr)
        return 1
    
    # Generate output
    if parsed.format == "mermaid":
        output = to_mermaid(
            graph=graph,
            orientation=parsed.orientation,
            group_by_prefix=parsed.group_by_prefix,
        )
    elif parsed.format == "json":
        output = to_json(graph=graph, entry=entry)
    else:  # ascii (default)
        output = to_ascii(graph=graph, entry=entry, style=parsed.ascii_style)
    
    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output, encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
