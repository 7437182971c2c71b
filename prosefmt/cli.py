"""
Command-line interface for prosefmt.

Provides commands for checking files for formatting issues, fixing
them in place, creating a configuration file and listing rules.
"""

import argparse
import logging
import os
import sys
import time
from typing import List, Optional

from prosefmt import __version__
from prosefmt.config import (
    ProsefmtConfig, create_default_config, load_prosefmt_config
)
from prosefmt.core.engine import create_engine
from prosefmt.errors import ProsefmtError
from prosefmt.formatters import get_formatter
from prosefmt.remediation import Fixer
from prosefmt.utils.logging import setup_logging


logger = logging.getLogger(__name__)

DESCRIPTION = "The simplest text formatter for making your files look correct."


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "paths",
        nargs="+",
        metavar="PATH",
        help="Files or directories to process",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
    )
    parser.add_argument(
        "-j", "--jobs",
        type=int,
        help="Number of parallel workers (default: 4)",
    )
    parser.add_argument(
        "--color",
        action="store_true",
        default=None,
        help="Colorize output when writing to a terminal",
    )

    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--silent",
        dest="verbosity",
        action="store_const",
        const="silent",
        help="No standard output printed",
    )
    output.add_argument(
        "--compact",
        dest="verbosity",
        action="store_const",
        const="compact",
        help="Show formatted or errored files (default)",
    )
    output.add_argument(
        "--verbose",
        dest="verbosity",
        action="store_const",
        const="verbose",
        help="Print debug output (steps, scanner, rules, timing) to stderr",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="prosefmt",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  prosefmt check .                      # Report issues, exit 1 if any
  prosefmt check docs --format json     # Output as JSON
  prosefmt write .                      # Fix files in place
  prosefmt write README.md --dry-run    # Show fixes without applying
  prosefmt init                         # Create config file
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Check command
    check_parser = subparsers.add_parser("check", help="Check files and report issues")
    _add_common_arguments(check_parser)
    check_parser.add_argument(
        "-f", "--format",
        choices=["compact", "json", "sarif"],
        help="Output format (default: compact)",
    )
    check_parser.add_argument(
        "-o", "--output",
        help="Output file (default: stdout)",
    )

    # Write command
    write_parser = subparsers.add_parser("write", help="Write fixes in place")
    _add_common_arguments(write_parser)
    write_parser.add_argument(
        "-f", "--format",
        choices=["compact", "json"],
        help="Output format (default: compact)",
    )
    write_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show fixes as diffs without writing them",
    )

    # Init command
    init_parser = subparsers.add_parser("init", help="Create a configuration file")
    init_parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="Overwrite existing config file",
    )

    subparsers.add_parser("list-rules", help="List available rules")
    subparsers.add_parser("version", help="Print the version number")

    return parser


def _load_config(args: argparse.Namespace) -> ProsefmtConfig:
    """Load configuration and apply command-line overrides."""
    start_dir = args.paths[0] if args.paths else "."
    config = load_prosefmt_config(args.config, start_dir=start_dir)

    if args.jobs is not None:
        config.max_workers = max(1, args.jobs)
    if getattr(args, "format", None):
        config.output.format = args.format
    if args.verbosity:
        config.output.verbosity = args.verbosity
    if args.color:
        config.output.color = True

    return config


def _emit(text: str, output_file: Optional[str] = None) -> None:
    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(text)
    else:
        sys.stdout.write(text)
        sys.stdout.flush()


def cmd_check(args: argparse.Namespace) -> int:
    """Execute the check command."""
    start = time.time()
    config = _load_config(args)
    setup_logging(config.output.verbosity)
    logger.debug("Configuration: check=True paths=%s", args.paths)

    engine = create_engine(config)
    result = engine.check(args.paths)

    output_file = args.output or config.output.output_file
    if config.output.verbosity != "silent" or output_file:
        formatter = get_formatter(config.output.format, rules=engine.rules, use_color=config.output.color)
        _emit(formatter.format_result(result), output_file)

    logger.debug("Completed in %dms", round((time.time() - start) * 1000))

    # Return exit code based on issues
    return 1 if result.has_issues else 0


def cmd_write(args: argparse.Namespace) -> int:
    """Execute the write command."""
    start = time.time()
    config = _load_config(args)
    setup_logging(config.output.verbosity)
    logger.debug("Configuration: check=False dry_run=%s paths=%s", args.dry_run, args.paths)

    if config.output.format == "sarif":
        config.output.format = "compact"

    engine = create_engine(config)
    fixer = Fixer(engine, max_iterations=config.max_fix_iterations)
    result = fixer.write(args.paths, dry_run=args.dry_run)

    if config.output.verbosity != "silent":
        formatter = get_formatter(config.output.format, rules=engine.rules, use_color=config.output.color)
        _emit(formatter.format_write(result))

    logger.debug("Completed in %dms", round((time.time() - start) * 1000))

    # Issues that were fixed are not a failure
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    """Execute the init command."""
    config_file = ".prosefmt.yaml"

    if os.path.exists(config_file) and not args.force:
        print(f"Configuration file {config_file} already exists.")
        print("Use --force to overwrite.")
        return 1

    content = create_default_config()

    with open(config_file, "w", encoding="utf-8") as f:
        f.write(content)

    print(f"Created configuration file: {config_file}")
    return 0


def cmd_list_rules(args: argparse.Namespace) -> int:
    """Execute the list-rules command."""
    from prosefmt.rules import default_rule_set

    rules = default_rule_set()

    print("Available Rules")
    print("=" * 70)
    for rule in rules:
        meta = rule.metadata
        print(f"  {meta.rule_id:<8} {meta.name:<22} {meta.description}")
    print(f"\nTotal: {len(rules)} rules")

    return 0


def cmd_version(args: argparse.Namespace) -> int:
    """Execute the version command."""
    print(__version__)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help(sys.stderr)
        return 0

    commands = {
        "check": cmd_check,
        "write": cmd_write,
        "init": cmd_init,
        "list-rules": cmd_list_rules,
        "version": cmd_version,
    }

    try:
        return commands[args.command](args)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except ProsefmtError as e:
        print(f"Error: {e}", file=sys.stderr)
        if os.environ.get("DEBUG"):
            raise
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if os.environ.get("DEBUG"):
            raise
        return 1


if __name__ == "__main__":
    sys.exit(main())
