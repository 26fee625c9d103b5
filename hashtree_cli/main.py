"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m hashtree_cli root ITEM... [--files] [--raw] [--json]
    python -m hashtree_cli prove ITEM... --index N [--files] [--out PATH]
    python -m hashtree_cli verify PROOF LEAF [--file] [--display-root HEX] [--json]
    python -m hashtree_cli demo [--json]
    python -m hashtree_cli config --init|--show

Environment Variables:
    HASHTREE_LOG_LEVEL          Log level (default: INFO)
    HASHTREE_LOG_FILE           Also log to this file
    HASHTREE_OUTPUT_FORMAT      human or json (default: human)
    HASHTREE_ROOT_FORM          display or raw (default: display)
    HASHTREE_ENCODING           Encoding for string items (default: utf-8)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from hashtree_cli import __version__
from hashtree_cli.commands import demo, prove, root, verify
from hashtree_cli.config import (
    LOG_LEVELS,
    get_default_config_template,
    load_config,
)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _non_negative_int(value: str) -> int:
    index = int(value)
    if index < 0:
        raise argparse.ArgumentTypeError(f"index must be non-negative, got {index}")
    return index


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="hashtree",
        description="hashtree CLI - Build hash trees, emit and verify membership proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./hashtree.json or ~/.config/hashtree/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=list(LOG_LEVELS),
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the root hash of a list of items",
        description="Build a hash tree over the items, in order, and print its root.",
    )
    root_parser.add_argument(
        "items",
        nargs="*",
        help="Items to commit to (strings, or file paths with --files)",
    )
    root_parser.add_argument(
        "--files",
        action="store_true",
        default=False,
        help="Treat items as paths; each file's bytes form one leaf",
    )
    root_parser.add_argument(
        "--raw",
        action="store_true",
        default=False,
        help="Print the raw root node digest instead of the display form",
    )
    root_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Emit an inclusion proof for one item",
        description="Build a hash tree over the items and write the proof document for one of them.",
    )
    prove_parser.add_argument(
        "items",
        nargs="+",
        help="Items to commit to (strings, or file paths with --files)",
    )
    prove_parser.add_argument(
        "--index", "-i",
        type=_non_negative_int,
        required=True,
        help="0-based index of the item to prove",
    )
    prove_parser.add_argument(
        "--files",
        action="store_true",
        default=False,
        help="Treat items as paths; each file's bytes form one leaf",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof document here instead of stdout",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof document against a leaf",
        description="Check that the leaf is included under the proof's root. Exit code 2 if not.",
    )
    verify_parser.add_argument(
        "proof_path",
        type=str,
        help="Path to a proof document written by 'prove'",
    )
    verify_parser.add_argument(
        "leaf",
        type=str,
        help="The leaf (a string, or a file path with --file)",
    )
    verify_parser.add_argument(
        "--file",
        action="store_true",
        default=False,
        help="Treat the leaf as a path and use the file's bytes",
    )
    verify_parser.add_argument(
        "--display-root",
        type=str,
        default=None,
        help="Also check the proof against this display-form root hash",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- demo command ---
    demo_parser = subparsers.add_parser(
        "demo",
        help="Build a sample tree and run one proof round trip",
    )
    demo_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="JSON output",
    )
    demo_parser.set_defaults(func=demo.demo_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="hashtree.json",
        help="Path for config file (default: hashtree.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (HASHTREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: hashtree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
