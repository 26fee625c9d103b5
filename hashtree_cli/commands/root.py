"""
CLI Root Command

Build a tree over the given items and print its root.

Usage:
    hashtree root hello world this [--files] [--raw] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass
from typing import Any

from hashtree.merkle import MerkleTree, build
from hashtree_cli.inputs import read_blobs, wants_json


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0


@dataclass
class RootSummary:
    """Summary of a built tree for CLI output."""
    leaf_count: int = 0
    depth: int = 0
    root_form: str = "display"
    root: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize(tree: MerkleTree, root_form: str) -> RootSummary:
    root = tree.raw_root_hash() if root_form == "raw" else tree.root_hash()
    return RootSummary(
        leaf_count=len(tree),
        depth=tree.depth,
        root_form=root_form,
        root=root,
    )


def print_summary_human(summary: RootSummary) -> None:
    """Print summary in human-readable format."""
    print(f"leaves: {summary.leaf_count}")
    print(f"depth: {summary.depth}")
    print(f"root ({summary.root_form}): {summary.root or '(empty tree)'}")


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config
    blobs = read_blobs(args.items, args.files, config.encoding)
    tree = build(blobs)

    root_form = "raw" if args.raw else config.root_form
    summary = summarize(tree, root_form)
    logger.info(f"Built tree over {summary.leaf_count} items")

    if wants_json(args, config):
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS
