"""
CLI Prove Command

Build a tree over the given items and emit the inclusion proof document
for one of them.

Usage:
    hashtree prove hello world this --index 2 [--files] [--out proof.json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from hashtree.merkle import InclusionProof, build
from hashtree_cli.inputs import read_blobs


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config
    blobs = read_blobs(args.items, args.files, config.encoding)
    tree = build(blobs)

    proof = InclusionProof.from_tree(tree, args.index)
    if proof is None:
        print(
            f"Error: index {args.index} out of range for {len(tree)} items",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    document = proof.to_json()
    if args.out:
        out_path = Path(args.out)
        out_path.write_text(document + "\n")
        logger.info(f"Wrote proof for index {args.index} to {out_path}")
    else:
        print(document)

    return EXIT_SUCCESS
