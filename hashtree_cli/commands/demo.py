"""
CLI Demo Command

Build a tree over a fixed set of words, print its root and run one
proof round trip for the first leaf.

Usage:
    hashtree demo [--json]
"""

from __future__ import annotations

import json
from argparse import Namespace

from hashtree.merkle import build, verify_proof
from hashtree_cli.inputs import wants_json


# Exit codes
EXIT_SUCCESS = 0


DEMO_WORDS = ["hello", "world", "this", "is", "merkle", "tree"]


def demo_cmd(args: Namespace) -> int:
    """
    Execute the demo command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (always success)
    """
    blobs = [word.encode("utf-8") for word in DEMO_WORDS]
    tree = build(blobs)

    proof = tree.generate_proof(0)
    verified = verify_proof(tree.root, proof, blobs[0], 0) if proof is not None else False

    if wants_json(args, args.cli_config):
        print(json.dumps({
            "root_hash": tree.root_hash(),
            "proof": [s.hex() for s in proof] if proof is not None else None,
            "verified": verified,
        }, indent=2))
        return EXIT_SUCCESS

    print(f"Root hash: {tree.root_hash()}")
    if proof is None:
        print("Could not generate proof")
    else:
        print(f"Proof for first leaf: {[s.hex() for s in proof]}")
        print(f"Verification result: {verified}")

    return EXIT_SUCCESS
