"""
CLI Verify Command

Verify an inclusion proof document against a leaf, without the tree.

Usage:
    hashtree verify proof.json this [--file] [--display-root HEX] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from hashtree.merkle import InclusionProof, verify_display_proof, verify_inclusion_proof
from hashtree.schemas.errors import ProofFormatException
from hashtree_cli.inputs import read_blob, wants_json


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    leaf_index: int = 0
    root: str = ""
    proof_ok: bool = False
    display_root_ok: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.display_root_ok is None:
            del d["display_root_ok"]
        return d

    @property
    def all_ok(self) -> bool:
        """Check if all verifications passed."""
        if not self.proof_ok:
            return False
        if self.display_root_ok is not None and not self.display_root_ok:
            return False
        return True


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"proof: {summary.proof_path}")
    print(f"leaf_index: {summary.leaf_index}")
    print(f"root: {summary.root}")
    print(f"proof_ok: {str(summary.proof_ok).lower()}")
    if summary.display_root_ok is not None:
        print(f"display_root_ok: {str(summary.display_root_ok).lower()}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config
    proof_path = Path(args.proof_path)

    if not proof_path.exists():
        print(f"Error: Proof not found: {proof_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        proof = InclusionProof.from_json(proof_path.read_text())
    except ProofFormatException as e:
        print(f"Error loading proof: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    leaf = read_blob(args.leaf, args.file, config.encoding)

    summary = VerifySummary(
        proof_path=str(proof_path),
        leaf_index=proof.leaf_index,
        root=proof.root,
        proof_ok=verify_inclusion_proof(proof, leaf),
    )
    if args.display_root:
        summary.display_root_ok = verify_display_proof(
            args.display_root,
            proof.sibling_digests,
            leaf,
            proof.leaf_index,
        )

    if wants_json(args, config):
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if summary.all_ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    else:
        logger.warning("Verification failed")
        return EXIT_VERIFICATION_FAILED
