"""
hashtree - binary hash tree commitments with compact membership proofs.
"""

from hashtree.merkle import (
    InclusionProof,
    MerkleTree,
    build,
    verify_display_proof,
    verify_inclusion_proof,
    verify_proof,
)

__version__ = "0.1.0"

__all__ = [
    "InclusionProof",
    "MerkleTree",
    "build",
    "verify_display_proof",
    "verify_inclusion_proof",
    "verify_proof",
]
