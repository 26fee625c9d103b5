"""
Merkle Tree and Proofs
Binary hash tree construction + proof generation/verification.

This module provides:
- MerkleTree / build: Build a tree over ordered byte blobs
- generate_proof: Sibling path for a leaf index
- verify_proof: Verify a path against the raw root digest
- verify_display_proof: Verify a path against the display-form root
- InclusionProof: JSON-serializable proof document

Commitment Rules:
1. Leaf hashing: sha256(blob)
2. Parent hashing: sha256(left + right)
3. Padding: Pair the last node with itself if odd number at any level
4. Empty tree: no root
5. Single leaf: root = leaf
6. Displayed root: sha256(root)

Usage:
    from hashtree.merkle import build, verify_proof

    tree = build([b"hello", b"world", b"this"])
    print(tree.root_hash())

    proof = tree.generate_proof(2)
    assert verify_proof(tree.root, proof, b"this", 2)
"""
from .merkle_tree import (
    MerkleNode,
    MerkleTree,
    build,
)

from .merkle_proofs import (
    InclusionProof,
    MerkleProver,
    MerkleVerifier,
    compute_root,
    generate_proof,
    verify_display_proof,
    verify_inclusion_proof,
    verify_proof,
)


__all__ = [
    # Core types
    "MerkleNode",
    "MerkleTree",
    "InclusionProof",
    # Core functions
    "build",
    "generate_proof",
    "compute_root",
    "verify_proof",
    "verify_display_proof",
    "verify_inclusion_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
