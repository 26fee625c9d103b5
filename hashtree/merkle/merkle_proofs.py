"""
Merkle Proofs
Proof generation over a built tree and tree-free proof verification.

This module provides:
- generate_proof: Sibling path for a leaf index, leaf level first
- verify_proof: Check a path against the raw root digest
- verify_display_proof: Check a path against the display-form root
- InclusionProof: Serializable proof document (JSON, 0x-hex digests)
- MerkleProver / MerkleVerifier: Class-based convenience wrappers

Verification Algorithm:
1. Start with leaf_hash(leaf)
2. For each sibling (bottom-up):
   - If current index is even: hash = internal_hash(hash, sibling)
   - If current index is odd: hash = internal_hash(sibling, hash)
   - Move up: index = index // 2
3. Compare with the claimed root byte-for-byte

Verification never raises on malformed input; anything that cannot be
checked is reported as False.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from hashtree.crypto.hashing import (
    DIGEST_SIZE,
    from_hex,
    internal_hash,
    leaf_hash,
    root_display_hash,
    to_hex,
)
from hashtree.schemas.errors import MerkleVerificationException, ProofFormatException

if TYPE_CHECKING:
    from hashtree.merkle.merkle_tree import MerkleTree


logger = logging.getLogger(__name__)

_BYTES_LIKE = (bytes, bytearray, memoryview)


# =============================================================================
# Generation
# =============================================================================

def generate_proof(tree: "MerkleTree", index: int) -> Optional[list[bytes]]:
    """
    Generate the sibling path for the leaf at the given index.

    Descends from the root keeping track of the left-most leaf index of the
    current subtree. The left child of a node at depth d + 1 always covers
    2**d leaves, so the target lies on the left iff
    index < current_index + 2**depth(left).

    Args:
        tree: A built MerkleTree
        index: 0-based leaf index in original blob order

    Returns:
        Sibling digests ordered from the leaf's immediate sibling up to the
        level just below the root ([] for a single-leaf tree), or None if the
        tree is empty or the index is out of range
    """
    root = tree.root_handle
    if root is None or index < 0 or index >= len(tree):
        logger.debug(f"No proof for index {index} in tree of {len(tree)} leaves")
        return None

    siblings: list[bytes] = []
    _collect_siblings(tree, root, index, 0, siblings)

    # Collected root level first
    siblings.reverse()
    logger.debug(f"Generated proof for index {index}: {len(siblings)} siblings")
    return siblings


def _collect_siblings(
    tree: "MerkleTree",
    handle: int,
    index: int,
    current_index: int,
    siblings: list[bytes],
) -> None:
    node = tree.node(handle)
    if node.is_leaf:
        return

    left = tree.node(node.left)
    right = tree.node(node.right)
    leaves_in_left = 2 ** left.depth

    if index < current_index + leaves_in_left:
        siblings.append(right.hash)
        _collect_siblings(tree, node.left, index, current_index, siblings)
    else:
        siblings.append(left.hash)
        _collect_siblings(
            tree, node.right, index, current_index + leaves_in_left, siblings
        )


# =============================================================================
# Verification
# =============================================================================

def _is_digest(value: Any) -> bool:
    return isinstance(value, _BYTES_LIKE) and len(value) == DIGEST_SIZE


def compute_root(proof: Sequence[bytes], leaf: bytes, index: int) -> Optional[bytes]:
    """
    Recompute the raw root implied by a proof.

    Returns:
        The chained-up root digest, or None if the inputs are malformed
    """
    if index < 0 or not isinstance(leaf, _BYTES_LIKE):
        return None

    current_hash = leaf_hash(leaf)
    current_index = index

    for sibling in proof:
        if not _is_digest(sibling):
            return None
        if current_index % 2 == 0:
            # Current node is left child
            current_hash = internal_hash(current_hash, bytes(sibling))
        else:
            # Current node is right child
            current_hash = internal_hash(bytes(sibling), current_hash)
        current_index = current_index // 2

    return current_hash


def verify_proof(
    root_digest: bytes,
    proof: Sequence[bytes],
    leaf: bytes,
    index: int,
) -> bool:
    """
    Verify a proof against a raw root digest.

    Args:
        root_digest: Raw root node digest (MerkleTree.root), not the display form
        proof: Sibling digests, leaf level first
        leaf: The original leaf bytes
        index: The leaf's original 0-based index

    Returns:
        True if the proof chains up to root_digest, False otherwise
    """
    if not _is_digest(root_digest):
        return False
    computed = compute_root(proof, leaf, index)
    return computed is not None and computed == bytes(root_digest)


def verify_display_proof(
    display_root: str | bytes,
    proof: Sequence[bytes],
    leaf: bytes,
    index: int,
) -> bool:
    """
    Verify a proof against the display-form root (MerkleTree.root_hash()).

    The recomputed raw root is wrapped with root_display_hash before the
    comparison.

    Args:
        display_root: Display root as hex (with or without 0x) or raw bytes
        proof: Sibling digests, leaf level first
        leaf: The original leaf bytes
        index: The leaf's original 0-based index

    Returns:
        True if the proof matches the display root, False otherwise
    """
    if isinstance(display_root, str):
        hex_string = display_root if display_root.startswith("0x") else "0x" + display_root
        try:
            display_root = from_hex(hex_string.lower())
        except ValueError:
            return False

    if not _is_digest(display_root):
        return False
    computed = compute_root(proof, leaf, index)
    return computed is not None and root_display_hash(computed) == bytes(display_root)


# =============================================================================
# Serializable Proof Document
# =============================================================================

class InclusionProof(BaseModel):
    """
    A self-contained inclusion proof for one leaf.

    Digests are 0x-prefixed hex strings so the document round-trips through
    JSON. The root is the raw root digest.

    Attributes:
        leaf_index: 0-based index of the proven leaf
        leaf_count: Number of leaves in the tree the proof was taken from
        siblings: Sibling digests, leaf level first
        root: Raw root digest
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    leaf_index: int = Field(..., ge=0, description="0-based index of the proven leaf")
    leaf_count: int = Field(..., ge=1, description="Number of leaves in the tree")
    siblings: list[str] = Field(
        default_factory=list,
        description="Sibling digests (0x-hex), leaf level first",
    )
    root: str = Field(..., description="Raw root digest (0x-hex)")

    @field_validator("siblings")
    @classmethod
    def check_siblings(cls, value: list[str]) -> list[str]:
        for i, digest in enumerate(value):
            _check_hex_digest(digest, f"siblings[{i}]")
        return value

    @field_validator("root")
    @classmethod
    def check_root(cls, value: str) -> str:
        _check_hex_digest(value, "root")
        return value

    @model_validator(mode="after")
    def check_index_in_range(self) -> "InclusionProof":
        if self.leaf_index >= self.leaf_count:
            raise ValueError(
                f"leaf_index {self.leaf_index} out of range for {self.leaf_count} leaves"
            )
        return self

    @classmethod
    def from_tree(cls, tree: "MerkleTree", index: int) -> Optional["InclusionProof"]:
        """Build a proof document for a leaf, or None if no proof exists."""
        siblings = tree.generate_proof(index)
        if siblings is None:
            return None
        return cls(
            leaf_index=index,
            leaf_count=len(tree),
            siblings=[to_hex(s) for s in siblings],
            root=to_hex(tree.root),
        )

    @classmethod
    def from_json(cls, data: str | bytes) -> "InclusionProof":
        """
        Parse a proof document from JSON.

        Raises:
            ProofFormatException: If the document is malformed
        """
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise ProofFormatException(
                f"Invalid proof document: {e.error_count()} error(s)",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent)

    @property
    def sibling_digests(self) -> list[bytes]:
        return [from_hex(s) for s in self.siblings]

    @property
    def root_digest(self) -> bytes:
        return from_hex(self.root)

    @property
    def display_root(self) -> str:
        """Display-form root hex, as MerkleTree.root_hash() reports it."""
        return root_display_hash(self.root_digest).hex()


def _check_hex_digest(value: str, field_name: str) -> None:
    digest = from_hex(value)
    if len(digest) != DIGEST_SIZE:
        raise ValueError(
            f"{field_name} must be a {DIGEST_SIZE}-byte digest, got {len(digest)} bytes"
        )


def verify_inclusion_proof(proof: InclusionProof, leaf: bytes) -> bool:
    """Verify a proof document against the leaf bytes it claims to include."""
    return verify_proof(proof.root_digest, proof.sibling_digests, leaf, proof.leaf_index)


# =============================================================================
# Convenience Wrappers
# =============================================================================

class MerkleProver:
    """
    Convenience class for generating proofs straight from blobs.

    Example:
        >>> proof = MerkleProver.prove([b"a", b"b", b"c"], index=1)
        >>> proof.leaf_index
        1
    """

    @staticmethod
    def prove(blobs: Sequence[bytes], index: int) -> Optional[InclusionProof]:
        """
        Build a tree over blobs and return the proof document for one leaf.

        Returns:
            InclusionProof, or None if index is out of range or blobs is empty
        """
        from hashtree.merkle.merkle_tree import MerkleTree

        return InclusionProof.from_tree(MerkleTree(blobs), index)

    @staticmethod
    def compute_root(blobs: Sequence[bytes]) -> Optional[bytes]:
        """Raw root digest for a sequence of blobs."""
        from hashtree.merkle.merkle_tree import MerkleTree

        return MerkleTree(blobs).root


class MerkleVerifier:
    """
    Convenience class for verifying proofs.

    Example:
        >>> proof = MerkleProver.prove(blobs, index=1)
        >>> MerkleVerifier.verify(proof, blobs[1])
        True
    """

    @staticmethod
    def verify(proof: InclusionProof, leaf: bytes) -> bool:
        return verify_inclusion_proof(proof, leaf)

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        index: int,
        siblings: list[bytes],
        root: bytes,
    ) -> bool:
        """
        Verify a leaf is included in a raw root using raw components.

        Args:
            leaf: The original leaf bytes
            index: The claimed index of the leaf
            siblings: List of sibling digests (bottom-up)
            root: The claimed raw root digest

        Returns:
            True if the proof is valid, False otherwise
        """
        return verify_proof(root, siblings, leaf, index)

    @staticmethod
    def require_valid(proof: InclusionProof, leaf: bytes) -> None:
        """
        Verify a proof document, raising instead of returning False.

        Raises:
            MerkleVerificationException: If the proof does not verify
        """
        if not verify_inclusion_proof(proof, leaf):
            raise MerkleVerificationException(
                "Proof does not chain up to the claimed root",
                leaf_index=proof.leaf_index,
                details={"root": proof.root},
            )


__all__ = [
    "generate_proof",
    "compute_root",
    "verify_proof",
    "verify_display_proof",
    "InclusionProof",
    "verify_inclusion_proof",
    "MerkleProver",
    "MerkleVerifier",
]
