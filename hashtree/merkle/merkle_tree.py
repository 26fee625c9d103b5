"""
Merkle Tree Implementation
Deterministic binary hash tree over an ordered list of byte blobs.

This module provides:
- MerkleNode: Immutable node stored in the tree's arena
- MerkleTree: Tree built bottom-up from blobs, with root accessors
- build: Functional constructor

Construction Rules (Hard Contracts):
1. Leaf hashing: leaf = sha256(blob)
2. Parent hashing: parent = sha256(left + right)
3. Odd levels: the last node is paired with itself (right handle == left handle)
4. Empty input: no root
5. Single blob: root = leaf, no internal hashing

Root Forms:
- Raw root: digest of the root node (MerkleTree.root, raw_root_hash()).
  This is the form verify_proof() checks against.
- Display root: sha256(raw root), hex-encoded (root_hash()).

Nodes live in a flat list and refer to their children by integer handle.
Depth and leaf count are cached per node so proof generation never walks
a subtree to measure it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from hashtree.crypto.hashing import internal_hash, leaf_hash, root_display_hash
from hashtree.schemas.errors import InvalidLeafDataException


logger = logging.getLogger(__name__)

_BYTES_LIKE = (bytes, bytearray, memoryview)


@dataclass(frozen=True)
class MerkleNode:
    """
    A node in the tree's arena.

    Attributes:
        hash: The node's digest
        left: Handle of the left child, None for leaves
        right: Handle of the right child, None for leaves.
               Equal to left when an odd node was paired with itself.
        depth: 0 for leaves, 1 + max(child depths) otherwise
        leaf_count: Number of distinct original leaves under this node
    """
    hash: bytes
    left: Optional[int] = None
    right: Optional[int] = None
    depth: int = 0
    leaf_count: int = 1

    def __post_init__(self) -> None:
        if (self.left is None) != (self.right is None):
            raise ValueError("A node has either zero or two children")

    @property
    def is_leaf(self) -> bool:
        return self.left is None

    @property
    def is_self_paired(self) -> bool:
        """True when both children are the same node."""
        return self.left is not None and self.left == self.right


class MerkleTree:
    """
    Binary hash tree built once from an ordered sequence of blobs.

    The tree is immutable after construction. Leaf order is the order of
    the input and defines the indices used for proofs.

    Example:
        >>> from hashtree.merkle import verify_proof
        >>> tree = MerkleTree([b"a", b"b", b"c"])
        >>> len(tree)
        3
        >>> proof = tree.generate_proof(2)
        >>> verify_proof(tree.root, proof, b"c", 2)
        True
    """

    def __init__(self, blobs: Iterable[bytes]) -> None:
        self._nodes: list[MerkleNode] = []

        level: list[int] = []
        for i, blob in enumerate(blobs):
            if not isinstance(blob, _BYTES_LIKE):
                raise InvalidLeafDataException(
                    f"Leaf {i} must be bytes-like, got {type(blob).__name__}",
                    leaf_index=i,
                )
            level.append(self._add(MerkleNode(hash=leaf_hash(blob))))

        self._leaf_count = len(level)

        while len(level) > 1:
            next_level: list[int] = []
            for i in range(0, len(level), 2):
                left = level[i]
                # Odd level: last node pairs with itself
                right = level[i + 1] if i + 1 < len(level) else left
                next_level.append(self._add_internal(left, right))
            level = next_level

        self._root: Optional[int] = level[0] if level else None

        if self._root is None:
            logger.debug("Built empty Merkle tree")
        else:
            logger.debug(
                f"Built Merkle tree: {self._leaf_count} leaves, "
                f"{len(self._nodes)} nodes, depth {self.depth}"
            )

    def _add(self, node: MerkleNode) -> int:
        self._nodes.append(node)
        return len(self._nodes) - 1

    def _add_internal(self, left: int, right: int) -> int:
        left_node = self._nodes[left]
        right_node = self._nodes[right]
        if left == right:
            leaf_count = left_node.leaf_count
        else:
            leaf_count = left_node.leaf_count + right_node.leaf_count
        return self._add(
            MerkleNode(
                hash=internal_hash(left_node.hash, right_node.hash),
                left=left,
                right=right,
                depth=1 + max(left_node.depth, right_node.depth),
                leaf_count=leaf_count,
            )
        )

    def __len__(self) -> int:
        return self._leaf_count

    def __repr__(self) -> str:
        return f"MerkleTree(leaves={self._leaf_count}, root={self.root_hash()!r})"

    @property
    def is_empty(self) -> bool:
        return self._root is None

    @property
    def root_handle(self) -> Optional[int]:
        """Arena handle of the root node, None for an empty tree."""
        return self._root

    def node(self, handle: int) -> MerkleNode:
        """Look up a node by its arena handle."""
        return self._nodes[handle]

    @property
    def depth(self) -> int:
        """Number of levels above the leaves (0 for a single leaf or empty tree)."""
        if self._root is None:
            return 0
        return self._nodes[self._root].depth

    @property
    def root(self) -> Optional[bytes]:
        """Raw root node digest, or None for an empty tree."""
        if self._root is None:
            return None
        return self._nodes[self._root].hash

    def raw_root_hash(self) -> Optional[str]:
        """Raw root node digest as lowercase hex."""
        root = self.root
        return root.hex() if root is not None else None

    def root_hash(self) -> Optional[str]:
        """
        Display-form root hash.

        Returns:
            sha256(raw root) as 64 lowercase hex characters, or None for
            an empty tree
        """
        root = self.root
        if root is None:
            return None
        return root_display_hash(root).hex()

    def generate_proof(self, index: int) -> Optional[list[bytes]]:
        """
        Generate the sibling path for the leaf at the given index.

        See hashtree.merkle.merkle_proofs.generate_proof.
        """
        from hashtree.merkle.merkle_proofs import generate_proof

        return generate_proof(self, index)


def build(blobs: Iterable[bytes]) -> MerkleTree:
    """
    Build a Merkle tree from an ordered sequence of blobs.

    Args:
        blobs: Byte blobs; order is preserved and defines leaf indices

    Returns:
        The built tree (empty if blobs is empty)

    Raises:
        InvalidLeafDataException: If a blob is not bytes-like
    """
    return MerkleTree(blobs)


__all__ = [
    "MerkleNode",
    "MerkleTree",
    "build",
]
