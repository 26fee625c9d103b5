"""
Hashing Utilities
Digest primitives shared by tree construction and proof verification.

This module provides:
- SHA-256 hashing for raw bytes
- Leaf, internal-node and root display hashing
- Hex encoding/decoding with 0x prefix

Digest Rules:
1. Leaf hashing: leaf = sha256(data)
2. Internal hashing: parent = sha256(left + right), order preserved
3. Root display: display = sha256(root), applied once over the root node digest

Every digest handed out by the leaf/internal/display helpers is checked
against DIGEST_SIZE. A mismatch means the primitive has been misconfigured
and raises DigestConfigurationException immediately.
"""
from __future__ import annotations

import hashlib

from hashtree.schemas.errors import DigestConfigurationException


# Output size of the digest function, in bytes
DIGEST_SIZE: int = 32


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def _checked(digest: bytes, stage: str) -> bytes:
    if len(digest) != DIGEST_SIZE:
        raise DigestConfigurationException(
            f"{stage} digest is {len(digest)} bytes, expected {DIGEST_SIZE}",
            expected=DIGEST_SIZE,
            actual=len(digest),
        )
    return digest


def leaf_hash(data: bytes) -> bytes:
    """
    Hash a leaf's raw bytes.

    Args:
        data: Raw leaf bytes

    Returns:
        32-byte leaf digest

    Raises:
        DigestConfigurationException: If the digest has the wrong size
    """
    return _checked(sha256(data), "leaf")


def internal_hash(left: bytes, right: bytes) -> bytes:
    """
    Compute the digest of an internal node from its two children.

    Parent hash is sha256(left + right). Swapping the arguments gives a
    different digest.

    Args:
        left: Left child digest
        right: Right child digest

    Returns:
        32-byte parent digest
    """
    return _checked(sha256(left + right), "internal")


def root_display_hash(root_digest: bytes) -> bytes:
    """
    Wrap a root node digest into its externally reported form.

    The displayed root of a tree is not the root node digest itself but
    sha256(root_digest).

    Args:
        root_digest: Raw digest of the root node

    Returns:
        32-byte display digest
    """
    return _checked(sha256(root_digest), "root display")


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "DIGEST_SIZE",
    "sha256",
    "leaf_hash",
    "internal_hash",
    "root_display_hash",
    "to_hex",
    "from_hex",
]
