"""
Core cryptographic utilities.

Provides the fixed SHA-256 digest primitive used by the tree and proofs.
"""
from .hashing import (
    DIGEST_SIZE,
    sha256,
    leaf_hash,
    internal_hash,
    root_display_hash,
    to_hex,
    from_hex,
)

__all__ = [
    "DIGEST_SIZE",
    "sha256",
    "leaf_hash",
    "internal_hash",
    "root_display_hash",
    "to_hex",
    "from_hex",
]
