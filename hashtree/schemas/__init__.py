"""
Schemas
File: __init__.py

Purpose: Export the error taxonomy shared by the tree, proofs and CLI.
"""

from .errors import (
    ConfigurationException,
    DigestConfigurationException,
    ErrorCodes,
    HashtreeError,
    HashtreeException,
    InvalidLeafDataException,
    MerkleVerificationException,
    ProofFormatException,
)

__all__ = [
    "ConfigurationException",
    "DigestConfigurationException",
    "ErrorCodes",
    "HashtreeError",
    "HashtreeException",
    "InvalidLeafDataException",
    "MerkleVerificationException",
    "ProofFormatException",
]
