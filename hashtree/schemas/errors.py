"""
Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for hashtree.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Absent results are not errors: an out-of-range proof request or an empty
tree yields None, and a failed verification yields False. Exceptions are
reserved for misconfiguration and malformed external input.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Digest & Input Errors
    DIGEST_SIZE_MISMATCH = "DIGEST_SIZE_MISMATCH"
    INVALID_LEAF_DATA = "INVALID_LEAF_DATA"

    # Proof Errors
    PROOF_FORMAT_INVALID = "PROOF_FORMAT_INVALID"
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"

    # Configuration Errors
    CONFIG_INVALID = "CONFIG_INVALID"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class HashtreeError(BaseModel):
    """
    Base error model for structured error reporting.

    Used when an error has to be serialized (e.g. the CLI's JSON output)
    rather than raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.PROOF_FORMAT_INVALID],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "HashtreeException":
        """Convert this error model to a raised exception."""
        return HashtreeException(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class HashtreeException(Exception):
    """
    Base exception for all hashtree errors.

    Carries structured error information and can be converted to a
    HashtreeError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "HASHTREE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> HashtreeError:
        """Convert this exception to a HashtreeError model."""
        return HashtreeError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class DigestConfigurationException(HashtreeException):
    """Exception raised when the digest primitive produces the wrong size."""

    def __init__(
        self,
        message: str,
        expected: int | None = None,
        actual: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if expected is not None:
            full_details["expected"] = expected
        if actual is not None:
            full_details["actual"] = actual
        super().__init__(
            message=message,
            code=ErrorCodes.DIGEST_SIZE_MISMATCH,
            details=full_details,
        )


class InvalidLeafDataException(HashtreeException, TypeError):
    """Exception raised when a blob handed to the tree is not bytes-like."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_LEAF_DATA,
            details=full_details,
        )


class ProofFormatException(HashtreeException):
    """Exception raised when a serialized proof document cannot be parsed."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_FORMAT_INVALID,
            details=details,
        )


class MerkleVerificationException(HashtreeException):
    """Exception raised when Merkle proof verification fails."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=full_details,
        )


class ConfigurationException(HashtreeException):
    """Exception raised when configuration values are invalid."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_INVALID,
            details=full_details,
        )
