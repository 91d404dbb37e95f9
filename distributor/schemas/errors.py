"""
Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for tree building and claim verification.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Claim rejection kinds
    ALREADY_CLAIMED = "ALREADY_CLAIMED"
    INVALID_PROOF = "INVALID_PROOF"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    MALFORMED_INPUT = "MALFORMED_INPUT"

    # Token collaborator
    TRANSFER_FAILED = "TRANSFER_FAILED"

    # Tree building
    EMPTY_TREE = "EMPTY_TREE"
    DUPLICATE_GRANT = "DUPLICATE_GRANT"

    # Configuration / IO
    CONFIG_ERROR = "CONFIG_ERROR"
    DISTRIBUTION_FORMAT_ERROR = "DISTRIBUTION_FORMAT_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class DistributorError(BaseModel):
    """
    Base error model for structured error communication.

    Used to report a rejected claim without raising, and as the body
    of API error responses.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_PROOF],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether resubmitting the identical request could succeed",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class DistributorException(Exception):
    """
    Base exception for all distributor errors.

    This exception carries structured error information and can be
    converted to a DistributorError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "DISTRIBUTOR_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> DistributorError:
        """Convert this exception to a DistributorError model."""
        return DistributorError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ClaimRejectedException(DistributorException):
    """Base for every reason a claim can be turned down."""


class AlreadyClaimedException(ClaimRejectedException):
    """Raised when the address has already redeemed its grant."""

    def __init__(
        self,
        address: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["address"] = address
        super().__init__(
            message=f"Grant for {address} has already been claimed",
            code=ErrorCodes.ALREADY_CLAIMED,
            details=full_details,
        )


class InvalidProofException(ClaimRejectedException):
    """Raised when leaf + proof do not reproduce the committed root."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_PROOF,
            details=details,
        )


class InvalidSignatureException(ClaimRejectedException):
    """Raised when the signature does not authorize this (address, amount)."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_SIGNATURE,
            details=details,
        )


class MalformedInputException(ClaimRejectedException):
    """Raised when a request is structurally invalid."""

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
            code=ErrorCodes.MALFORMED_INPUT,
            details=full_details,
        )


class TransferFailedException(DistributorException):
    """Raised when the token ledger refuses or fails a transfer; the claim is rolled back."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.TRANSFER_FAILED,
            details=details,
        )


class EmptyTreeException(DistributorException):
    """Raised when a tree is requested for zero grants."""

    def __init__(self, message: str = "Cannot build a Merkle tree from zero grants") -> None:
        super().__init__(message=message, code=ErrorCodes.EMPTY_TREE)


class DuplicateGrantException(DistributorException):
    """Raised when the same address appears more than once in a whitelist."""

    def __init__(
        self,
        address: str,
        indices: list[int],
    ) -> None:
        super().__init__(
            message=f"Address {address} appears more than once (indices {indices})",
            code=ErrorCodes.DUPLICATE_GRANT,
            details={"address": address, "indices": indices},
        )


class ConfigException(DistributorException):
    """Raised when published configuration is missing or invalid."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=details,
        )


class DistributionFormatException(DistributorException):
    """Raised when a whitelist or distribution document cannot be parsed."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.DISTRIBUTION_FORMAT_ERROR,
            details=details,
        )


__all__ = [
    "ErrorCodes",
    "DistributorError",
    "DistributorException",
    "ClaimRejectedException",
    "AlreadyClaimedException",
    "InvalidProofException",
    "InvalidSignatureException",
    "MalformedInputException",
    "TransferFailedException",
    "EmptyTreeException",
    "DuplicateGrantException",
    "ConfigException",
    "DistributionFormatException",
]
