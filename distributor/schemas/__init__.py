"""
Schemas

Pydantic models for grants, claims and published distributions,
plus the shared error taxonomy.
"""

from .errors import (
    ErrorCodes,
    DistributorError,
    DistributorException,
    ClaimRejectedException,
    AlreadyClaimedException,
    InvalidProofException,
    InvalidSignatureException,
    MalformedInputException,
    TransferFailedException,
    EmptyTreeException,
    DuplicateGrantException,
    ConfigException,
    DistributionFormatException,
)
from .grants import Grant, normalize_address
from .claims import ClaimRequest, ClaimResult, ClaimedEvent
from .distribution import DistributionEntry, MerkleDistribution

__all__ = [
    # Errors
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
    # Grants
    "Grant",
    "normalize_address",
    # Claims
    "ClaimRequest",
    "ClaimResult",
    "ClaimedEvent",
    # Distribution
    "DistributionEntry",
    "MerkleDistribution",
]
