"""API response models."""

from api.models.responses import (
    HealthResponse,
    RootResponse,
    ProofResponse,
    ClaimStatusResponse,
    ClaimEventInfo,
    ClaimEventsResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "HealthResponse",
    "RootResponse",
    "ProofResponse",
    "ClaimStatusResponse",
    "ClaimEventInfo",
    "ClaimEventsResponse",
    "ErrorDetail",
    "ErrorResponse",
]
