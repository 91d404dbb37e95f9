"""
API Error Handling

Standardized error handling for the API.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from distributor.schemas.errors import ErrorCodes


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="INVALID_REQUEST",
            message=message,
            status_code=400,
            details=details,
        )


class ProofNotFoundError(APIError):
    """Address is not part of the distribution."""

    def __init__(self, address: str):
        super().__init__(
            code="PROOF_NOT_FOUND",
            message=f"No grant for address {address}",
            status_code=404,
            details={"address": address},
        )


class ServiceUnavailableError(APIError):
    """Distribution is not configured or could not be loaded."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code=ErrorCodes.CONFIG_ERROR,
            message=message,
            status_code=503,
            details=details,
        )


# HTTP status for each claim rejection kind
CLAIM_STATUS_CODES: dict[str, int] = {
    ErrorCodes.ALREADY_CLAIMED: 409,
    ErrorCodes.INVALID_PROOF: 400,
    ErrorCodes.INVALID_SIGNATURE: 400,
    ErrorCodes.MALFORMED_INPUT: 422,
    ErrorCodes.TRANSFER_FAILED: 502,
}


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
