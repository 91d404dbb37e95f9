"""
Claim Routes

POST /claims            - submit a claim
GET  /claims            - claim-succeeded log
GET  /claims/{address}  - claimed flag for one address
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.deps import DistributorService, get_service
from api.errors import CLAIM_STATUS_CODES, InvalidRequestError
from api.models.responses import (
    ClaimEventInfo,
    ClaimEventsResponse,
    ClaimStatusResponse,
)
from distributor.schemas.claims import ClaimRequest, ClaimResult
from distributor.schemas.grants import normalize_address


router = APIRouter(tags=["claims"])


@router.post("/claims", response_model=ClaimResult)
def submit_claim(
    request: ClaimRequest,
    service: DistributorService = Depends(get_service),
) -> JSONResponse:
    """
    Submit a claim.

    The body is returned as a ClaimResult in every case. Rejections map to:
    - 409 ALREADY_CLAIMED
    - 400 INVALID_PROOF / INVALID_SIGNATURE
    - 422 MALFORMED_INPUT
    - 502 TRANSFER_FAILED
    """
    result = service.verifier.submit(request)
    status_code = 200 if result.ok else CLAIM_STATUS_CODES.get(result.error_code, 400)
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))


@router.get("/claims", response_model=ClaimEventsResponse)
async def list_claims(service: DistributorService = Depends(get_service)) -> ClaimEventsResponse:
    """Return every claim-succeeded record in commit order."""
    events = [
        ClaimEventInfo(
            sequence=event.sequence,
            address=event.address,
            amount=str(event.amount),
            recorded_at=event.recorded_at,
        )
        for event in service.verifier.events.get_events()
    ]
    return ClaimEventsResponse(count=len(events), events=events)


@router.get("/claims/{address}", response_model=ClaimStatusResponse)
async def claim_status(
    address: str,
    service: DistributorService = Depends(get_service),
) -> ClaimStatusResponse:
    """Report whether an address has already claimed."""
    try:
        checksum = normalize_address(address)
    except ValueError as e:
        raise InvalidRequestError(str(e), details={"address": address}) from e
    return ClaimStatusResponse(address=checksum, claimed=service.verifier.is_claimed(checksum))
