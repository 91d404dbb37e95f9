"""
Proof Lookup Routes

GET /root              - committed root and signature domain
GET /proofs/{address}  - proof record for one address
"""

from fastapi import APIRouter, Depends

from api.deps import DistributorService, get_service
from api.errors import ProofNotFoundError
from api.models.responses import ProofResponse, RootResponse


router = APIRouter(tags=["proofs"])


@router.get("/root", response_model=RootResponse)
async def get_root(service: DistributorService = Depends(get_service)) -> RootResponse:
    """Publish the root and the domain claimants must sign under."""
    distribution = service.distribution
    domain = service.verifier.domain
    return RootResponse(
        merkle_root=distribution.root,
        leaf_count=distribution.leaf_count,
        token_total=str(distribution.token_total),
        domain_name=domain.name,
        domain_version=domain.version,
        chain_id=domain.chain_id,
        verifying_contract=domain.verifying_contract,
    )


@router.get("/proofs/{address}", response_model=ProofResponse)
async def get_proof(
    address: str,
    service: DistributorService = Depends(get_service),
) -> ProofResponse:
    """
    Look up the proof for an address.

    Addresses are matched case-insensitively; the response carries the
    checksummed form.
    """
    entry = service.distribution.get_entry(address)
    if entry is None:
        raise ProofNotFoundError(address)

    return ProofResponse(
        address=entry.address,
        amount=str(entry.amount),
        index=entry.leaf_index,
        proof=list(entry.proof),
        merkle_root=service.distribution.root,
        claimed=service.verifier.is_claimed(entry.address),
    )
