"""
Claim Verifier

Accepts or rejects claims against one committed Merkle root and makes
sure no address succeeds twice.

Check order (cheapest first, all fail closed):
0. Structure  -> MALFORMED_INPUT
1. Claimed    -> ALREADY_CLAIMED
2. Proof      -> INVALID_PROOF
3. Signature  -> INVALID_SIGNATURE

On success the address is marked claimed, the token ledger is asked to
transfer, and a ClaimedEvent is recorded. If the transfer fails the mark
is rolled back before the lock is released, so "claimed" always means
the tokens were sent exactly once.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from distributor.claims.events import ClaimEventLog
from distributor.claims.store import ClaimedSet
from distributor.crypto.hashing import (
    DIGEST_SIZE,
    UINT256_MAX,
    from_hex,
    hash_leaf,
    to_hex,
)
from distributor.crypto.signatures import (
    SIGNATURE_SIZE,
    ClaimDomain,
    verify_claim_signature,
)
from distributor.merkle.merkle_tree import compute_tree_depth, process_proof
from distributor.schemas.claims import ClaimedEvent, ClaimRequest, ClaimResult
from distributor.schemas.distribution import MerkleDistribution
from distributor.schemas.errors import (
    AlreadyClaimedException,
    ConfigException,
    DistributorException,
    InvalidProofException,
    InvalidSignatureException,
    MalformedInputException,
    TransferFailedException,
)
from distributor.schemas.grants import normalize_address
from distributor.token.ledger import TokenLedger


logger = logging.getLogger(__name__)

ProofInput = Sequence[Union[bytes, str]]


def _as_bytes(value: bytes | str, field_path: str) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        try:
            return from_hex(value)
        except ValueError as e:
            raise MalformedInputException(str(e), field_path=field_path) from e
    raise MalformedInputException(
        f"Expected bytes or 0x-hex string, got {type(value).__name__}",
        field_path=field_path,
    )


class ClaimVerifier:
    """
    Verifies claims against an immutable root and owns the claimed-set.

    Example:
        >>> verifier = ClaimVerifier(root=distribution.root, token=ledger, domain=domain)
        >>> verifier.claim(address, 25, entry.proof, signature)
        ClaimedEvent(sequence=0, address=..., amount=25, ...)
    """

    def __init__(
        self,
        root: bytes | str,
        token: TokenLedger,
        domain: ClaimDomain,
        *,
        leaf_count: Optional[int] = None,
        claimed: Optional[ClaimedSet] = None,
        events: Optional[ClaimEventLog] = None,
    ) -> None:
        try:
            root_bytes = from_hex(root) if isinstance(root, str) else bytes(root)
        except ValueError as e:
            raise ConfigException(f"Invalid Merkle root: {e}") from e
        if len(root_bytes) != DIGEST_SIZE:
            raise ConfigException(
                f"Merkle root must be {DIGEST_SIZE} bytes, got {len(root_bytes)}",
            )
        if leaf_count is not None and leaf_count < 1:
            raise ConfigException(f"leaf_count must be positive, got {leaf_count}")

        self._root = root_bytes
        self._token = token
        self._domain = domain
        self._leaf_count = leaf_count
        self._claimed = claimed if claimed is not None else ClaimedSet()
        self._events = events if events is not None else ClaimEventLog()

    @classmethod
    def from_distribution(
        cls,
        distribution: MerkleDistribution,
        token: TokenLedger,
        domain: ClaimDomain,
    ) -> "ClaimVerifier":
        """Create a verifier for a built distribution (root and leaf count)."""
        return cls(
            root=distribution.root,
            token=token,
            domain=domain,
            leaf_count=distribution.leaf_count,
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def root(self) -> bytes:
        return self._root

    @property
    def root_hex(self) -> str:
        return to_hex(self._root)

    @property
    def domain(self) -> ClaimDomain:
        return self._domain

    @property
    def leaf_count(self) -> Optional[int]:
        return self._leaf_count

    @property
    def events(self) -> ClaimEventLog:
        return self._events

    def is_claimed(self, address: str) -> bool:
        try:
            checksum = normalize_address(address)
        except ValueError:
            return False
        return self._claimed.is_claimed(checksum)

    def verify_proof(self, address: str, amount: int, proof: ProofInput) -> bool:
        """Membership check only: does (address, amount, proof) reproduce the root?"""
        try:
            checksum, siblings = self._validate(address, amount, proof)
        except MalformedInputException:
            return False
        return process_proof(hash_leaf(checksum, amount), siblings) == self._root

    # ------------------------------------------------------------------
    # Claim
    # ------------------------------------------------------------------

    def _validate(
        self,
        address: str,
        amount: int,
        proof: ProofInput,
    ) -> tuple[str, list[bytes]]:
        try:
            checksum = normalize_address(address)
        except ValueError as e:
            raise MalformedInputException(str(e), field_path="address") from e

        if isinstance(amount, bool) or not isinstance(amount, int):
            raise MalformedInputException(
                f"Amount must be an integer, got {type(amount).__name__}",
                field_path="amount",
            )
        if amount < 0 or amount > UINT256_MAX:
            raise MalformedInputException(
                f"Amount out of uint256 range: {amount}",
                field_path="amount",
            )

        if isinstance(proof, (str, bytes)):
            raise MalformedInputException(
                "Proof must be a sequence of digests",
                field_path="proof",
            )
        siblings: list[bytes] = []
        for i, element in enumerate(proof):
            digest = _as_bytes(element, f"proof[{i}]")
            if len(digest) != DIGEST_SIZE:
                raise MalformedInputException(
                    f"Proof element must be {DIGEST_SIZE} bytes, got {len(digest)}",
                    field_path=f"proof[{i}]",
                )
            siblings.append(digest)

        if self._leaf_count is not None:
            max_depth = compute_tree_depth(self._leaf_count)
            if not siblings and self._leaf_count > 1:
                raise MalformedInputException(
                    f"Empty proof for a tree of {self._leaf_count} leaves",
                    field_path="proof",
                )
            if len(siblings) > max_depth:
                raise MalformedInputException(
                    f"Proof has {len(siblings)} elements, tree depth is {max_depth}",
                    field_path="proof",
                )

        return checksum, siblings

    def claim(
        self,
        address: str,
        amount: int,
        proof: ProofInput,
        signature: bytes | str,
    ) -> ClaimedEvent:
        """
        Verify a claim and, if every check passes, pay it out.

        Args:
            address: Claiming account (hex, any case)
            amount: Granted amount exactly as committed in the tree
            proof: Sibling digests bottom-up (bytes or 0x-hex)
            signature: 65-byte EIP-712 signature (bytes or 0x-hex)

        Returns:
            The recorded ClaimedEvent

        Raises:
            MalformedInputException: Structurally invalid request
            AlreadyClaimedException: Address already redeemed
            InvalidProofException: Proof does not lead to the committed root
            InvalidSignatureException: Signature does not authorize this claim
            TransferFailedException: Ledger refused; the mark was rolled back
        """
        checksum, siblings = self._validate(address, amount, proof)
        sig = _as_bytes(signature, "signature")
        if len(sig) != SIGNATURE_SIZE:
            raise MalformedInputException(
                f"Signature must be {SIGNATURE_SIZE} bytes, got {len(sig)}",
                field_path="signature",
            )

        if self._claimed.is_claimed(checksum):
            raise AlreadyClaimedException(checksum)

        computed_root = process_proof(hash_leaf(checksum, amount), siblings)
        if computed_root != self._root:
            raise InvalidProofException(
                "Proof does not reproduce the committed root",
                details={
                    "address": checksum,
                    "expected_root": self.root_hex,
                    "computed_root": to_hex(computed_root),
                },
            )

        if not verify_claim_signature(self._domain, checksum, amount, sig):
            raise InvalidSignatureException(
                f"Signature does not authorize claim of {amount} by {checksum}",
                details={"address": checksum, "amount": amount},
            )

        with self._claimed.lock:
            # Re-check under the lock: another claim may have won the race
            if self._claimed.is_claimed(checksum):
                raise AlreadyClaimedException(checksum)

            self._claimed.mark(checksum)
            try:
                transferred = self._token.transfer(checksum, amount)
            except Exception as e:
                self._claimed.unmark(checksum)
                logger.warning("Transfer to %s raised, claim rolled back: %s", checksum, e)
                raise TransferFailedException(
                    f"Token transfer to {checksum} failed: {e}",
                    details={"address": checksum, "amount": amount},
                ) from e
            if not transferred:
                self._claimed.unmark(checksum)
                logger.warning("Transfer to %s refused, claim rolled back", checksum)
                raise TransferFailedException(
                    f"Token ledger refused transfer of {amount} to {checksum}",
                    details={"address": checksum, "amount": amount},
                )

            event = self._events.record(checksum, amount)

        logger.info("Claim accepted: %s amount=%d", checksum, amount)
        return event

    def submit(self, request: ClaimRequest) -> ClaimResult:
        """
        Non-raising claim entry point.

        Returns:
            ClaimResult with ok=True, or ok=False and the error kind
        """
        try:
            self.claim(request.address, request.amount, request.proof, request.signature)
        except DistributorException as e:
            logger.warning("Claim rejected for %s: [%s] %s", request.address, e.code, e.message)
            return ClaimResult.rejected(request.address, request.amount, e.to_error_model())

        return ClaimResult.accepted(normalize_address(request.address), request.amount)


__all__ = ["ClaimVerifier"]
