"""
Claim Verifier Unit Tests
Tests for distributor/claims/verifier.py

1. Happy path: valid claim pays out exactly once and records an event
2. Rejections in order: malformed, already claimed, invalid proof, invalid signature
3. Tampered, reordered and cross-tree proofs are rejected
4. Failed transfers roll the claimed mark back
5. Concurrent claims for one address: exactly one wins
"""
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from distributor.claims.verifier import ClaimVerifier
from distributor.crypto.hashing import from_hex, keccak256, to_hex
from distributor.crypto.signatures import sign_claim
from distributor.schemas.claims import ClaimRequest
from distributor.schemas.errors import (
    AlreadyClaimedException,
    ConfigException,
    ErrorCodes,
    InvalidProofException,
    InvalidSignatureException,
    MalformedInputException,
    TransferFailedException,
)
from distributor.token.ledger import InMemoryTokenLedger

from fixtures import make_accounts, make_claim_request, make_distribution, make_domain, make_grants


def signature_for(account, domain, amount):
    return sign_claim(account.key, domain, account.address, amount).signature


def proof_for(distribution, account):
    return list(distribution.get_entry(account.address).proof)


class RaisingLedger:
    """Ledger whose transfer always raises."""

    def transfer(self, to: str, amount: int) -> bool:
        raise RuntimeError("ledger offline")


# =============================================================================
# Happy path
# =============================================================================

class TestSuccessfulClaim:
    """Tests for accepted claims."""

    def test_claim_pays_out(self, verifier, ledger, distribution, accounts, domain):
        alice = accounts[0]
        event = verifier.claim(
            alice.address, 25, proof_for(distribution, alice), signature_for(alice, domain, 25)
        )

        assert event.address == alice.address
        assert event.amount == 25
        assert event.sequence == 0
        assert ledger.balance_of(alice.address) == 25
        assert ledger.pool == 75
        assert verifier.is_claimed(alice.address)

    def test_every_grant_claimable(self, verifier, ledger, distribution, accounts, domain):
        for account in accounts:
            verifier.claim(
                account.address, 25, proof_for(distribution, account), signature_for(account, domain, 25)
            )

        assert ledger.pool == 0
        assert [e.sequence for e in verifier.events.get_events()] == [0, 1, 2, 3]
        assert all(verifier.is_claimed(a.address) for a in accounts)

    def test_lowercase_address_and_byte_proof(self, verifier, ledger, distribution, accounts, domain):
        bob = accounts[1]
        proof = [from_hex(p) for p in proof_for(distribution, bob)]
        verifier.claim(bob.address.lower(), 25, proof, signature_for(bob, domain, 25))

        assert verifier.is_claimed(bob.address)
        assert ledger.balance_of(bob.address) == 25

    def test_single_grant_tree_empty_proof(self, domain):
        (alice,) = make_accounts(1)
        distribution = make_distribution(make_grants([alice], amount=10))
        ledger = InMemoryTokenLedger(supply=10)
        verifier = ClaimVerifier.from_distribution(distribution, ledger, domain)

        verifier.claim(alice.address, 10, [], signature_for(alice, domain, 10))
        assert ledger.balance_of(alice.address) == 10

    def test_listener_sees_event(self, verifier, distribution, accounts, domain):
        seen = []
        verifier.events.subscribe(seen.append)
        alice = accounts[0]
        verifier.claim(alice.address, 25, proof_for(distribution, alice), signature_for(alice, domain, 25))

        assert [(e.address, e.amount) for e in seen] == [(alice.address, 25)]

    def test_failing_listener_does_not_undo_claim(self, verifier, distribution, accounts, domain):
        def broken(event):
            raise RuntimeError("indexer down")

        verifier.events.subscribe(broken)
        alice = accounts[0]
        verifier.claim(alice.address, 25, proof_for(distribution, alice), signature_for(alice, domain, 25))
        assert verifier.is_claimed(alice.address)


# =============================================================================
# Rejections
# =============================================================================

class TestRejections:
    """Tests for each rejection kind and their precedence."""

    def test_second_claim_already_claimed(self, verifier, ledger, distribution, accounts, domain):
        alice = accounts[0]
        args = (alice.address, 25, proof_for(distribution, alice), signature_for(alice, domain, 25))
        verifier.claim(*args)

        with pytest.raises(AlreadyClaimedException) as exc_info:
            verifier.claim(*args)
        assert exc_info.value.code == ErrorCodes.ALREADY_CLAIMED
        assert ledger.balance_of(alice.address) == 25
        assert len(verifier.events) == 1

    def test_inflated_amount_invalid_proof(self, verifier, ledger, distribution, accounts, domain):
        bob = accounts[1]
        with pytest.raises(InvalidProofException) as exc_info:
            verifier.claim(bob.address, 30, proof_for(distribution, bob), signature_for(bob, domain, 30))

        assert exc_info.value.details["expected_root"] == distribution.root
        assert not verifier.is_claimed(bob.address)
        assert ledger.balance_of(bob.address) == 0

    def test_already_claimed_checked_before_proof(self, verifier, distribution, accounts, domain):
        alice = accounts[0]
        verifier.claim(alice.address, 25, proof_for(distribution, alice), signature_for(alice, domain, 25))

        bad_proof = [to_hex(keccak256(b"x")), to_hex(keccak256(b"y"))]
        with pytest.raises(AlreadyClaimedException):
            verifier.claim(alice.address, 25, bad_proof, signature_for(alice, domain, 25))

    def test_proof_checked_before_signature(self, verifier, distribution, accounts, domain):
        alice, bob = accounts[0], accounts[1]
        with pytest.raises(InvalidProofException):
            verifier.claim(alice.address, 30, proof_for(distribution, alice), signature_for(bob, domain, 30))

    def test_signature_from_other_key(self, verifier, distribution, accounts, domain):
        alice, bob = accounts[0], accounts[1]
        forged = sign_claim(bob.key, domain, alice.address, 25).signature
        with pytest.raises(InvalidSignatureException):
            verifier.claim(alice.address, 25, proof_for(distribution, alice), forged)
        assert not verifier.is_claimed(alice.address)

    def test_signature_for_other_amount(self, verifier, distribution, accounts, domain):
        alice = accounts[0]
        with pytest.raises(InvalidSignatureException):
            verifier.claim(alice.address, 25, proof_for(distribution, alice), signature_for(alice, domain, 24))

    def test_signature_replayed_on_other_chain(self, distribution, ledger, accounts, domain):
        other_chain = make_domain(chain_id=domain.chain_id + 1)
        verifier = ClaimVerifier.from_distribution(distribution, ledger, other_chain)
        alice = accounts[0]
        with pytest.raises(InvalidSignatureException):
            verifier.claim(alice.address, 25, proof_for(distribution, alice), signature_for(alice, domain, 25))

    def test_address_not_in_tree(self, verifier, distribution, accounts, domain):
        (outsider,) = make_accounts(1, start=99)
        with pytest.raises(InvalidProofException):
            verifier.claim(
                outsider.address, 25, proof_for(distribution, accounts[0]), signature_for(outsider, domain, 25)
            )


class TestProofTampering:
    """Tests for proofs that are structurally fine but wrong."""

    def test_flipped_byte(self, verifier, distribution, accounts, domain):
        alice = accounts[0]
        proof = proof_for(distribution, alice)
        raw = bytearray(from_hex(proof[0]))
        raw[0] ^= 0xFF
        proof[0] = to_hex(bytes(raw))

        with pytest.raises(InvalidProofException):
            verifier.claim(alice.address, 25, proof, signature_for(alice, domain, 25))

    def test_reordered_proof(self, verifier, distribution, accounts, domain):
        alice = accounts[0]
        proof = list(reversed(proof_for(distribution, alice)))
        with pytest.raises(InvalidProofException):
            verifier.claim(alice.address, 25, proof, signature_for(alice, domain, 25))

    def test_proof_from_another_tree(self, domain):
        accounts = make_accounts(4)
        tree_a = make_distribution(make_grants(accounts, amount=25))
        tree_b = make_distribution(make_grants(accounts, amounts=[25, 26, 27, 28]))
        verifier = ClaimVerifier.from_distribution(tree_b, InMemoryTokenLedger(supply=106), domain)

        alice = accounts[0]
        with pytest.raises(InvalidProofException):
            verifier.claim(alice.address, 25, proof_for(tree_a, alice), signature_for(alice, domain, 25))

    def test_verify_proof_is_read_only(self, verifier, distribution, accounts):
        alice = accounts[0]
        assert verifier.verify_proof(alice.address, 25, proof_for(distribution, alice))
        assert not verifier.verify_proof(alice.address, 26, proof_for(distribution, alice))
        assert not verifier.verify_proof("nope", 25, proof_for(distribution, alice))
        assert not verifier.is_claimed(alice.address)


class TestMalformedInput:
    """Structurally invalid requests are rejected before any other check."""

    @pytest.fixture
    def alice_args(self, distribution, accounts, domain):
        alice = accounts[0]
        return {
            "address": alice.address,
            "amount": 25,
            "proof": proof_for(distribution, alice),
            "signature": signature_for(alice, domain, 25),
        }

    @pytest.mark.parametrize("field,value", [
        ("address", "not-an-address"),
        ("address", "0x1234"),
        ("amount", -1),
        ("amount", 2**256),
        ("amount", True),
        ("amount", "25"),
        ("proof", "0xdeadbeef"),
        ("proof", ["0xdeadbeef", "0xdeadbeef"]),
        ("proof", ["zz"]),
        ("proof", []),
        ("signature", b"\x00" * 64),
        ("signature", "0x1234"),
        ("signature", 12345),
    ])
    def test_rejected(self, verifier, alice_args, field, value):
        alice_args[field] = value
        with pytest.raises(MalformedInputException) as exc_info:
            verifier.claim(**alice_args)
        assert exc_info.value.code == ErrorCodes.MALFORMED_INPUT

    def test_proof_longer_than_depth(self, verifier, alice_args):
        alice_args["proof"] = alice_args["proof"] + [to_hex(keccak256(b"extra"))]
        with pytest.raises(MalformedInputException):
            verifier.claim(**alice_args)

    def test_malformed_does_not_mark(self, verifier, alice_args, ledger):
        alice_args["amount"] = -5
        with pytest.raises(MalformedInputException):
            verifier.claim(**alice_args)
        assert not verifier.is_claimed(alice_args["address"])
        assert ledger.transfer_count == 0

    def test_malformed_before_already_claimed(self, verifier, alice_args):
        verifier.claim(**alice_args)
        alice_args["signature"] = b"\x00" * 10
        with pytest.raises(MalformedInputException):
            verifier.claim(**alice_args)


# =============================================================================
# Transfer failures
# =============================================================================

class TestTransferFailure:
    """A failed transfer leaves the address unclaimed."""

    def test_refused_transfer_rolls_back(self, distribution, accounts, domain):
        ledger = InMemoryTokenLedger(supply=0)
        verifier = ClaimVerifier.from_distribution(distribution, ledger, domain)
        alice = accounts[0]
        args = (alice.address, 25, proof_for(distribution, alice), signature_for(alice, domain, 25))

        with pytest.raises(TransferFailedException) as exc_info:
            verifier.claim(*args)
        assert exc_info.value.code == ErrorCodes.TRANSFER_FAILED
        assert not verifier.is_claimed(alice.address)
        assert len(verifier.events) == 0

        # Funded later, the same claim goes through
        ledger.fund(100)
        verifier.claim(*args)
        assert ledger.balance_of(alice.address) == 25

    def test_raising_transfer_rolls_back(self, distribution, accounts, domain):
        verifier = ClaimVerifier.from_distribution(distribution, RaisingLedger(), domain)
        alice = accounts[0]

        with pytest.raises(TransferFailedException):
            verifier.claim(alice.address, 25, proof_for(distribution, alice), signature_for(alice, domain, 25))
        assert not verifier.is_claimed(alice.address)


# =============================================================================
# Concurrency
# =============================================================================

class TestConcurrency:
    """Racing claims must never double-pay."""

    def test_same_address_race(self, verifier, ledger, distribution, accounts, domain):
        alice = accounts[0]
        proof = proof_for(distribution, alice)
        signature = signature_for(alice, domain, 25)
        barrier = threading.Barrier(16)

        def attempt():
            barrier.wait()
            try:
                verifier.claim(alice.address, 25, proof, signature)
                return "ok"
            except AlreadyClaimedException:
                return "already"

        with ThreadPoolExecutor(max_workers=16) as pool:
            outcomes = list(pool.map(lambda _: attempt(), range(16)))

        assert outcomes.count("ok") == 1
        assert outcomes.count("already") == 15
        assert ledger.balance_of(alice.address) == 25
        assert ledger.transfer_count == 1
        assert len(verifier.events) == 1

    def test_distinct_addresses_in_parallel(self, verifier, ledger, distribution, accounts, domain):
        requests = [
            (a.address, 25, proof_for(distribution, a), signature_for(a, domain, 25)) for a in accounts
        ]
        with ThreadPoolExecutor(max_workers=4) as pool:
            events = list(pool.map(lambda args: verifier.claim(*args), requests))

        assert len(events) == 4
        assert sorted(e.sequence for e in events) == [0, 1, 2, 3]
        assert ledger.pool == 0


# =============================================================================
# submit() and construction
# =============================================================================

class TestSubmit:
    """Tests for the non-raising entry point."""

    def test_accepted(self, verifier, distribution, accounts, domain):
        alice = accounts[0]
        request = make_claim_request(alice, distribution, domain)
        request = request.model_copy(update={"address": alice.address.lower()})

        result = verifier.submit(request)
        assert result.ok
        assert result.address == alice.address
        assert result.error is None

    def test_rejections_carry_codes(self, verifier, distribution, accounts, domain, assert_rejected):
        alice, bob, carol = accounts[0], accounts[1], accounts[2]
        verifier.submit(make_claim_request(alice, distribution, domain))

        assert_rejected(verifier.submit(make_claim_request(alice, distribution, domain)), ErrorCodes.ALREADY_CLAIMED)
        assert_rejected(verifier.submit(make_claim_request(bob, distribution, domain, amount=30)), ErrorCodes.INVALID_PROOF)
        assert_rejected(
            verifier.submit(make_claim_request(carol, distribution, domain, signer=bob)),
            ErrorCodes.INVALID_SIGNATURE,
        )

    def test_malformed_request(self, verifier, assert_rejected):
        request = ClaimRequest(address="bogus", amount=1, proof=[], signature="0x00")
        assert_rejected(verifier.submit(request), ErrorCodes.MALFORMED_INPUT)


class TestConstruction:
    """Tests for verifier configuration."""

    def test_root_accepts_bytes_and_hex(self, distribution, ledger, domain):
        from_str = ClaimVerifier(distribution.root, ledger, domain)
        from_bytes = ClaimVerifier(from_hex(distribution.root), ledger, domain)
        assert from_str.root == from_bytes.root
        assert from_str.root_hex == distribution.root

    @pytest.mark.parametrize("root", ["deadbeef", "0x1234", b"\x00" * 31])
    def test_bad_root(self, ledger, domain, root):
        with pytest.raises(ConfigException):
            ClaimVerifier(root, ledger, domain)

    def test_bad_leaf_count(self, distribution, ledger, domain):
        with pytest.raises(ConfigException):
            ClaimVerifier(distribution.root, ledger, domain, leaf_count=0)

    def test_without_leaf_count_accepts_any_proof_length(self, distribution, ledger, accounts, domain):
        verifier = ClaimVerifier(distribution.root, ledger, domain)
        alice = accounts[0]
        assert verifier.leaf_count is None
        verifier.claim(alice.address, 25, proof_for(distribution, alice), signature_for(alice, domain, 25))

    def test_is_claimed_invalid_address(self, verifier):
        assert verifier.is_claimed("garbage") is False
