"""
Unit tests for transaction proposal construction.

Tests cover:
- Transaction ID derivation
- Channel and signature headers
- Chaincode invocation arguments
- Result extraction from prepared transactions
"""

import hashlib

import pytest

from ledger_gateway import protos
from ledger_gateway.client import Proposal, result_from_envelope, sha256
from ledger_gateway.errors import EndorseError
from ledger_gateway.identity import X509Identity
from tests.conftest import make_prepared_transaction


@pytest.fixture
def identity(certificate):
    return X509Identity("Org1MSP", certificate)


@pytest.fixture
def proposal(identity):
    return Proposal("mychannel", "basic", "CreateAsset", ("dealer-1", b"\x00raw"), identity)


def _decode(proposal):
    decoded = protos.Proposal.FromString(proposal.proposal_bytes)
    header = protos.Header.FromString(decoded.header)
    channel_header = protos.ChannelHeader.FromString(header.channel_header)
    signature_header = protos.SignatureHeader.FromString(header.signature_header)
    payload = protos.ChaincodeProposalPayload.FromString(decoded.payload)
    invocation = protos.ChaincodeInvocationSpec.FromString(payload.input)
    return channel_header, signature_header, invocation


class TestProposal:
    """Tests for Proposal."""

    def test_transaction_id_is_hash_of_nonce_and_creator(self, proposal, identity):
        """transaction_id = sha256(nonce + creator)."""
        assert proposal.creator == identity.serialize()
        assert len(proposal.nonce) == 24
        expected = hashlib.sha256(proposal.nonce + proposal.creator).hexdigest()
        assert proposal.transaction_id == expected

    def test_transaction_ids_are_unique(self, identity):
        """Each proposal gets a fresh nonce."""
        ids = {
            Proposal("mychannel", "basic", "ReadAsset", ("d",), identity).transaction_id
            for _ in range(10)
        }
        assert len(ids) == 10

    def test_channel_header(self, proposal):
        """Channel header names the channel, tx and chaincode."""
        channel_header, _, _ = _decode(proposal)

        assert channel_header.type == protos.HeaderType.ENDORSER_TRANSACTION
        assert channel_header.channel_id == "mychannel"
        assert channel_header.tx_id == proposal.transaction_id
        assert channel_header.timestamp.seconds > 0

        extension = protos.ChaincodeHeaderExtension.FromString(channel_header.extension)
        assert extension.chaincode_id.name == "basic"

    def test_signature_header(self, proposal):
        """Signature header carries creator and nonce."""
        _, signature_header, _ = _decode(proposal)
        assert signature_header.creator == proposal.creator
        assert signature_header.nonce == proposal.nonce

    def test_invocation_args(self, proposal):
        """Function name comes first, then args; str args are UTF-8 encoded."""
        _, _, invocation = _decode(proposal)

        spec = invocation.chaincode_spec
        assert spec.chaincode_id.name == "basic"
        assert list(spec.input.args) == [b"CreateAsset", b"dealer-1", b"\x00raw"]

    def test_signed(self, proposal):
        """Signed proposal signs the digest of the proposal bytes."""
        seen = []

        def sign(digest):
            seen.append(digest)
            return b"signature"

        signed = proposal.signed(sign, sha256)

        assert signed.proposal_bytes == proposal.proposal_bytes
        assert signed.signature == b"signature"
        assert seen == [hashlib.sha256(proposal.proposal_bytes).digest()]


class TestResultFromEnvelope:
    """Tests for result_from_envelope."""

    def test_extracts_result(self):
        envelope = make_prepared_transaction(b'{"DEALERID":"d1"}')
        assert result_from_envelope(envelope) == b'{"DEALERID":"d1"}'

    def test_empty_transaction(self):
        assert result_from_envelope(protos.Envelope()) == b""

    def test_malformed_envelope(self):
        """Undecodable payload raises EndorseError naming the transaction."""
        envelope = protos.Envelope(payload=b"\x0a\x05ab")

        with pytest.raises(EndorseError) as exc_info:
            result_from_envelope(envelope, "tx-1")

        assert exc_info.value.transaction_id == "tx-1"
        assert "malformed prepared transaction" in str(exc_info.value)


class TestTxValidationCode:
    def test_name_of(self):
        assert protos.TxValidationCode.name_of(11) == "MVCC_READ_CONFLICT"
        assert protos.TxValidationCode.name_of(99) == "UNKNOWN_99"
