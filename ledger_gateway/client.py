"""
Gateway client for the ledger network.

This module provides the main client interface:
- Gateway: session bound to a client identity, signer and gRPC channel
- Network: a named channel on the gateway
- Contract: a named chaincode on a network, used to evaluate and submit
  transactions

Example:
    >>> gateway = Gateway.connect(identity, sign, channel)
    >>> contract = gateway.get_network("mychannel").get_contract("basic")
    >>> result = await contract.evaluate_transaction("ReadAsset", "dealer-1")
    >>> await contract.submit_transaction("CreateAsset", "dealer-2", ...)
    >>> await gateway.close()

Invariants:
    - Every proposal, prepared transaction and commit status request is
      signed over its digest by the gateway's signer
    - transaction_id == sha256(nonce + creator).hex()
    - Each RPC is bounded by the matching gateway timeout
"""

from __future__ import annotations

import hashlib
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Callable, Union

from google.protobuf.message import DecodeError
from grpc import aio as grpc_aio

from . import protos
from ._grpc_client import GrpcClient
from .errors import CommitError, EndorseError
from .identity import Sign, X509Identity

logger = logging.getLogger(__name__)

Hash = Callable[[bytes], bytes]

Arg = Union[str, bytes]

NONCE_LENGTH = 24


def sha256(message: bytes) -> bytes:
    """Default digest used for signing."""
    return hashlib.sha256(message).digest()


@dataclass(frozen=True)
class Timeouts:
    """Per-RPC timeouts in seconds.

    Attributes:
        evaluate: Evaluate call
        endorse: Endorse call
        submit: Submit call
        commit_status: CommitStatus call (waits for the block to commit)
    """

    evaluate: float = 5.0
    endorse: float = 15.0
    submit: float = 5.0
    commit_status: float = 60.0


@dataclass
class Status:
    """Commit status of a submitted transaction."""

    transaction_id: str
    code: int
    block_number: int

    @property
    def successful(self) -> bool:
        return self.code == protos.TxValidationCode.VALID


def _to_bytes(arg: Arg) -> bytes:
    return arg if isinstance(arg, bytes) else arg.encode("utf-8")


class Proposal:
    """A signed transaction proposal ready to be evaluated or endorsed."""

    def __init__(
        self,
        channel_name: str,
        chaincode_name: str,
        transaction_name: str,
        args: tuple[Arg, ...],
        identity: X509Identity,
    ) -> None:
        self.channel_name = channel_name
        self.chaincode_name = chaincode_name
        self.transaction_name = transaction_name

        self.creator = identity.serialize()
        self.nonce = os.urandom(NONCE_LENGTH)
        self.transaction_id = hashlib.sha256(self.nonce + self.creator).hexdigest()

        self.proposal_bytes = self._build(args)

    def _build(self, args: tuple[Arg, ...]) -> bytes:
        chaincode_id = protos.ChaincodeID(name=self.chaincode_name)

        channel_header = protos.ChannelHeader(
            type=int(protos.HeaderType.ENDORSER_TRANSACTION),
            channel_id=self.channel_name,
            tx_id=self.transaction_id,
            epoch=0,
            extension=protos.ChaincodeHeaderExtension(
                chaincode_id=chaincode_id
            ).SerializeToString(),
        )
        now = time.time_ns()
        channel_header.timestamp.seconds = now // 1_000_000_000
        channel_header.timestamp.nanos = now % 1_000_000_000

        signature_header = protos.SignatureHeader(creator=self.creator, nonce=self.nonce)
        header = protos.Header(
            channel_header=channel_header.SerializeToString(),
            signature_header=signature_header.SerializeToString(),
        )

        invocation = protos.ChaincodeInvocationSpec(
            chaincode_spec=protos.ChaincodeSpec(
                chaincode_id=chaincode_id,
                input=protos.ChaincodeInput(
                    args=[_to_bytes(self.transaction_name)] + [_to_bytes(a) for a in args],
                ),
            )
        )
        payload = protos.ChaincodeProposalPayload(input=invocation.SerializeToString())

        return protos.Proposal(
            header=header.SerializeToString(),
            payload=payload.SerializeToString(),
        ).SerializeToString()

    def signed(self, sign: Sign, hash: Hash) -> Any:
        """Return the protos.SignedProposal for this proposal."""
        return protos.SignedProposal(
            proposal_bytes=self.proposal_bytes,
            signature=sign(hash(self.proposal_bytes)),
        )


def result_from_envelope(envelope: Any, transaction_id: str = "") -> bytes:
    """Extract the chaincode response payload from a prepared transaction.

    Raises:
        EndorseError: If the prepared transaction cannot be decoded
    """
    try:
        payload = protos.Payload.FromString(envelope.payload)
        transaction = protos.Transaction.FromString(payload.data)
        if not transaction.actions:
            return b""
        action_payload = protos.ChaincodeActionPayload.FromString(transaction.actions[0].payload)
        response_payload = protos.ProposalResponsePayload.FromString(
            action_payload.action.proposal_response_payload
        )
        chaincode_action = protos.ChaincodeAction.FromString(response_payload.extension)
    except DecodeError as e:
        raise EndorseError(
            f"failed to read result of transaction {transaction_id}: "
            f"malformed prepared transaction: {e}",
            transaction_id=transaction_id,
        ) from e
    return chaincode_action.response.payload


class Gateway:
    """Connection to a gateway peer on behalf of one client identity.

    Use Gateway.connect() rather than the constructor.
    """

    def __init__(
        self,
        identity: X509Identity,
        sign: Sign,
        client: GrpcClient,
        *,
        hash: Hash = sha256,
        timeouts: Timeouts | None = None,
    ) -> None:
        self.identity = identity
        self._sign = sign
        self._hash = hash
        self._client = client
        self.timeouts = timeouts or Timeouts()

    @classmethod
    def connect(
        cls,
        identity: X509Identity,
        sign: Sign,
        channel: grpc_aio.Channel,
        *,
        hash: Hash = sha256,
        evaluate_timeout: float = 5.0,
        endorse_timeout: float = 15.0,
        submit_timeout: float = 5.0,
        commit_status_timeout: float = 60.0,
    ) -> Gateway:
        """Open a gateway session over an existing gRPC channel.

        Args:
            identity: Client identity used as transaction creator
            sign: Signing function over message digests
            channel: gRPC channel to the gateway peer
            hash: Digest function applied before signing
            evaluate_timeout: Evaluate timeout in seconds
            endorse_timeout: Endorse timeout in seconds
            submit_timeout: Submit timeout in seconds
            commit_status_timeout: CommitStatus timeout in seconds

        Returns:
            Gateway session
        """
        timeouts = Timeouts(
            evaluate=evaluate_timeout,
            endorse=endorse_timeout,
            submit=submit_timeout,
            commit_status=commit_status_timeout,
        )
        logger.info(f"Gateway session opened for {identity.msp_id}")
        return cls(identity, sign, GrpcClient(channel), hash=hash, timeouts=timeouts)

    async def close(self) -> None:
        """Close the underlying gRPC channel."""
        await self._client.close()

    def get_network(self, channel_name: str) -> Network:
        return Network(self, channel_name)

    def _sign_digest(self, message: bytes) -> bytes:
        return self._sign(self._hash(message))

    async def _evaluate(self, proposal: Proposal) -> bytes:
        request = protos.EvaluateRequest(
            transaction_id=proposal.transaction_id,
            channel_id=proposal.channel_name,
            proposed_transaction=proposal.signed(self._sign, self._hash),
        )
        response = await self._client.evaluate(request, self.timeouts.evaluate)
        return response.result.payload

    async def _submit(self, proposal: Proposal) -> bytes:
        endorse_request = protos.EndorseRequest(
            transaction_id=proposal.transaction_id,
            channel_id=proposal.channel_name,
            proposed_transaction=proposal.signed(self._sign, self._hash),
        )
        endorsed = await self._client.endorse(endorse_request, self.timeouts.endorse)

        envelope = endorsed.prepared_transaction
        envelope.signature = self._sign_digest(envelope.payload)
        result = result_from_envelope(envelope, proposal.transaction_id)

        await self._client.submit(
            protos.SubmitRequest(
                transaction_id=proposal.transaction_id,
                channel_id=proposal.channel_name,
                prepared_transaction=envelope,
            ),
            self.timeouts.submit,
        )

        status = await self._commit_status(proposal)
        if not status.successful:
            raise CommitError(
                status.transaction_id,
                status.code,
                protos.TxValidationCode.name_of(status.code),
                status.block_number,
            )
        return result

    async def _commit_status(self, proposal: Proposal) -> Status:
        request_bytes = protos.CommitStatusRequest(
            transaction_id=proposal.transaction_id,
            channel_id=proposal.channel_name,
            identity=proposal.creator,
        ).SerializeToString()
        signed = protos.SignedCommitStatusRequest(
            request=request_bytes,
            signature=self._sign_digest(request_bytes),
        )
        response = await self._client.commit_status(
            signed, proposal.transaction_id, self.timeouts.commit_status
        )
        return Status(
            transaction_id=proposal.transaction_id,
            code=response.result,
            block_number=response.block_number,
        )


class Network:
    """A channel on the ledger network."""

    def __init__(self, gateway: Gateway, name: str) -> None:
        self._gateway = gateway
        self.name = name

    def get_contract(self, chaincode_name: str) -> Contract:
        return Contract(self._gateway, self.name, chaincode_name)


class Contract:
    """A chaincode deployed on a channel.

    Attributes:
        channel_name: Channel the chaincode is deployed to
        chaincode_name: Chaincode name
    """

    def __init__(self, gateway: Gateway, channel_name: str, chaincode_name: str) -> None:
        self._gateway = gateway
        self.channel_name = channel_name
        self.chaincode_name = chaincode_name

    def new_proposal(self, transaction_name: str, *args: Arg) -> Proposal:
        return Proposal(
            self.channel_name,
            self.chaincode_name,
            transaction_name,
            args,
            self._gateway.identity,
        )

    async def evaluate_transaction(self, transaction_name: str, *args: Arg) -> bytes:
        """Evaluate a transaction function and return its result.

        The transaction is not sent for ordering; this is a read-only query.

        Raises:
            EvaluateError: If the Evaluate call fails
        """
        proposal = self.new_proposal(transaction_name, *args)
        logger.debug(f"Evaluating {transaction_name} as {proposal.transaction_id}")
        return await self._gateway._evaluate(proposal)

    async def submit_transaction(self, transaction_name: str, *args: Arg) -> bytes:
        """Submit a transaction and wait for it to commit.

        Returns:
            The result returned by the transaction function

        Raises:
            EndorseError: If endorsement fails
            SubmitError: If the prepared transaction is not accepted for ordering
            CommitStatusError: If the commit status cannot be obtained
            CommitError: If the transaction commits with a non-VALID code
        """
        proposal = self.new_proposal(transaction_name, *args)
        logger.debug(f"Submitting {transaction_name} as {proposal.transaction_id}")
        return await self._gateway._submit(proposal)
