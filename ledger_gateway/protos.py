"""
Protocol buffer messages for the Fabric Gateway service.

Only the messages and fields the gateway client reads or writes are
declared. Field numbers and types match the published fabric-protos, so
messages serialize to the same bytes the peer expects. Fields the client
never sets are omitted; the peer's extra fields on responses are kept as
unknown fields by the runtime.

The descriptors are assembled into a private DescriptorPool at import time
and message classes are obtained from the protobuf message factory.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from google.protobuf import descriptor_pb2, descriptor_pool, timestamp_pb2
from google.protobuf.message_factory import GetMessageClass

_Field = descriptor_pb2.FieldDescriptorProto

_TIMESTAMP_FILE = "google/protobuf/timestamp.proto"

_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(timestamp_pb2.DESCRIPTOR.serialized_pb)


def _scalar(name: str, number: int, kind: int, repeated: bool = False) -> dict[str, Any]:
    return {
        "name": name,
        "number": number,
        "type": kind,
        "label": _Field.LABEL_REPEATED if repeated else _Field.LABEL_OPTIONAL,
    }


def _message(name: str, number: int, type_name: str, repeated: bool = False) -> dict[str, Any]:
    return {
        "name": name,
        "number": number,
        "type": _Field.TYPE_MESSAGE,
        "type_name": type_name,
        "label": _Field.LABEL_REPEATED if repeated else _Field.LABEL_OPTIONAL,
    }


def _add_file(
    name: str,
    package: str,
    messages: dict[str, list[dict[str, Any]]],
    dependencies: tuple[str, ...] = (),
) -> None:
    """Register a proto3 file with the given messages in the private pool."""
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=name,
        package=package,
        syntax="proto3",
        dependency=list(dependencies),
    )
    for message_name, fields in messages.items():
        message_proto = file_proto.message_type.add(name=message_name)
        for spec in fields:
            message_proto.field.add(**spec)
    _pool.AddSerializedFile(file_proto.SerializeToString())


_BYTES = _Field.TYPE_BYTES
_STRING = _Field.TYPE_STRING
_INT32 = _Field.TYPE_INT32
_UINT64 = _Field.TYPE_UINT64
_BOOL = _Field.TYPE_BOOL

_add_file(
    "msp/identities.proto",
    "msp",
    {
        "SerializedIdentity": [
            _scalar("mspid", 1, _STRING),
            _scalar("id_bytes", 2, _BYTES),
        ],
    },
)

_add_file(
    "common/common.proto",
    "common",
    {
        "Header": [
            _scalar("channel_header", 1, _BYTES),
            _scalar("signature_header", 2, _BYTES),
        ],
        "ChannelHeader": [
            _scalar("type", 1, _INT32),
            _scalar("version", 2, _INT32),
            _message("timestamp", 3, ".google.protobuf.Timestamp"),
            _scalar("channel_id", 4, _STRING),
            _scalar("tx_id", 5, _STRING),
            _scalar("epoch", 6, _UINT64),
            _scalar("extension", 7, _BYTES),
            _scalar("tls_cert_hash", 8, _BYTES),
        ],
        "SignatureHeader": [
            _scalar("creator", 1, _BYTES),
            _scalar("nonce", 2, _BYTES),
        ],
        "Payload": [
            _message("header", 1, ".common.Header"),
            _scalar("data", 2, _BYTES),
        ],
        "Envelope": [
            _scalar("payload", 1, _BYTES),
            _scalar("signature", 2, _BYTES),
        ],
    },
    dependencies=(_TIMESTAMP_FILE,),
)

_add_file(
    "peer/chaincode.proto",
    "protos",
    {
        "ChaincodeID": [
            _scalar("path", 1, _STRING),
            _scalar("name", 2, _STRING),
            _scalar("version", 3, _STRING),
        ],
        "ChaincodeInput": [
            _scalar("args", 1, _BYTES, repeated=True),
            _scalar("is_init", 3, _BOOL),
        ],
        "ChaincodeSpec": [
            _scalar("type", 1, _INT32),
            _message("chaincode_id", 2, ".protos.ChaincodeID"),
            _message("input", 3, ".protos.ChaincodeInput"),
            _scalar("timeout", 4, _INT32),
        ],
        "ChaincodeInvocationSpec": [
            _message("chaincode_spec", 1, ".protos.ChaincodeSpec"),
        ],
    },
)

_add_file(
    "peer/proposal.proto",
    "protos",
    {
        "SignedProposal": [
            _scalar("proposal_bytes", 1, _BYTES),
            _scalar("signature", 2, _BYTES),
        ],
        "Proposal": [
            _scalar("header", 1, _BYTES),
            _scalar("payload", 2, _BYTES),
            _scalar("extension", 3, _BYTES),
        ],
        "ChaincodeHeaderExtension": [
            _message("chaincode_id", 2, ".protos.ChaincodeID"),
        ],
        "ChaincodeProposalPayload": [
            _scalar("input", 1, _BYTES),
        ],
    },
    dependencies=("peer/chaincode.proto",),
)

_add_file(
    "peer/proposal_response.proto",
    "protos",
    {
        "Response": [
            _scalar("status", 1, _INT32),
            _scalar("message", 2, _STRING),
            _scalar("payload", 3, _BYTES),
        ],
        "ProposalResponsePayload": [
            _scalar("proposal_hash", 1, _BYTES),
            _scalar("extension", 2, _BYTES),
        ],
    },
)

_add_file(
    "peer/transaction.proto",
    "protos",
    {
        "Transaction": [
            _message("actions", 1, ".protos.TransactionAction", repeated=True),
        ],
        "TransactionAction": [
            _scalar("header", 1, _BYTES),
            _scalar("payload", 2, _BYTES),
        ],
        "ChaincodeActionPayload": [
            _scalar("chaincode_proposal_payload", 1, _BYTES),
            _message("action", 2, ".protos.ChaincodeEndorsedAction"),
        ],
        "ChaincodeEndorsedAction": [
            _scalar("proposal_response_payload", 1, _BYTES),
        ],
        "ChaincodeAction": [
            _scalar("results", 1, _BYTES),
            _scalar("events", 2, _BYTES),
            _message("response", 3, ".protos.Response"),
        ],
    },
    dependencies=("peer/proposal_response.proto",),
)

_add_file(
    "gateway/gateway.proto",
    "gateway",
    {
        "EndorseRequest": [
            _scalar("transaction_id", 1, _STRING),
            _scalar("channel_id", 2, _STRING),
            _message("proposed_transaction", 3, ".protos.SignedProposal"),
            _scalar("endorsing_organizations", 4, _STRING, repeated=True),
        ],
        "EndorseResponse": [
            _message("prepared_transaction", 1, ".common.Envelope"),
        ],
        "SubmitRequest": [
            _scalar("transaction_id", 1, _STRING),
            _scalar("channel_id", 2, _STRING),
            _message("prepared_transaction", 3, ".common.Envelope"),
        ],
        "SubmitResponse": [],
        "SignedCommitStatusRequest": [
            _scalar("request", 1, _BYTES),
            _scalar("signature", 2, _BYTES),
        ],
        "CommitStatusRequest": [
            _scalar("transaction_id", 1, _STRING),
            _scalar("channel_id", 2, _STRING),
            _scalar("identity", 3, _BYTES),
        ],
        "CommitStatusResponse": [
            _scalar("result", 1, _INT32),
            _scalar("block_number", 2, _UINT64),
        ],
        "EvaluateRequest": [
            _scalar("transaction_id", 1, _STRING),
            _scalar("channel_id", 2, _STRING),
            _message("proposed_transaction", 3, ".protos.SignedProposal"),
            _scalar("target_organizations", 4, _STRING, repeated=True),
        ],
        "EvaluateResponse": [
            _message("result", 1, ".protos.Response"),
        ],
    },
    dependencies=(
        "common/common.proto",
        "peer/proposal.proto",
        "peer/proposal_response.proto",
    ),
)


def _get(full_name: str) -> Any:
    return GetMessageClass(_pool.FindMessageTypeByName(full_name))


# msp
SerializedIdentity = _get("msp.SerializedIdentity")

# common
Header = _get("common.Header")
ChannelHeader = _get("common.ChannelHeader")
SignatureHeader = _get("common.SignatureHeader")
Payload = _get("common.Payload")
Envelope = _get("common.Envelope")

# peer
ChaincodeID = _get("protos.ChaincodeID")
ChaincodeInput = _get("protos.ChaincodeInput")
ChaincodeSpec = _get("protos.ChaincodeSpec")
ChaincodeInvocationSpec = _get("protos.ChaincodeInvocationSpec")
SignedProposal = _get("protos.SignedProposal")
Proposal = _get("protos.Proposal")
ChaincodeHeaderExtension = _get("protos.ChaincodeHeaderExtension")
ChaincodeProposalPayload = _get("protos.ChaincodeProposalPayload")
Response = _get("protos.Response")
ProposalResponsePayload = _get("protos.ProposalResponsePayload")
Transaction = _get("protos.Transaction")
TransactionAction = _get("protos.TransactionAction")
ChaincodeActionPayload = _get("protos.ChaincodeActionPayload")
ChaincodeEndorsedAction = _get("protos.ChaincodeEndorsedAction")
ChaincodeAction = _get("protos.ChaincodeAction")

# gateway
EndorseRequest = _get("gateway.EndorseRequest")
EndorseResponse = _get("gateway.EndorseResponse")
SubmitRequest = _get("gateway.SubmitRequest")
SubmitResponse = _get("gateway.SubmitResponse")
SignedCommitStatusRequest = _get("gateway.SignedCommitStatusRequest")
CommitStatusRequest = _get("gateway.CommitStatusRequest")
CommitStatusResponse = _get("gateway.CommitStatusResponse")
EvaluateRequest = _get("gateway.EvaluateRequest")
EvaluateResponse = _get("gateway.EvaluateResponse")


class HeaderType(IntEnum):
    """common.HeaderType values used by the client."""

    MESSAGE = 0
    CONFIG = 1
    CONFIG_UPDATE = 2
    ENDORSER_TRANSACTION = 3


class TxValidationCode(IntEnum):
    """protos.TxValidationCode as reported by CommitStatus."""

    VALID = 0
    NIL_ENVELOPE = 1
    BAD_PAYLOAD = 2
    BAD_COMMON_HEADER = 3
    BAD_CREATOR_SIGNATURE = 4
    INVALID_ENDORSER_TRANSACTION = 5
    INVALID_CONFIG_TRANSACTION = 6
    UNSUPPORTED_TX_PAYLOAD = 7
    BAD_PROPOSAL_TXID = 8
    DUPLICATE_TXID = 9
    ENDORSEMENT_POLICY_FAILURE = 10
    MVCC_READ_CONFLICT = 11
    PHANTOM_READ_CONFLICT = 12
    UNKNOWN_TX_TYPE = 13
    TARGET_CHAIN_NOT_FOUND = 14
    MARSHAL_TX_ERROR = 15
    NIL_TXACTION = 16
    EXPIRED_CHAINCODE = 17
    CHAINCODE_VERSION_CONFLICT = 18
    BAD_HEADER_EXTENSION = 19
    BAD_CHANNEL_HEADER = 20
    BAD_RESPONSE_PAYLOAD = 21
    BAD_RWSET = 22
    ILLEGAL_WRITESET = 23
    INVALID_WRITESET = 24
    INVALID_CHAINCODE = 25
    NOT_VALIDATED = 254
    INVALID_OTHER_REASON = 255

    @classmethod
    def name_of(cls, value: int) -> str:
        try:
            return cls(value).name
        except ValueError:
            return f"UNKNOWN_{value}"


__all__ = [
    "SerializedIdentity",
    "Header",
    "ChannelHeader",
    "SignatureHeader",
    "Payload",
    "Envelope",
    "ChaincodeID",
    "ChaincodeInput",
    "ChaincodeSpec",
    "ChaincodeInvocationSpec",
    "SignedProposal",
    "Proposal",
    "ChaincodeHeaderExtension",
    "ChaincodeProposalPayload",
    "Response",
    "ProposalResponsePayload",
    "Transaction",
    "TransactionAction",
    "ChaincodeActionPayload",
    "ChaincodeEndorsedAction",
    "ChaincodeAction",
    "EndorseRequest",
    "EndorseResponse",
    "SubmitRequest",
    "SubmitResponse",
    "SignedCommitStatusRequest",
    "CommitStatusRequest",
    "CommitStatusResponse",
    "EvaluateRequest",
    "EvaluateResponse",
    "HeaderType",
    "TxValidationCode",
]
