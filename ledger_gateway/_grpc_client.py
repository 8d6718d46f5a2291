"""
Internal gRPC client for the Fabric Gateway service.

This module provides the low-level gRPC communication layer: one typed
unary call per Gateway RPC, each bounded by a caller supplied timeout.
It is internal to the package; users should go through Gateway/Contract.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import grpc
from grpc import aio as grpc_aio

from . import protos
from .errors import (
    CommitStatusError,
    EndorseError,
    EvaluateError,
    SubmitError,
    TransactionError,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "gateway.Gateway"


def _method(name: str) -> str:
    return f"/{SERVICE_NAME}/{name}"


class GatewayStub:
    """Client stub for the gateway.Gateway service."""

    def __init__(self, channel: grpc_aio.Channel) -> None:
        self.Evaluate = channel.unary_unary(
            _method("Evaluate"),
            request_serializer=protos.EvaluateRequest.SerializeToString,
            response_deserializer=protos.EvaluateResponse.FromString,
        )
        self.Endorse = channel.unary_unary(
            _method("Endorse"),
            request_serializer=protos.EndorseRequest.SerializeToString,
            response_deserializer=protos.EndorseResponse.FromString,
        )
        self.Submit = channel.unary_unary(
            _method("Submit"),
            request_serializer=protos.SubmitRequest.SerializeToString,
            response_deserializer=protos.SubmitResponse.FromString,
        )
        self.CommitStatus = channel.unary_unary(
            _method("CommitStatus"),
            request_serializer=protos.SignedCommitStatusRequest.SerializeToString,
            response_deserializer=protos.CommitStatusResponse.FromString,
        )


class GrpcClient:
    """Internal gRPC client for the Gateway service.

    Wraps a channel owned by the caller and converts grpc.RpcError into
    the package's TransactionError subclasses.
    """

    def __init__(self, channel: grpc_aio.Channel) -> None:
        self._channel = channel
        self._stub = GatewayStub(channel)

    async def close(self) -> None:
        await self._channel.close()
        logger.debug("Gateway channel closed")

    async def _call(
        self,
        rpc: Callable[..., Any],
        request: Any,
        timeout: float,
        transaction_id: str,
        error_type: type[TransactionError],
        action: str,
    ) -> Any:
        try:
            return await rpc(request, timeout=timeout)
        except grpc.RpcError as e:
            status = e.code().name if e.code() is not None else None
            raise error_type(
                f"failed to {action} transaction {transaction_id}: "
                f"rpc error: code = {status} desc = {e.details()}",
                transaction_id=transaction_id,
                status=status,
            ) from e

    async def evaluate(self, request: Any, timeout: float) -> Any:
        return await self._call(
            self._stub.Evaluate,
            request,
            timeout,
            request.transaction_id,
            EvaluateError,
            "evaluate",
        )

    async def endorse(self, request: Any, timeout: float) -> Any:
        return await self._call(
            self._stub.Endorse,
            request,
            timeout,
            request.transaction_id,
            EndorseError,
            "endorse",
        )

    async def submit(self, request: Any, timeout: float) -> Any:
        return await self._call(
            self._stub.Submit,
            request,
            timeout,
            request.transaction_id,
            SubmitError,
            "submit",
        )

    async def commit_status(self, request: Any, transaction_id: str, timeout: float) -> Any:
        return await self._call(
            self._stub.CommitStatus,
            request,
            timeout,
            transaction_id,
            CommitStatusError,
            "obtain commit status for",
        )
