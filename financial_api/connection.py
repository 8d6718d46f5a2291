"""
Gateway connection setup for the Financial API.

Loads the client credentials, opens a TLS gRPC channel to the gateway peer
and resolves the contract used by the HTTP handlers.
"""

from __future__ import annotations

import asyncio
import logging

import grpc
from cryptography.hazmat.primitives import serialization
from grpc import aio as grpc_aio

from ledger_gateway import (
    Contract,
    Gateway,
    GatewayConnectionError,
    Sign,
    X509Identity,
    load_certificate,
    load_private_key_from_dir,
    new_private_key_sign,
)

from .config import Settings

logger = logging.getLogger(__name__)


def new_identity(settings: Settings) -> X509Identity:
    """Client identity from the configured certificate."""
    return X509Identity(settings.msp_id, load_certificate(settings.cert_path))


def new_sign(settings: Settings) -> Sign:
    """Signing function from the key in the configured keystore directory."""
    return new_private_key_sign(load_private_key_from_dir(settings.key_path))


def new_grpc_channel(settings: Settings) -> grpc_aio.Channel:
    """Create a TLS channel that trusts only the configured root CA."""
    tls_certificate = load_certificate(settings.tls_cert_path)
    credentials = grpc.ssl_channel_credentials(
        root_certificates=tls_certificate.public_bytes(serialization.Encoding.PEM),
    )
    return grpc_aio.secure_channel(
        settings.peer_endpoint,
        credentials,
        options=[
            ("grpc.ssl_target_name_override", settings.gateway_peer),
            ("grpc.default_authority", settings.gateway_peer),
        ],
    )


async def wait_for_ready(channel: grpc_aio.Channel, settings: Settings) -> None:
    """Block until the channel is connected, or fail after connect_timeout."""
    try:
        await asyncio.wait_for(channel.channel_ready(), timeout=settings.connect_timeout)
    except asyncio.TimeoutError as e:
        raise GatewayConnectionError(
            f"failed to connect to gateway peer {settings.peer_endpoint} "
            f"({settings.gateway_peer}) within {settings.connect_timeout}s",
            address=settings.peer_endpoint,
        ) from e


async def open_gateway(settings: Settings) -> Gateway:
    """Load credentials, connect and open the gateway session.

    Raises:
        CredentialError: If a certificate or the private key cannot be loaded
        GatewayConnectionError: If the peer cannot be reached
    """
    identity = new_identity(settings)
    sign = new_sign(settings)
    channel = new_grpc_channel(settings)

    logger.info(
        f"Connecting to gateway peer {settings.peer_endpoint} as {settings.gateway_peer}"
    )
    try:
        await wait_for_ready(channel, settings)
    except GatewayConnectionError:
        await channel.close()
        raise

    return Gateway.connect(
        identity,
        sign,
        channel,
        evaluate_timeout=settings.evaluate_timeout,
        endorse_timeout=settings.endorse_timeout,
        submit_timeout=settings.submit_timeout,
        commit_status_timeout=settings.commit_status_timeout,
    )


def get_contract(gateway: Gateway, settings: Settings) -> Contract:
    """Resolve the configured channel and chaincode."""
    contract = gateway.get_network(settings.channel_name).get_contract(settings.chaincode_name)
    logger.info(f"Using chaincode {settings.chaincode_name} on channel {settings.channel_name}")
    return contract
