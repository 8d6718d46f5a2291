"""
Ledger gateway client - Python client for the Fabric Gateway service.

This package provides:
- Identity loading (X.509 certificate, private key signer)
- Gateway session over a gRPC channel
- Network and Contract handles
- Transaction evaluation and submission

Example:
    >>> from ledger_gateway import Gateway, X509Identity, load_certificate
    >>>
    >>> identity = X509Identity("Org1MSP", load_certificate(cert_path))
    >>> sign = new_private_key_sign(load_private_key_from_dir(key_dir))
    >>> gateway = Gateway.connect(identity, sign, channel)
    >>> contract = gateway.get_network("mychannel").get_contract("basic")
    >>> await contract.evaluate_transaction("ReadAsset", "dealer-1")

Invariants:
    - All requests are signed with the gateway identity's private key
    - Errors raised by the package inherit from GatewayError

Version: 1.0.0
"""

__version__ = "1.0.0"

from .client import Contract, Gateway, Network, Proposal, Status, Timeouts
from .errors import (
    CommitError,
    CommitStatusError,
    CredentialError,
    EndorseError,
    EvaluateError,
    GatewayConnectionError,
    GatewayError,
    SubmitError,
    TransactionError,
)
from .identity import (
    PrivateKeySigner,
    Sign,
    X509Identity,
    certificate_from_pem,
    load_certificate,
    load_private_key,
    load_private_key_from_dir,
    new_private_key_sign,
    private_key_from_pem,
)

__all__ = [
    # Version
    "__version__",
    # Client
    "Gateway",
    "Network",
    "Contract",
    "Proposal",
    "Status",
    "Timeouts",
    # Identity
    "X509Identity",
    "PrivateKeySigner",
    "Sign",
    "certificate_from_pem",
    "load_certificate",
    "load_private_key",
    "load_private_key_from_dir",
    "new_private_key_sign",
    "private_key_from_pem",
    # Errors
    "GatewayError",
    "CredentialError",
    "GatewayConnectionError",
    "TransactionError",
    "EvaluateError",
    "EndorseError",
    "SubmitError",
    "CommitStatusError",
    "CommitError",
]
