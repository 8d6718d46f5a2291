"""
Error types for the ledger gateway client.

This module defines all exception types raised by the client:
- GatewayError: Base exception
- CredentialError: Certificate or private key could not be loaded
- GatewayConnectionError: Channel to the gateway peer could not be opened
- EvaluateError / EndorseError / SubmitError / CommitStatusError:
  a Gateway RPC failed
- CommitError: Transaction committed with a non-VALID validation code

Invariants:
    - All errors inherit from GatewayError
    - RPC errors carry the transaction ID and gRPC status code
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class GatewayError(Exception):
    """Base exception for all ledger gateway errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "GATEWAY_ERROR"
        self.details = details or {}


class CredentialError(GatewayError):
    """Identity material could not be loaded.

    Raised when:
    - Certificate or key file is missing or unreadable
    - File content is not valid PEM
    - Keystore directory holds no usable key, or more than one
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(
            message,
            code="CREDENTIAL_ERROR",
            details={"path": path},
        )
        self.path = path


class GatewayConnectionError(GatewayError):
    """Failed to connect to the gateway peer."""

    def __init__(self, message: str, address: Optional[str] = None) -> None:
        super().__init__(
            message,
            code="CONNECTION_ERROR",
            details={"address": address},
        )
        self.address = address


class TransactionError(GatewayError):
    """A Gateway RPC for a transaction failed.

    Attributes:
        transaction_id: ID of the transaction the call was made for
        status: gRPC status code name, if the failure came from gRPC
    """

    code_name = "TRANSACTION_ERROR"

    def __init__(
        self,
        message: str,
        transaction_id: str,
        status: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code=self.code_name,
            details={"transaction_id": transaction_id, "status": status},
        )
        self.transaction_id = transaction_id
        self.status = status


class EvaluateError(TransactionError):
    """Evaluate RPC failed."""

    code_name = "EVALUATE_ERROR"


class EndorseError(TransactionError):
    """Endorse RPC failed."""

    code_name = "ENDORSE_ERROR"


class SubmitError(TransactionError):
    """Submit RPC failed."""

    code_name = "SUBMIT_ERROR"


class CommitStatusError(TransactionError):
    """CommitStatus RPC failed."""

    code_name = "COMMIT_STATUS_ERROR"


class CommitError(GatewayError):
    """Transaction was committed but failed validation.

    Attributes:
        transaction_id: ID of the invalidated transaction
        validation_code: Numeric validation code reported by the peer
        block_number: Block containing the transaction
    """

    def __init__(
        self,
        transaction_id: str,
        validation_code: int,
        code_name: str,
        block_number: int,
    ) -> None:
        super().__init__(
            f"transaction {transaction_id} failed to commit with status code "
            f"{validation_code} ({code_name})",
            code="COMMIT_ERROR",
            details={
                "transaction_id": transaction_id,
                "validation_code": validation_code,
                "block_number": block_number,
            },
        )
        self.transaction_id = transaction_id
        self.validation_code = validation_code
        self.block_number = block_number
