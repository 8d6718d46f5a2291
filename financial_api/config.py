"""
Configuration for the Financial API.

Uses pydantic-settings for environment variable loading. Defaults target
the Fabric test network's Org1 user; every value can be overridden with a
FINANCIAL_API_ prefixed environment variable.
"""

from pydantic import Field
from pydantic_settings import BaseSettings

CRYPTO_PATH = "/test-network/organizations/peerOrganizations/org1.example.com"


class Settings(BaseSettings):
    """Financial API configuration loaded from environment."""

    # Client identity
    msp_id: str = Field(default="Org1MSP", description="MSP ID of the client organisation")
    cert_path: str = Field(
        default=f"{CRYPTO_PATH}/users/User1@org1.example.com/msp/signcerts/cert.pem",
        description="Client certificate (PEM)",
    )
    key_path: str = Field(
        default=f"{CRYPTO_PATH}/users/User1@org1.example.com/msp/keystore/",
        description="Keystore directory holding the client private key",
    )
    tls_cert_path: str = Field(
        default=f"{CRYPTO_PATH}/peers/peer0.org1.example.com/tls/ca.crt",
        description="TLS root CA certificate of the gateway peer",
    )

    # Gateway peer
    peer_endpoint: str = Field(default="172.25.1.38:7051", description="Gateway peer host:port")
    gateway_peer: str = Field(
        default="peer0.org1.example.com",
        description="Server name expected in the peer's TLS certificate",
    )
    connect_timeout: float = Field(default=30.0, description="Channel ready timeout seconds")

    # Ledger targets
    channel_name: str = Field(default="mychannel", description="Channel name")
    chaincode_name: str = Field(default="basic", description="Chaincode name")

    # Gateway call timeouts (seconds)
    evaluate_timeout: float = Field(default=5.0)
    endorse_timeout: float = Field(default=15.0)
    submit_timeout: float = Field(default=5.0)
    commit_status_timeout: float = Field(default=60.0)

    # HTTP server
    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8080, description="Bind port")

    # Logging
    log_level: str = Field(default="INFO", description="DEBUG, INFO, WARNING, ERROR")
    log_format: str = Field(default="json", description="json or text")

    model_config = {"env_prefix": "FINANCIAL_API_"}
