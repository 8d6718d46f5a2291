"""
Shared fixtures: throwaway EC keys and self-signed certificates.
"""

import datetime

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from ledger_gateway import protos


def make_key(curve: ec.EllipticCurve | None = None) -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(curve or ec.SECP256R1())


def make_certificate(key: ec.EllipticCurvePrivateKey, common_name: str = "User1@org1.example.com"):
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(key, hashes.SHA256())
    )


def key_pem(key: ec.EllipticCurvePrivateKey) -> bytes:
    return key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )


def cert_pem(certificate) -> bytes:
    return certificate.public_bytes(serialization.Encoding.PEM)


@pytest.fixture
def private_key():
    """Fresh P-256 private key."""
    return make_key()


@pytest.fixture
def certificate(private_key):
    """Self-signed certificate for private_key."""
    return make_certificate(private_key)


@pytest.fixture
def msp_dir(tmp_path, private_key, certificate):
    """MSP-like layout: signcerts/cert.pem, keystore/<key>_sk, tls/ca.crt."""
    signcerts = tmp_path / "signcerts"
    keystore = tmp_path / "keystore"
    tls = tmp_path / "tls"
    for d in (signcerts, keystore, tls):
        d.mkdir()

    (signcerts / "cert.pem").write_bytes(cert_pem(certificate))
    (keystore / "priv_sk").write_bytes(key_pem(private_key))
    (tls / "ca.crt").write_bytes(cert_pem(certificate))
    return tmp_path


def make_prepared_transaction(result: bytes):
    """Build an envelope shaped like an Endorse response carrying result."""
    chaincode_action = protos.ChaincodeAction(
        response=protos.Response(status=200, payload=result)
    )
    response_payload = protos.ProposalResponsePayload(
        extension=chaincode_action.SerializeToString()
    )
    action_payload = protos.ChaincodeActionPayload(
        action=protos.ChaincodeEndorsedAction(
            proposal_response_payload=response_payload.SerializeToString()
        )
    )
    transaction = protos.Transaction(
        actions=[protos.TransactionAction(payload=action_payload.SerializeToString())]
    )
    payload = protos.Payload(data=transaction.SerializeToString())
    return protos.Envelope(payload=payload.SerializeToString())
