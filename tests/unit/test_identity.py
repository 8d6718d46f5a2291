"""
Unit tests for credential loading and signing.

Tests cover:
- Certificate loading
- Keystore directory policy
- X509Identity serialization
- Low-S ECDSA signatures
"""

import hashlib

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed, decode_dss_signature

from ledger_gateway import protos
from ledger_gateway.errors import CredentialError
from ledger_gateway.identity import (
    PrivateKeySigner,
    X509Identity,
    load_certificate,
    load_private_key,
    load_private_key_from_dir,
)
from tests.conftest import cert_pem, key_pem, make_key

P256_ORDER = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551


class TestLoadCertificate:
    """Tests for certificate loading."""

    def test_load_valid_certificate(self, msp_dir, certificate):
        """PEM certificate round-trips."""
        loaded = load_certificate(msp_dir / "signcerts" / "cert.pem")
        assert loaded == certificate

    def test_missing_file(self, tmp_path):
        """Missing file raises CredentialError with the path."""
        path = tmp_path / "nope.pem"
        with pytest.raises(CredentialError) as exc_info:
            load_certificate(path)
        assert exc_info.value.path == str(path)
        assert "failed to read certificate file" in str(exc_info.value)

    def test_not_pem(self, tmp_path):
        """Garbage content raises CredentialError."""
        path = tmp_path / "cert.pem"
        path.write_text("not a certificate")
        with pytest.raises(CredentialError):
            load_certificate(path)


class TestLoadPrivateKey:
    """Tests for private key loading."""

    def test_load_single_key(self, msp_dir, private_key):
        """The only key in the keystore is loaded."""
        loaded = load_private_key_from_dir(msp_dir / "keystore")
        assert loaded.private_numbers() == private_key.private_numbers()

    def test_missing_directory(self, tmp_path):
        """Missing keystore directory raises CredentialError."""
        with pytest.raises(CredentialError):
            load_private_key_from_dir(tmp_path / "keystore")

    def test_empty_directory(self, tmp_path):
        """Empty keystore raises CredentialError."""
        (tmp_path / "keystore").mkdir()
        with pytest.raises(CredentialError) as exc_info:
            load_private_key_from_dir(tmp_path / "keystore")
        assert "no usable private key" in str(exc_info.value)

    def test_skips_unusable_files(self, tmp_path, private_key, certificate):
        """Non-key files and hidden files are ignored."""
        keystore = tmp_path / "keystore"
        keystore.mkdir()
        (keystore / "a_readme.txt").write_text("hello")
        (keystore / "b_cert.pem").write_bytes(cert_pem(certificate))
        (keystore / ".hidden_sk").write_bytes(key_pem(make_key()))
        (keystore / "c_sk").write_bytes(key_pem(private_key))

        loaded = load_private_key_from_dir(keystore)
        assert loaded.private_numbers() == private_key.private_numbers()

    def test_more_than_one_key(self, tmp_path):
        """Two usable keys are ambiguous and rejected."""
        keystore = tmp_path / "keystore"
        keystore.mkdir()
        (keystore / "one_sk").write_bytes(key_pem(make_key()))
        (keystore / "two_sk").write_bytes(key_pem(make_key()))

        with pytest.raises(CredentialError) as exc_info:
            load_private_key_from_dir(keystore)
        assert "more than one private key" in str(exc_info.value)

    def test_unsupported_curve(self, tmp_path):
        """Keys on curves the ledger does not use are rejected."""
        path = tmp_path / "key_sk"
        path.write_bytes(key_pem(make_key(ec.SECP521R1())))
        with pytest.raises(CredentialError):
            load_private_key(path)


class TestX509Identity:
    """Tests for X509Identity."""

    def test_serialize(self, certificate):
        """Serialized identity carries MSP ID and PEM certificate."""
        identity = X509Identity("Org1MSP", certificate)

        decoded = protos.SerializedIdentity.FromString(identity.serialize())

        assert decoded.mspid == "Org1MSP"
        assert decoded.id_bytes == cert_pem(certificate)
        assert identity.credentials == cert_pem(certificate)

    def test_empty_msp_id(self, certificate):
        """Empty MSP ID is rejected."""
        with pytest.raises(CredentialError):
            X509Identity("", certificate)


class TestPrivateKeySigner:
    """Tests for PrivateKeySigner."""

    def test_signature_verifies(self, private_key):
        """Signature verifies against the public key."""
        signer = PrivateKeySigner(private_key)
        digest = hashlib.sha256(b"proposal bytes").digest()

        signature = signer(digest)

        private_key.public_key().verify(
            signature, digest, ec.ECDSA(Prehashed(hashes.SHA256()))
        )

    def test_signature_is_low_s(self, private_key):
        """S is always in the lower half of the group order."""
        signer = PrivateKeySigner(private_key)
        for i in range(20):
            digest = hashlib.sha256(f"message {i}".encode()).digest()
            _, s = decode_dss_signature(signer(digest))
            assert s <= P256_ORDER // 2

    def test_rejects_bad_digest_length(self, private_key):
        """Digest length must match a supported hash."""
        signer = PrivateKeySigner(private_key)
        with pytest.raises(ValueError):
            signer(b"short")
