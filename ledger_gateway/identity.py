"""
Client identity and signing for the ledger gateway.

This module provides:
- load_certificate: PEM X.509 certificate from a file
- X509Identity: MSP ID plus certificate, serialized as the transaction creator
- load_private_key_from_dir: private key from a keystore directory
- PrivateKeySigner: ECDSA signer over precomputed digests

Invariants:
    - Signatures are DER encoded with low-S normalisation
    - A keystore directory yields exactly one private key
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Union

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    Prehashed,
    decode_dss_signature,
    encode_dss_signature,
)

from . import protos
from .errors import CredentialError

logger = logging.getLogger(__name__)

# Signs a message digest and returns the signature bytes.
Sign = Callable[[bytes], bytes]

PathLike = Union[str, Path]

# Group orders of the curves used by the ledger's MSPs.
_CURVE_ORDERS = {
    "secp256r1": 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
    "secp384r1": int(
        "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF"
        "C7634D81F4372DDF581A0DB248B0A77AECEC196ACCC52973",
        16,
    ),
}


def _read_file(path: PathLike, what: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise CredentialError(f"failed to read {what} file: {e}", path=str(path)) from e


def certificate_from_pem(data: bytes) -> x509.Certificate:
    """Parse a PEM encoded X.509 certificate."""
    try:
        return x509.load_pem_x509_certificate(data)
    except ValueError as e:
        raise CredentialError(f"failed to parse certificate PEM: {e}") from e


def load_certificate(path: PathLike) -> x509.Certificate:
    """Load a PEM encoded X.509 certificate from a file."""
    data = _read_file(path, "certificate")
    try:
        return certificate_from_pem(data)
    except CredentialError as e:
        raise CredentialError(f"{e.message} ({path})", path=str(path)) from e


def private_key_from_pem(data: bytes) -> ec.EllipticCurvePrivateKey:
    """Parse an unencrypted PEM private key. Only EC keys are supported."""
    try:
        key = serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise CredentialError(f"failed to parse private key PEM: {e}") from e

    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise CredentialError(f"unsupported private key type: {type(key).__name__}")
    if key.curve.name not in _CURVE_ORDERS:
        raise CredentialError(f"unsupported elliptic curve: {key.curve.name}")
    return key


def load_private_key(path: PathLike) -> ec.EllipticCurvePrivateKey:
    """Load a PEM private key from a file."""
    data = _read_file(path, "private key")
    try:
        return private_key_from_pem(data)
    except CredentialError as e:
        raise CredentialError(f"{e.message} ({path})", path=str(path)) from e


def load_private_key_from_dir(directory: PathLike) -> ec.EllipticCurvePrivateKey:
    """Load the single private key held in a keystore directory.

    Regular, non-hidden files are examined in name order. Files that do not
    parse as a supported private key are skipped. Exactly one usable key
    must remain.

    Args:
        directory: Keystore directory (e.g. an MSP ``keystore`` folder)

    Returns:
        The private key

    Raises:
        CredentialError: If the directory cannot be listed, or holds zero or
            more than one usable key
    """
    keystore = Path(directory)
    try:
        entries = sorted(
            entry
            for entry in keystore.iterdir()
            if entry.is_file() and not entry.name.startswith(".")
        )
    except OSError as e:
        raise CredentialError(
            f"failed to read keystore directory: {e}", path=str(directory)
        ) from e

    found: list[tuple[Path, ec.EllipticCurvePrivateKey]] = []
    for entry in entries:
        try:
            found.append((entry, load_private_key(entry)))
        except CredentialError as e:
            logger.warning(f"Skipping keystore entry {entry.name}: {e.message}")

    if not found:
        raise CredentialError(
            f"no usable private key found in keystore directory {keystore}",
            path=str(directory),
        )
    if len(found) > 1:
        names = ", ".join(path.name for path, _ in found)
        raise CredentialError(
            f"keystore directory {keystore} holds more than one private key: {names}",
            path=str(directory),
        )

    path, key = found[0]
    logger.debug(f"Loaded private key from {path}")
    return key


class X509Identity:
    """Client identity: an MSP ID and an X.509 certificate.

    Attributes:
        msp_id: Membership service provider ID of the organisation
        certificate: Client certificate
    """

    def __init__(self, msp_id: str, certificate: x509.Certificate) -> None:
        if not msp_id:
            raise CredentialError("MSP ID must not be empty")
        self.msp_id = msp_id
        self.certificate = certificate

    @property
    def credentials(self) -> bytes:
        """PEM encoded certificate."""
        return self.certificate.public_bytes(serialization.Encoding.PEM)

    def serialize(self) -> bytes:
        """Serialized msp.SerializedIdentity used as the transaction creator."""
        return protos.SerializedIdentity(
            mspid=self.msp_id,
            id_bytes=self.credentials,
        ).SerializeToString()

    def __repr__(self) -> str:
        return f"X509Identity(msp_id={self.msp_id!r}, subject={self.certificate.subject.rfc4514_string()!r})"


class PrivateKeySigner:
    """ECDSA signer for precomputed digests.

    Instances are callable: ``signer(digest) -> signature``. The digest
    algorithm is inferred from the digest length (SHA-256 or SHA-384).
    """

    def __init__(self, private_key: ec.EllipticCurvePrivateKey) -> None:
        if private_key.curve.name not in _CURVE_ORDERS:
            raise CredentialError(f"unsupported elliptic curve: {private_key.curve.name}")
        self._private_key = private_key
        self._order = _CURVE_ORDERS[private_key.curve.name]

    def __call__(self, digest: bytes) -> bytes:
        if len(digest) == 32:
            algorithm: hashes.HashAlgorithm = hashes.SHA256()
        elif len(digest) == 48:
            algorithm = hashes.SHA384()
        else:
            raise ValueError(f"unsupported digest length: {len(digest)}")

        der = self._private_key.sign(digest, ec.ECDSA(Prehashed(algorithm)))
        r, s = decode_dss_signature(der)
        if s > self._order // 2:
            s = self._order - s
        return encode_dss_signature(r, s)


def new_private_key_sign(private_key: ec.EllipticCurvePrivateKey) -> Sign:
    """Create a signing function for the given private key."""
    return PrivateKeySigner(private_key)
