"""
Hash algorithm lookup and certificate digests.

Provides the digest primitive used for ESSCertID/ESSCertIDv2 comparisons and a
per-certificate memoizer so a certificate is hashed at most once per algorithm
while it is matched against several attribute records.
"""

from __future__ import annotations

import hashlib
import logging
from enum import Enum
from typing import Any

from cryptography import x509
from cryptography.hazmat.primitives import serialization

from package_signing import oids
from package_signing.exceptions import UnsupportedHashAlgorithmError

logger = logging.getLogger(__name__)


class HashAlgorithmName(Enum):
    """Hash algorithms usable in signing certificate attributes."""

    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"


# Algorithm OID mappings
ALGORITHM_OID_MAP: dict[str, HashAlgorithmName] = {
    oids.SHA1: HashAlgorithmName.SHA1,
    oids.SHA256: HashAlgorithmName.SHA256,
    oids.SHA384: HashAlgorithmName.SHA384,
    oids.SHA512: HashAlgorithmName.SHA512,
}

_HASH_FUNCTIONS: dict[HashAlgorithmName, Any] = {
    HashAlgorithmName.SHA1: hashlib.sha1,
    HashAlgorithmName.SHA256: hashlib.sha256,
    HashAlgorithmName.SHA384: hashlib.sha384,
    HashAlgorithmName.SHA512: hashlib.sha512,
}


def oid_to_hash_algorithm_name(oid: str) -> HashAlgorithmName:
    """
    Map a digest algorithm OID to its hash algorithm name.

    Raises:
        UnsupportedHashAlgorithmError: If the OID is not a supported digest algorithm
    """
    try:
        return ALGORITHM_OID_MAP[oid]
    except KeyError:
        raise UnsupportedHashAlgorithmError(oid) from None


def compute_digest(data: bytes, algorithm: HashAlgorithmName) -> bytes:
    """Compute the digest of ``data`` with ``algorithm``."""
    return _HASH_FUNCTIONS[algorithm](data).digest()


def get_certificate_hash(certificate: x509.Certificate, algorithm: HashAlgorithmName) -> bytes:
    """Compute the digest of a certificate's DER encoding."""
    return compute_digest(certificate.public_bytes(serialization.Encoding.DER), algorithm)


class CertificateHashMemoizer:
    """
    Caches the digests of one certificate, keyed by hash algorithm.

    Create one instance per certificate entering the matching phase and drop
    it once that certificate has been checked; instances are never shared
    across validation calls.
    """

    def __init__(self, certificate: x509.Certificate) -> None:
        self._certificate = certificate
        self._hashes: dict[HashAlgorithmName, bytes] = {}

    def get_hash(self, hash_algorithm_oid: str) -> bytes:
        """Return the certificate digest for the given digest algorithm OID."""
        algorithm = oid_to_hash_algorithm_name(hash_algorithm_oid)

        cached = self._hashes.get(algorithm)
        if cached is not None:
            return cached

        digest = get_certificate_hash(self._certificate, algorithm)
        self._hashes[algorithm] = digest
        logger.debug("Computed %s certificate hash", algorithm.value)
        return digest
