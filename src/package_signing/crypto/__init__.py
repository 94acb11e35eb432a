"""
Cryptographic collaborators for package signature validation.

Hashing, certificate chain building, CMS parsing and signed attribute readers.
"""

from .attribute_readers import (
    classify_commitment_type,
    read_signing_certificate,
    read_signing_certificate_v2,
)
from .chain_builder import CertificateChainBuilder, ChainBuilder
from .cms_parser import parse_cms
from .hashing import CertificateHashMemoizer, HashAlgorithmName, compute_digest

__all__ = [
    "CertificateChainBuilder",
    "CertificateHashMemoizer",
    "ChainBuilder",
    "HashAlgorithmName",
    "classify_commitment_type",
    "compute_digest",
    "parse_cms",
    "read_signing_certificate",
    "read_signing_certificate_v2",
]
