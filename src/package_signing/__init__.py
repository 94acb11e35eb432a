"""
Signing-certificate binding for package signatures.

Resolves the certificate chain of a CMS SignedData package signature (or of
its RFC 3161 timestamp) and proves that the chain is the one committed to by
the signed ESS signing-certificate attributes.
"""

from .config import SigningConfig, SigningSpecifications, load_config
from .exceptions import (
    ChainBuildingFailedError,
    InvalidSignatureError,
    NoCertificateError,
    SignatureError,
    SignatureLogCode,
    TimestampMissingError,
)
from .signing import (
    get_signing_certificates,
    resolve_primary_signing_certificates,
    resolve_timestamp_signing_certificates,
)

__version__ = "0.1.0"

__all__ = [
    "ChainBuildingFailedError",
    "InvalidSignatureError",
    "NoCertificateError",
    "SignatureError",
    "SignatureLogCode",
    "SigningConfig",
    "SigningSpecifications",
    "TimestampMissingError",
    "get_signing_certificates",
    "load_config",
    "resolve_primary_signing_certificates",
    "resolve_timestamp_signing_certificates",
]
