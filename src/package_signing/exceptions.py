"""
Exceptions raised while resolving package signing certificates.

Every failure carries a log code so that callers can tell apart identical
failure conditions reported for a primary signature and for its timestamp.
"""

from __future__ import annotations

from enum import Enum


class SignatureLogCode(str, Enum):
    """Diagnostic codes attached to signature errors."""

    NU3000 = "NU3000"  # Generic signing error
    NU3010 = "NU3010"  # Primary signature has no certificate
    NU3011 = "NU3011"  # Primary signature is invalid
    NU3018 = "NU3018"  # Primary signature chain building failed
    NU3020 = "NU3020"  # Timestamp signature has no certificate
    NU3021 = "NU3021"  # Timestamp signature is invalid
    NU3028 = "NU3028"  # Timestamp signature chain building failed
    NU3029 = "NU3029"  # Timestamp is missing


class SignatureError(Exception):
    """Base exception for all signature validation failures."""

    def __init__(self, code: SignatureLogCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NoCertificateError(SignatureError):
    """Raised when a signer does not carry a signing certificate."""


class InvalidSignatureError(SignatureError):
    """Raised for structural and policy violations in the signed attributes."""


class ChainBuildingFailedError(SignatureError):
    """Raised when no complete certificate chain could be built."""


class TimestampMissingError(SignatureError):
    """Raised when a timestamp was requested but the signature has none."""


class CmsParsingError(SignatureError):
    """Raised when a CMS SignedData blob cannot be turned into a signature."""

    def __init__(self, message: str, details: str | None = None) -> None:
        if details:
            message = f"{message}: {details}"
        super().__init__(SignatureLogCode.NU3000, message)


class AttributeReadError(ValueError):
    """Raised when a signed attribute value cannot be decoded."""


class UnsupportedHashAlgorithmError(ValueError):
    """Raised when an unsupported hash algorithm is encountered."""

    def __init__(self, algorithm: str) -> None:
        super().__init__(f"Unsupported hash algorithm: {algorithm}")
        self.algorithm = algorithm


class ConfigurationError(Exception):
    """Raised when there's an error loading configuration."""
