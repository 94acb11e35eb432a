"""
In-memory representation of a parsed package signature.

These objects are produced by the CMS parser and consumed read-only by the
signing certificate resolution code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from cryptography import x509


class SignatureType(Enum):
    """Signature types derived from the commitment-type-indication attribute."""

    AUTHOR = "author"
    REPOSITORY = "repository"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SignedAttribute:
    """A signed attribute: dotted OID plus the DER encoding of each value."""

    oid: str
    values: tuple[bytes, ...] = ()


@dataclass(frozen=True)
class SignerInfo:
    """The signer of a signature and its signed attributes."""

    certificate: x509.Certificate | None
    signed_attributes: tuple[SignedAttribute, ...] = ()

    def signed_attributes_with_oid(self, oid: str) -> list[SignedAttribute]:
        """Return the signed attributes with the given OID, in order."""
        return [attribute for attribute in self.signed_attributes if attribute.oid == oid]


@dataclass(frozen=True)
class Signature:
    """
    A single signature over a package.

    ``certificates`` is the certificate store embedded in the SignedData; it is
    not necessarily in chain order. ``timestamps`` holds the timestamp
    signatures countersigning this signature.
    """

    certificates: tuple[x509.Certificate, ...]
    signer_info: SignerInfo
    timestamps: tuple[Signature, ...] = field(default=())
