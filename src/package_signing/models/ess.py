"""ESS signing certificate structures (RFC 2634 section 5.4, RFC 5035)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeneralName:
    """A general name; only the directory name choice is retained."""

    directory_name: str | None = None


@dataclass(frozen=True)
class IssuerSerial:
    """Issuer general names plus the DER integer contents of the serial number."""

    general_names: tuple[GeneralName, ...]
    serial_number: bytes


@dataclass(frozen=True)
class EssCertId:
    """ESSCertID: SHA-1 certificate hash and optional issuer/serial."""

    certificate_hash: bytes
    issuer_serial: IssuerSerial | None = None


@dataclass(frozen=True)
class EssCertIdV2:
    """ESSCertIDv2: hash algorithm, certificate hash and optional issuer/serial."""

    hash_algorithm_oid: str
    certificate_hash: bytes
    issuer_serial: IssuerSerial | None = None


@dataclass(frozen=True)
class SigningCertificate:
    """Value of the signing-certificate attribute."""

    certificates: tuple[EssCertId, ...]


@dataclass(frozen=True)
class SigningCertificateV2:
    """Value of the signing-certificate-v2 attribute."""

    certificates: tuple[EssCertIdV2, ...]
