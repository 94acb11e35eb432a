"""
Matching of certificate chains against ESSCertID and ESSCertIDv2 records.

References:
    "Certificate Identification", RFC 2634 section 5.4.1
    "ESS signing-certificate-v2 Attribute Definition", RFC 5126 section 5.7.3.2
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from cryptography import x509

from package_signing import messages
from package_signing.config import SigningSpecifications
from package_signing.crypto.hashing import (
    CertificateHashMemoizer,
    HashAlgorithmName,
    get_certificate_hash,
)
from package_signing.exceptions import ChainBuildingFailedError, InvalidSignatureError
from package_signing.models.ess import (
    EssCertId,
    EssCertIdV2,
    IssuerSerial,
    SigningCertificate,
    SigningCertificateV2,
)
from package_signing.signing.errors_context import SignatureErrors

logger = logging.getLogger(__name__)


def get_signing_certificates_v1(
    chain: Sequence[x509.Certificate] | None,
    signing_certificate: SigningCertificate,
    errors: SignatureErrors,
) -> list[x509.Certificate]:
    """
    Bind a chain to a signing-certificate attribute.

    Only the leaf is checked against the first ESSCertID; the remaining chain
    certificates are accepted as built.

    Raises:
        ChainBuildingFailedError: If the chain is missing or empty
        InvalidSignatureError: If the leaf does not match the first ESSCertID
    """
    if not chain:
        raise ChainBuildingFailedError(
            errors.chain_building_failed, messages.CERTIFICATE_CHAIN_BUILD_FAILED
        )

    certificate = chain[0]
    ess_cert_id = signing_certificate.certificates[0]

    if not is_ess_cert_id_match(certificate, ess_cert_id):
        raise InvalidSignatureError(
            errors.invalid_signature, messages.SIGNING_CERTIFICATE_CERTIFICATE_NOT_FOUND
        )

    signing_certificates = [certificate]
    signing_certificates.extend(chain[1:])
    return signing_certificates


def get_signing_certificates_v2(
    chain: Sequence[x509.Certificate] | None,
    signing_certificate_v2: SigningCertificateV2,
    errors: SignatureErrors,
    specifications: SigningSpecifications,
    is_issuer_serial_required: bool,
) -> list[x509.Certificate]:
    """
    Bind a chain to a signing-certificate-v2 attribute.

    The leaf must match the first ESSCertIDv2. When the attribute carries more
    than one record, every other chain certificate must match at least one of
    the remaining records; with a single record they are accepted as built.

    Raises:
        ChainBuildingFailedError: If the chain is missing or empty
        InvalidSignatureError: On a disallowed hash algorithm, an unmatched
            certificate, or a missing mandatory issuerSerial
    """
    if not chain:
        raise ChainBuildingFailedError(
            errors.chain_building_failed, messages.CERTIFICATE_CHAIN_BUILD_FAILED
        )

    records = signing_certificate_v2.certificates
    allowed_oids = specifications.allowed_hash_algorithm_oids

    for ess_cert_id_v2 in records:
        if ess_cert_id_v2.hash_algorithm_oid not in allowed_oids:
            raise InvalidSignatureError(
                errors.invalid_signature, messages.SIGNING_CERTIFICATE_V2_UNSUPPORTED_HASH_ALGORITHM
            )

    certificate = chain[0]
    hash_memoizer = CertificateHashMemoizer(certificate)

    if not is_ess_cert_id_v2_match(
        certificate, hash_memoizer, records[0], errors, is_issuer_serial_required
    ):
        raise InvalidSignatureError(
            errors.invalid_signature, messages.SIGNING_CERTIFICATE_CERTIFICATE_NOT_FOUND
        )

    signing_certificates = [certificate]

    for certificate in chain[1:]:
        if len(records) == 1:
            signing_certificates.append(certificate)
            continue

        hash_memoizer = CertificateHashMemoizer(certificate)
        was_match_found = False

        # Every remaining record is evaluated, even after a match.
        for ess_cert_id_v2 in records[1:]:
            if is_ess_cert_id_v2_match(
                certificate, hash_memoizer, ess_cert_id_v2, errors, is_issuer_serial_required
            ):
                was_match_found = True

        if not was_match_found:
            logger.debug(
                "No ESSCertIDv2 matches chain certificate %s", certificate.subject.rfc4514_string()
            )
            raise InvalidSignatureError(
                errors.invalid_signature, messages.SIGNING_CERTIFICATE_V2_CERTIFICATE_NOT_FOUND
            )

        signing_certificates.append(certificate)

    if len(chain) != len(signing_certificates):
        raise InvalidSignatureError(
            errors.invalid_signature, messages.SIGNING_CERTIFICATE_V2_VALIDATION_FAILED
        )

    return signing_certificates


def is_ess_cert_id_v2_match(
    certificate: x509.Certificate,
    hash_memoizer: CertificateHashMemoizer,
    ess_cert_id_v2: EssCertIdV2,
    errors: SignatureErrors,
    is_issuer_serial_required: bool,
) -> bool:
    """
    Check whether a certificate is the one identified by an ESSCertIDv2.

    Raises:
        InvalidSignatureError: If issuerSerial is required but absent or has no general names
    """
    issuer_serial = ess_cert_id_v2.issuer_serial

    if is_issuer_serial_required and (issuer_serial is None or not issuer_serial.general_names):
        raise InvalidSignatureError(errors.invalid_signature, errors.invalid_signature_message)

    if issuer_serial is not None and not is_issuer_serial_match(issuer_serial, certificate):
        return False

    actual_hash = hash_memoizer.get_hash(ess_cert_id_v2.hash_algorithm_oid)
    return ess_cert_id_v2.certificate_hash == actual_hash


def is_ess_cert_id_match(certificate: x509.Certificate, ess_cert_id: EssCertId) -> bool:
    """Check whether a certificate is the one identified by an ESSCertID (SHA-1)."""
    if ess_cert_id.issuer_serial is not None and not is_issuer_serial_match(
        ess_cert_id.issuer_serial, certificate
    ):
        return False

    actual_hash = get_certificate_hash(certificate, HashAlgorithmName.SHA1)
    return ess_cert_id.certificate_hash == actual_hash


def is_issuer_serial_match(issuer_serial: IssuerSerial, certificate: x509.Certificate) -> bool:
    """
    Compare an IssuerSerial with a certificate.

    The serial numbers must be equal and, when the first general name is a
    directory name, it must equal the certificate's issuer name.
    """
    if issuer_serial.serial_number != get_serial_number_bytes(certificate):
        return False

    if issuer_serial.general_names:
        directory_name = issuer_serial.general_names[0].directory_name
        if directory_name is not None and directory_name != certificate.issuer.rfc4514_string():
            return False

    return True


def get_serial_number_bytes(certificate: x509.Certificate) -> bytes:
    """Return the serial number as big-endian two's-complement DER integer contents."""
    serial_number = certificate.serial_number
    magnitude = serial_number if serial_number >= 0 else ~serial_number
    length = magnitude.bit_length() // 8 + 1
    return serial_number.to_bytes(length, "big", signed=True)
