"""
Resolution of the signing certificates of package signatures.

WARNING: these functions do not perform revocation, trust, or certificate
validity checking. They only establish that the certificates in the built
chain are the ones the signed attributes claim.

RFC 3161 requires the signing-certificate attribute for timestamps but does
not require its issuerSerial field; RFC 5816 allows signing-certificate-v2 in
its place or alongside it. RFC 5126 (CAdES) requires that only one of these
attributes be present and that a present issuerSerial match the certificate.
Author and repository signatures are CAdES signatures, see
``package_signing.signing.policy``.
"""

from __future__ import annotations

import logging

from cryptography import x509

from package_signing import messages
from package_signing.config import SigningSpecifications
from package_signing.crypto.attribute_readers import classify_commitment_type
from package_signing.crypto.chain_builder import CertificateChainBuilder, ChainBuilder
from package_signing.exceptions import (
    ChainBuildingFailedError,
    NoCertificateError,
    SignatureLogCode,
    TimestampMissingError,
)
from package_signing.models.ess import SigningCertificate, SigningCertificateV2
from package_signing.models.signature import Signature
from package_signing.signing.attributes import (
    extract_signing_certificate_attributes,
    read_signing_certificate_claim,
)
from package_signing.signing.errors_context import (
    PRIMARY_SIGNATURE_ERRORS,
    TIMESTAMP_SIGNATURE_ERRORS,
    SignatureErrors,
)
from package_signing.signing.matcher import (
    get_signing_certificates_v1,
    get_signing_certificates_v2,
)
from package_signing.signing.policy import select_binding_policy

logger = logging.getLogger(__name__)


def resolve_primary_signing_certificates(
    signature: Signature,
    specifications: SigningSpecifications | None = None,
    chain_builder: ChainBuilder | None = None,
) -> list[x509.Certificate]:
    """
    Get the certificates in the certificate chain of the primary signature.

    Args:
        signature: The primary signature
        specifications: Algorithm requirements, the version 1 specifications by default
        chain_builder: Chain builder to use, a new CertificateChainBuilder by default

    Returns:
        The signing certificate chain, leaf first

    Raises:
        SignatureError: With the primary signature log codes
    """
    return get_signing_certificates(
        signature, PRIMARY_SIGNATURE_ERRORS, specifications, chain_builder
    )


def resolve_timestamp_signing_certificates(
    signature: Signature,
    specifications: SigningSpecifications | None = None,
    chain_builder: ChainBuilder | None = None,
) -> list[x509.Certificate]:
    """
    Get the certificates in the certificate chain of the primary signature's timestamp.

    Raises:
        TimestampMissingError: If the primary signature has no timestamp
        SignatureError: With the timestamp signature log codes
    """
    if not signature.timestamps:
        raise TimestampMissingError(SignatureLogCode.NU3029, messages.INVALID_TIMESTAMP_SIGNATURE)

    return get_signing_certificates(
        signature.timestamps[0], TIMESTAMP_SIGNATURE_ERRORS, specifications, chain_builder
    )


def get_signing_certificates(
    signature: Signature,
    errors: SignatureErrors,
    specifications: SigningSpecifications | None = None,
    chain_builder: ChainBuilder | None = None,
) -> list[x509.Certificate]:
    """Resolve and bind the signing certificates of one signature."""
    specifications = specifications or SigningSpecifications.v1()
    chain_builder = chain_builder or CertificateChainBuilder()
    signer_info = signature.signer_info

    if signer_info.certificate is None:
        raise NoCertificateError(errors.no_certificate, errors.no_certificate_message)

    attributes = extract_signing_certificate_attributes(signer_info, errors)
    signature_type = classify_commitment_type(signer_info)
    policy = select_binding_policy(signature_type, attributes, errors)

    chain = chain_builder.build(signer_info.certificate, signature.certificates)

    if not chain:
        raise ChainBuildingFailedError(
            errors.chain_building_failed, messages.CERTIFICATE_CHAIN_BUILD_FAILED
        )

    claim = read_signing_certificate_claim(attributes, errors)

    if isinstance(claim, SigningCertificateV2):
        return get_signing_certificates_v2(
            chain, claim, errors, specifications, policy.is_issuer_serial_required
        )

    if isinstance(claim, SigningCertificate):
        return get_signing_certificates_v1(chain, claim, errors)

    logger.debug("No signing certificate attribute; accepting chain of %d", len(chain))
    return list(chain)
