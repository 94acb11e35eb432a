"""
Binding policy selection.

Author and repository signatures are CAdES signatures (RFC 5126 section
5.7.3): the signing-certificate-v2 attribute must be present, the
signing-certificate attribute must not be present, and every ESSCertIDv2 must
carry an issuerSerial. Other signatures, notably RFC 3161 timestamps, may use
either attribute and issuerSerial is only checked when present.
"""

from __future__ import annotations

from dataclasses import dataclass

from package_signing import messages
from package_signing.exceptions import InvalidSignatureError
from package_signing.models.signature import SignatureType
from package_signing.signing.attributes import SigningCertificateAttributes
from package_signing.signing.errors_context import SignatureErrors

_CADES_SIGNATURE_TYPES = frozenset({SignatureType.AUTHOR, SignatureType.REPOSITORY})


@dataclass(frozen=True)
class BindingPolicy:
    is_issuer_serial_required: bool = False


def select_binding_policy(
    signature_type: SignatureType,
    attributes: SigningCertificateAttributes,
    errors: SignatureErrors,
) -> BindingPolicy:
    """
    Select the binding rules for a signature type and check attribute presence.

    Raises:
        InvalidSignatureError: If an author or repository signature carries the
            signing-certificate attribute or lacks signing-certificate-v2
    """
    if signature_type not in _CADES_SIGNATURE_TYPES:
        return BindingPolicy(is_issuer_serial_required=False)

    if attributes.signing_certificate_v2 is None:
        raise InvalidSignatureError(
            errors.invalid_signature, messages.SIGNING_CERTIFICATE_V2_ATTRIBUTE_MUST_BE_PRESENT
        )

    if attributes.signing_certificate is not None:
        raise InvalidSignatureError(
            errors.invalid_signature, messages.SIGNING_CERTIFICATE_ATTRIBUTE_MUST_NOT_BE_PRESENT
        )

    return BindingPolicy(is_issuer_serial_required=True)
