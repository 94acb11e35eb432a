"""Extraction of the signing-certificate attributes from a signer."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from package_signing import messages, oids
from package_signing.crypto.attribute_readers import (
    read_signing_certificate,
    read_signing_certificate_v2,
)
from package_signing.exceptions import AttributeReadError, InvalidSignatureError
from package_signing.models.ess import SigningCertificate, SigningCertificateV2
from package_signing.models.signature import SignedAttribute, SignerInfo
from package_signing.signing.errors_context import SignatureErrors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SigningCertificateAttributes:
    """The signing-certificate (v1) and signing-certificate-v2 attributes of a signer."""

    signing_certificate: SignedAttribute | None = None
    signing_certificate_v2: SignedAttribute | None = None


def extract_signing_certificate_attributes(
    signer_info: SignerInfo, errors: SignatureErrors
) -> SigningCertificateAttributes:
    """
    Locate the signing certificate attributes of a signer.

    Each attribute may appear at most once and must carry exactly one value.

    Raises:
        InvalidSignatureError: If either attribute is repeated or multi-valued
    """
    signing_certificate = None
    signing_certificate_v2 = None

    for attribute in signer_info.signed_attributes:
        if attribute.oid == oids.SIGNING_CERTIFICATE:
            if signing_certificate is not None:
                raise InvalidSignatureError(
                    errors.invalid_signature, messages.SIGNING_CERTIFICATE_MULTIPLE_ATTRIBUTES
                )

            if len(attribute.values) != 1:
                raise InvalidSignatureError(
                    errors.invalid_signature,
                    messages.SIGNING_CERTIFICATE_MULTIPLE_ATTRIBUTE_VALUES,
                )

            signing_certificate = attribute

        elif attribute.oid == oids.SIGNING_CERTIFICATE_V2:
            if signing_certificate_v2 is not None:
                raise InvalidSignatureError(
                    errors.invalid_signature, messages.SIGNING_CERTIFICATE_V2_MULTIPLE_ATTRIBUTES
                )

            if len(attribute.values) != 1:
                raise InvalidSignatureError(
                    errors.invalid_signature,
                    messages.SIGNING_CERTIFICATE_V2_MULTIPLE_ATTRIBUTE_VALUES,
                )

            signing_certificate_v2 = attribute

    return SigningCertificateAttributes(
        signing_certificate=signing_certificate,
        signing_certificate_v2=signing_certificate_v2,
    )


def read_signing_certificate_claim(
    attributes: SigningCertificateAttributes, errors: SignatureErrors
) -> SigningCertificateV2 | SigningCertificate | None:
    """
    Decode the attribute that binds the signer to its certificates.

    signing-certificate-v2 takes precedence when both attributes are present.
    Returns None when neither attribute is present.

    Raises:
        InvalidSignatureError: If the selected attribute value is malformed
    """
    if attributes.signing_certificate_v2 is not None:
        try:
            return read_signing_certificate_v2(attributes.signing_certificate_v2.values[0])
        except AttributeReadError as e:
            logger.debug("Rejecting signing-certificate-v2 attribute: %s", e)
            raise InvalidSignatureError(
                errors.invalid_signature, messages.SIGNING_CERTIFICATE_V2_ATTRIBUTE_INVALID
            ) from e

    if attributes.signing_certificate is not None:
        try:
            return read_signing_certificate(attributes.signing_certificate.values[0])
        except AttributeReadError as e:
            logger.debug("Rejecting signing-certificate attribute: %s", e)
            raise InvalidSignatureError(
                errors.invalid_signature, messages.SIGNING_CERTIFICATE_ATTRIBUTE_INVALID
            ) from e

    return None
