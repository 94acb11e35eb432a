"""
Readers for signed attribute values.

Decodes the DER values of the signing-certificate, signing-certificate-v2 and
commitment-type-indication attributes into the package's own models.
"""

from __future__ import annotations

import logging

from asn1crypto import core, tsp
from asn1crypto import x509 as asn1_x509
from cryptography import x509
from cryptography.x509.name import _ASN1Type

from package_signing import messages, oids
from package_signing.exceptions import AttributeReadError, InvalidSignatureError, SignatureLogCode
from package_signing.models.asn1_structures import CommitmentTypeIndication
from package_signing.models.ess import (
    EssCertId,
    EssCertIdV2,
    GeneralName,
    IssuerSerial,
    SigningCertificate,
    SigningCertificateV2,
)
from package_signing.models.signature import SignatureType, SignerInfo

logger = logging.getLogger(__name__)

_BIT_STRING_TAG = 3

_STRING_ENCODINGS = {
    28: "utf_32_be",
    30: "utf_16_be",
}

_COMMITMENT_TYPES = {
    oids.COMMITMENT_TYPE_IDENTIFIER_PROOF_OF_ORIGIN: SignatureType.AUTHOR,
    oids.COMMITMENT_TYPE_IDENTIFIER_PROOF_OF_RECEIPT: SignatureType.REPOSITORY,
}


def read_signing_certificate(value: bytes) -> SigningCertificate:
    """
    Read a signing-certificate attribute value.

    Args:
        value: DER encoded SigningCertificate

    Returns:
        The decoded SigningCertificate

    Raises:
        AttributeReadError: If the value is malformed or identifies no certificate
    """
    try:
        parsed = tsp.SigningCertificate.load(value, strict=True)
        certificates = tuple(
            EssCertId(
                certificate_hash=ess_cert_id["cert_hash"].native,
                issuer_serial=_read_issuer_serial(ess_cert_id["issuer_serial"]),
            )
            for ess_cert_id in parsed["certs"]
        )
    except (ValueError, TypeError) as e:
        msg = f"Invalid signing-certificate attribute value: {e}"
        raise AttributeReadError(msg) from e

    if not certificates:
        msg = "The signing-certificate attribute does not identify any certificate"
        raise AttributeReadError(msg)

    return SigningCertificate(certificates=certificates)


def read_signing_certificate_v2(value: bytes) -> SigningCertificateV2:
    """
    Read a signing-certificate-v2 attribute value.

    The hash algorithm of an ESSCertIDv2 defaults to SHA-256 when omitted.

    Raises:
        AttributeReadError: If the value is malformed or identifies no certificate
    """
    try:
        parsed = tsp.SigningCertificateV2.load(value, strict=True)
        certificates = tuple(
            EssCertIdV2(
                hash_algorithm_oid=ess_cert_id["hash_algorithm"]["algorithm"].dotted,
                certificate_hash=ess_cert_id["cert_hash"].native,
                issuer_serial=_read_issuer_serial(ess_cert_id["issuer_serial"]),
            )
            for ess_cert_id in parsed["certs"]
        )
    except (ValueError, TypeError) as e:
        msg = f"Invalid signing-certificate-v2 attribute value: {e}"
        raise AttributeReadError(msg) from e

    if not certificates:
        msg = "The signing-certificate-v2 attribute does not identify any certificate"
        raise AttributeReadError(msg)

    return SigningCertificateV2(certificates=certificates)


def _read_issuer_serial(value: core.Asn1Value) -> IssuerSerial | None:
    if isinstance(value, core.Void):
        return None

    general_names = tuple(
        GeneralName(
            directory_name=(
                directory_name_to_string(general_name.chosen)
                if general_name.name == "directory_name"
                else None
            )
        )
        for general_name in value["issuer"]
    )
    return IssuerSerial(general_names=general_names, serial_number=value["serial_number"].contents)


def directory_name_to_string(name: asn1_x509.Name) -> str:
    """
    Render an ASN.1 directory name the way certificate issuer names are rendered.

    Attribute values are decoded from their universal tag as cryptography
    decodes them when loading a certificate: BIT STRING values stay bytes and
    render as ``#hex``, BMPString and UniversalString are UTF-16 and UTF-32,
    and anything else is read as UTF-8 text.
    """
    relative_names = []
    for rdn in name.chosen:
        relative_names.append(
            x509.RelativeDistinguishedName(
                [_to_name_attribute(type_and_value) for type_and_value in rdn]
            )
        )

    return x509.Name(relative_names).rfc4514_string()


def _to_name_attribute(type_and_value: asn1_x509.NameTypeAndValue) -> x509.NameAttribute:
    oid = x509.ObjectIdentifier(type_and_value["type"].dotted)
    value = core.load(type_and_value["value"].dump())

    if value.tag == _BIT_STRING_TAG:
        return x509.NameAttribute(oid, value.contents, _type=_ASN1Type.BitString)

    encoding = _STRING_ENCODINGS.get(value.tag, "utf-8")
    return x509.NameAttribute(oid, value.contents.decode(encoding), _validate=False)


def classify_commitment_type(signer_info: SignerInfo) -> SignatureType:
    """
    Determine the signature type from the commitment-type-indication attribute.

    Returns:
        AUTHOR for proof of origin, REPOSITORY for proof of receipt, UNKNOWN otherwise

    Raises:
        InvalidSignatureError: If the attribute is repeated, malformed, or asserts
            both proof of origin and proof of receipt
    """
    attributes = signer_info.signed_attributes_with_oid(oids.COMMITMENT_TYPE_INDICATION)

    if not attributes:
        return SignatureType.UNKNOWN

    if len(attributes) > 1:
        raise InvalidSignatureError(
            SignatureLogCode.NU3000, messages.MULTIPLE_COMMITMENT_TYPE_INDICATION_ATTRIBUTES
        )

    signature_types = set()
    for value in attributes[0].values:
        try:
            indication = CommitmentTypeIndication.load(value, strict=True)
            commitment_type_id = indication["commitment_type_id"].dotted
        except (ValueError, TypeError) as e:
            raise InvalidSignatureError(
                SignatureLogCode.NU3000, messages.COMMITMENT_TYPE_INDICATION_INVALID
            ) from e

        signature_types.add(_COMMITMENT_TYPES.get(commitment_type_id, SignatureType.UNKNOWN))

    if {SignatureType.AUTHOR, SignatureType.REPOSITORY} <= signature_types:
        raise InvalidSignatureError(
            SignatureLogCode.NU3000, messages.COMMITMENT_TYPE_INDICATION_INVALID_COMBINATION
        )

    for signature_type in (SignatureType.AUTHOR, SignatureType.REPOSITORY):
        if signature_type in signature_types:
            return signature_type

    return SignatureType.UNKNOWN
