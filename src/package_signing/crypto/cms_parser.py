"""
CMS SignedData parser for package signatures.

Turns a DER or PEM encoded ContentInfo into the immutable ``Signature`` model:
embedded certificates, the single signer with its signed attributes, and any
RFC 3161 timestamp tokens attached as unsigned attributes.
"""

from __future__ import annotations

import logging

from asn1crypto import cms as asn1_cms
from cryptography import x509

from package_signing import oids
from package_signing.exceptions import CmsParsingError
from package_signing.models.asn1_structures import PackageSignatureContentInfo
from package_signing.models.signature import Signature, SignedAttribute, SignerInfo

logger = logging.getLogger(__name__)


def parse_cms(data: bytes) -> Signature:
    """
    Parse a CMS SignedData blob into a signature.

    Args:
        data: DER or PEM encoded ContentInfo

    Returns:
        The parsed signature, including nested timestamp signatures

    Raises:
        CmsParsingError: If the blob is not a single-signer SignedData structure
    """
    if not isinstance(data, (bytes, bytearray)):
        type_name = type(data).__name__
        msg = f"Unsupported signature data type: {type_name}"
        raise CmsParsingError(msg)

    try:
        content_info = PackageSignatureContentInfo.load(bytes(data))
        return _parse_content_info(content_info)
    except CmsParsingError:
        raise
    except (ValueError, TypeError, KeyError) as e:
        logger.debug("Failed to parse CMS signature", exc_info=True)
        msg = "CMS parsing failed"
        raise CmsParsingError(msg, str(e)) from e


def _parse_content_info(content_info: PackageSignatureContentInfo) -> Signature:
    if content_info["content_type"].dotted != oids.SIGNED_DATA:
        msg = "Content is not SignedData"
        raise CmsParsingError(msg, content_info["content_type"].dotted)

    signed_data = content_info.signed_data

    signer_infos = signed_data["signer_infos"]
    if len(signer_infos) != 1:
        msg = "SignedData must contain exactly one signer"
        raise CmsParsingError(msg, f"found {len(signer_infos)}")

    certificates = _load_certificates(signed_data)
    asn1_signer_info = signer_infos[0]

    signer_info = SignerInfo(
        certificate=_find_signer_certificate(asn1_signer_info["sid"], certificates),
        signed_attributes=_read_attributes(asn1_signer_info["signed_attrs"]),
    )

    timestamps = tuple(
        _parse_content_info(PackageSignatureContentInfo.load(token))
        for attribute in _read_attributes(asn1_signer_info["unsigned_attrs"])
        if attribute.oid == oids.SIGNATURE_TIME_STAMP_TOKEN
        for token in attribute.values
    )

    return Signature(certificates=certificates, signer_info=signer_info, timestamps=timestamps)


def _load_certificates(signed_data: asn1_cms.SignedData) -> tuple[x509.Certificate, ...]:
    certificates = []
    for choice in signed_data["certificates"] or []:
        if choice.name != "certificate":
            logger.debug("Skipping embedded %s", choice.name)
            continue
        certificates.append(x509.load_der_x509_certificate(choice.chosen.dump()))
    return tuple(certificates)


def _find_signer_certificate(
    sid: asn1_cms.SignerIdentifier, certificates: tuple[x509.Certificate, ...]
) -> x509.Certificate | None:
    if sid.name == "issuer_and_serial_number":
        issuer = sid.chosen["issuer"].dump()
        serial_number = sid.chosen["serial_number"].native
        for certificate in certificates:
            if (
                certificate.serial_number == serial_number
                and certificate.issuer.public_bytes() == issuer
            ):
                return certificate

    elif sid.name == "subject_key_identifier":
        key_identifier = sid.chosen.native
        for certificate in certificates:
            try:
                extension = certificate.extensions.get_extension_for_class(
                    x509.SubjectKeyIdentifier
                )
            except x509.ExtensionNotFound:
                continue
            if extension.value.digest == key_identifier:
                return certificate

    logger.debug("Signer certificate is not embedded in the SignedData")
    return None


def _read_attributes(attributes: asn1_cms.CMSAttributes) -> tuple[SignedAttribute, ...]:
    return tuple(
        SignedAttribute(
            oid=attribute["type"].dotted,
            values=tuple(value.dump() for value in attribute["values"]),
        )
        for attribute in attributes or []
    )
