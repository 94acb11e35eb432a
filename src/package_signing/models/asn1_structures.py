"""
ASN.1 data structures for package signature attributes.

Structures already modelled by asn1crypto (SignedData, ESSCertID, ESSCertIDv2,
SigningCertificate, SigningCertificateV2) are used from there; this module adds
the CAdES commitment-type-indication attribute and registers it with
asn1crypto's CMS attribute table.
"""

from __future__ import annotations

from asn1crypto import cms, core, pem, tsp  # noqa: F401  tsp registers the ESS attributes

from package_signing import oids


class CommitmentTypeIdentifier(core.ObjectIdentifier):
    """Commitment type identifiers defined by RFC 5126."""

    _map = {
        oids.COMMITMENT_TYPE_IDENTIFIER_PROOF_OF_ORIGIN: "proof_of_origin",
        oids.COMMITMENT_TYPE_IDENTIFIER_PROOF_OF_RECEIPT: "proof_of_receipt",
    }


class CommitmentTypeQualifier(core.Sequence):
    """Commitment type qualifier."""

    _fields = [
        ("commitment_type_identifier", CommitmentTypeIdentifier),
        ("qualifier", core.Any, {"optional": True}),
    ]


class CommitmentTypeQualifiers(core.SequenceOf):
    """Collection of commitment type qualifiers."""

    _child_spec = CommitmentTypeQualifier


class CommitmentTypeIndication(core.Sequence):
    """Value of the commitment-type-indication attribute."""

    _fields = [
        ("commitment_type_id", CommitmentTypeIdentifier),
        ("commitment_type_qualifier", CommitmentTypeQualifiers, {"optional": True}),
    ]


class SetOfCommitmentTypeIndication(core.SetOf):
    """Attribute values of the commitment-type-indication attribute."""

    _child_spec = CommitmentTypeIndication


class PackageSignatureContentInfo(cms.ContentInfo):
    """ContentInfo wrapping a package signature SignedData."""

    @classmethod
    def load(cls, encoded_data: bytes) -> PackageSignatureContentInfo:  # type: ignore[override]
        """Load from DER or PEM encoded bytes."""

        if pem.detect(encoded_data):
            _, _, encoded_data = pem.unarmor(encoded_data)

        return super().load(encoded_data)

    @property
    def signed_data(self) -> cms.SignedData:
        """Return embedded SignedData structure."""

        content = self["content"]
        if isinstance(content, cms.SignedData):
            return content
        return content.parsed  # type: ignore[return-value]


cms.CMSAttributeType._map[oids.COMMITMENT_TYPE_INDICATION] = "commitment_type"
cms.CMSAttribute._oid_specs["commitment_type"] = SetOfCommitmentTypeIndication
