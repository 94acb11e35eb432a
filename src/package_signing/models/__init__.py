"""Data models for package signatures."""

from .ess import (
    EssCertId,
    EssCertIdV2,
    GeneralName,
    IssuerSerial,
    SigningCertificate,
    SigningCertificateV2,
)
from .signature import Signature, SignatureType, SignedAttribute, SignerInfo

__all__ = [
    "EssCertId",
    "EssCertIdV2",
    "GeneralName",
    "IssuerSerial",
    "Signature",
    "SignatureType",
    "SignedAttribute",
    "SignerInfo",
    "SigningCertificate",
    "SigningCertificateV2",
]
