"""Signing certificate resolution and binding."""

from .errors_context import PRIMARY_SIGNATURE_ERRORS, TIMESTAMP_SIGNATURE_ERRORS, SignatureErrors
from .signature_utility import (
    get_signing_certificates,
    resolve_primary_signing_certificates,
    resolve_timestamp_signing_certificates,
)

__all__ = [
    "PRIMARY_SIGNATURE_ERRORS",
    "TIMESTAMP_SIGNATURE_ERRORS",
    "SignatureErrors",
    "get_signing_certificates",
    "resolve_primary_signing_certificates",
    "resolve_timestamp_signing_certificates",
]
