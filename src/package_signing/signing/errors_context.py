"""Error code bundles selecting diagnostics for primary and timestamp signatures."""

from __future__ import annotations

from dataclasses import dataclass

from package_signing import messages
from package_signing.exceptions import SignatureLogCode


@dataclass(frozen=True)
class SignatureErrors:
    """The log codes and messages reported for one kind of signature."""

    no_certificate: SignatureLogCode
    no_certificate_message: str
    invalid_signature: SignatureLogCode
    invalid_signature_message: str
    chain_building_failed: SignatureLogCode


PRIMARY_SIGNATURE_ERRORS = SignatureErrors(
    no_certificate=SignatureLogCode.NU3010,
    no_certificate_message=messages.ERROR_NO_CERTIFICATE,
    invalid_signature=SignatureLogCode.NU3011,
    invalid_signature_message=messages.INVALID_PRIMARY_SIGNATURE,
    chain_building_failed=SignatureLogCode.NU3018,
)

TIMESTAMP_SIGNATURE_ERRORS = SignatureErrors(
    no_certificate=SignatureLogCode.NU3020,
    no_certificate_message=messages.TIMESTAMP_NO_CERTIFICATE,
    invalid_signature=SignatureLogCode.NU3021,
    invalid_signature_message=messages.TIMESTAMP_INVALID,
    chain_building_failed=SignatureLogCode.NU3028,
)
