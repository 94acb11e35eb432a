"""
Certificate chain building for signing certificates.

Builds an ordered path from a signer certificate to a self-issued certificate
using the certificates embedded in a signature as supplementary, untrusted
input. No revocation, validity period or key usage checking is performed:
the builder only answers whether a complete path exists and what it is.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

from cryptography import x509
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

logger = logging.getLogger(__name__)


@runtime_checkable
class ChainBuilder(Protocol):
    """Protocol for chain builders consumed by signing certificate resolution."""

    def build(
        self,
        certificate: x509.Certificate,
        extra_certificates: Sequence[x509.Certificate],
    ) -> list[x509.Certificate] | None:
        """Return the leaf-to-root chain, or None when only a partial chain exists."""
        ...


class CertificateChainBuilder:
    """
    Builds leaf-to-root certificate chains.

    Issuers are looked up first among the extra certificates supplied with the
    signature, then among the optional trust anchors. A candidate is the issuer
    of a certificate when its subject equals the certificate's issuer name and
    its public key verifies the certificate's signature.
    """

    def __init__(self, trust_anchors: Iterable[x509.Certificate] = ()) -> None:
        self._trust_anchors = list(trust_anchors)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def build(
        self,
        certificate: x509.Certificate,
        extra_certificates: Sequence[x509.Certificate],
    ) -> list[x509.Certificate] | None:
        """
        Build the certificate chain for ``certificate``.

        Issuer candidates are tried depth first, so a candidate whose own
        issuer cannot be found is abandoned in favour of the next one.

        Args:
            certificate: The end entity certificate
            extra_certificates: Unordered, untrusted certificates available for path building

        Returns:
            The chain ordered leaf first, or None if no self-issued terminating
            certificate could be reached
        """
        candidates = [*extra_certificates, *self._trust_anchors]
        cert_path = self._build_path(
            certificate, candidates, {self._get_certificate_key(certificate)}
        )

        if cert_path is None:
            self.logger.debug(
                "Partial chain: no path to a root for %s", certificate.subject.rfc4514_string()
            )
            return None

        self.logger.debug("Built certificate path with %d certificates", len(cert_path))
        return cert_path

    def _build_path(
        self,
        current_cert: x509.Certificate,
        candidates: Sequence[x509.Certificate],
        used_certs: set[str],
    ) -> list[x509.Certificate] | None:
        if self._is_issuer(current_cert, current_cert):
            return [current_cert]

        for candidate in candidates:
            candidate_key = self._get_certificate_key(candidate)
            if candidate_key in used_certs or not self._is_issuer(candidate, current_cert):
                continue

            issuer_path = self._build_path(candidate, candidates, used_certs | {candidate_key})
            if issuer_path is not None:
                return [current_cert, *issuer_path]

        return None

    def _is_issuer(
        self, potential_issuer: x509.Certificate, subject_cert: x509.Certificate
    ) -> bool:
        """Check if potential_issuer is the issuer of subject_cert."""

        try:
            subject_cert.verify_directly_issued_by(potential_issuer)
        except (InvalidSignature, UnsupportedAlgorithm, TypeError, ValueError):
            return False

        return True

    def _get_certificate_key(self, cert: x509.Certificate) -> str:
        """Generate unique key for certificate identification."""
        return hashlib.sha256(cert.public_bytes(serialization.Encoding.DER)).hexdigest().upper()
