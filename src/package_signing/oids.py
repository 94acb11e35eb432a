"""Object identifiers used by package signatures."""

from __future__ import annotations

# Signed attributes (RFC 2634, RFC 5035, RFC 5126)
SIGNING_CERTIFICATE = "1.2.840.113549.1.9.16.2.12"
SIGNING_CERTIFICATE_V2 = "1.2.840.113549.1.9.16.2.47"
COMMITMENT_TYPE_INDICATION = "1.2.840.113549.1.9.16.2.16"

# Unsigned attributes (RFC 3161 appendix A)
SIGNATURE_TIME_STAMP_TOKEN = "1.2.840.113549.1.9.16.2.14"

# Commitment types (RFC 5126 section 5.11.1)
COMMITMENT_TYPE_IDENTIFIER_PROOF_OF_ORIGIN = "1.2.840.113549.1.9.16.6.1"
COMMITMENT_TYPE_IDENTIFIER_PROOF_OF_RECEIPT = "1.2.840.113549.1.9.16.6.2"

# Digest algorithms
SHA1 = "1.3.14.3.2.26"
SHA256 = "2.16.840.1.101.3.4.2.1"
SHA384 = "2.16.840.1.101.3.4.2.2"
SHA512 = "2.16.840.1.101.3.4.2.3"

# Content types
SIGNED_DATA = "1.2.840.113549.1.7.2"
