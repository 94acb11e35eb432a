"""Diagnostic messages attached to signature errors."""

ERROR_NO_CERTIFICATE = "The primary signature does not have a signing certificate."
INVALID_PRIMARY_SIGNATURE = "The primary signature is invalid."

TIMESTAMP_NO_CERTIFICATE = "The timestamp signature does not have a signing certificate."
TIMESTAMP_INVALID = "The timestamp signature is invalid."
INVALID_TIMESTAMP_SIGNATURE = "The primary signature does not have a timestamp."

CERTIFICATE_CHAIN_BUILD_FAILED = "A certificate chain could not be built for the signing certificate."

SIGNING_CERTIFICATE_MULTIPLE_ATTRIBUTES = "Multiple signing-certificate attributes are not allowed."
SIGNING_CERTIFICATE_MULTIPLE_ATTRIBUTE_VALUES = (
    "The signing-certificate attribute must have exactly one attribute value."
)
SIGNING_CERTIFICATE_V2_MULTIPLE_ATTRIBUTES = (
    "Multiple signing-certificate-v2 attributes are not allowed."
)
SIGNING_CERTIFICATE_V2_MULTIPLE_ATTRIBUTE_VALUES = (
    "The signing-certificate-v2 attribute must have exactly one attribute value."
)
SIGNING_CERTIFICATE_ATTRIBUTE_MUST_NOT_BE_PRESENT = (
    "The signing-certificate attribute is not allowed for author and repository signatures."
)
SIGNING_CERTIFICATE_V2_ATTRIBUTE_MUST_BE_PRESENT = (
    "The signing-certificate-v2 attribute is required for author and repository signatures."
)
SIGNING_CERTIFICATE_ATTRIBUTE_INVALID = "The signing-certificate attribute is malformed."
SIGNING_CERTIFICATE_V2_ATTRIBUTE_INVALID = "The signing-certificate-v2 attribute is malformed."
SIGNING_CERTIFICATE_V2_UNSUPPORTED_HASH_ALGORITHM = (
    "The signing-certificate-v2 attribute uses an unsupported hash algorithm."
)
SIGNING_CERTIFICATE_CERTIFICATE_NOT_FOUND = (
    "The signing certificate does not match the certificate identified by the "
    "signing-certificate attribute."
)
SIGNING_CERTIFICATE_V2_CERTIFICATE_NOT_FOUND = (
    "A certificate in the chain does not match any certificate identified by the "
    "signing-certificate-v2 attribute."
)
SIGNING_CERTIFICATE_V2_VALIDATION_FAILED = "Validation of the signing-certificate-v2 attribute failed."

MULTIPLE_COMMITMENT_TYPE_INDICATION_ATTRIBUTES = (
    "Multiple commitment-type-indication attributes are not allowed."
)
COMMITMENT_TYPE_INDICATION_INVALID_COMBINATION = (
    "The commitment-type-indication attribute cannot assert both proof of origin "
    "and proof of receipt."
)
COMMITMENT_TYPE_INDICATION_INVALID = "The commitment-type-indication attribute is malformed."
