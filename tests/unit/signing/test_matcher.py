import pytest

from package_signing import messages, oids
from package_signing.config import SigningSpecifications
from package_signing.crypto.hashing import CertificateHashMemoizer
from package_signing.exceptions import ChainBuildingFailedError, InvalidSignatureError, SignatureLogCode
from package_signing.models import (
    EssCertId,
    EssCertIdV2,
    GeneralName,
    IssuerSerial,
    SigningCertificate,
    SigningCertificateV2,
)
from package_signing.signing import matcher
from package_signing.signing.errors_context import PRIMARY_SIGNATURE_ERRORS, TIMESTAMP_SIGNATURE_ERRORS
from package_signing.signing.matcher import (
    get_serial_number_bytes,
    get_signing_certificates_v1,
    get_signing_certificates_v2,
    is_ess_cert_id_match,
    is_ess_cert_id_v2_match,
    is_issuer_serial_match,
)
from tests.fixtures.certificates import create_certificate
from tests.fixtures.cms_builder import certificate_digest

SPECIFICATIONS = SigningSpecifications.v1()


def _issuer_serial(certificate, directory_name=None, serial_number=None):
    return IssuerSerial(
        general_names=(GeneralName(directory_name or certificate.issuer.rfc4514_string()),),
        serial_number=serial_number or get_serial_number_bytes(certificate),
    )


def _v1(certificate, issuer_serial=None):
    return EssCertId(certificate_hash=certificate_digest(certificate, "sha1"), issuer_serial=issuer_serial)


def _v2(certificate, hash_oid=oids.SHA256, issuer_serial=None, certificate_hash=None):
    names = {oids.SHA256: "sha256", oids.SHA384: "sha384", oids.SHA512: "sha512", oids.SHA1: "sha1"}
    return EssCertIdV2(
        hash_algorithm_oid=hash_oid,
        certificate_hash=certificate_hash or certificate_digest(certificate, names[hash_oid]),
        issuer_serial=issuer_serial,
    )


@pytest.mark.parametrize(
    ("serial_number", "expected"),
    [
        (1, b"\x01"),
        (127, b"\x7f"),
        (128, b"\x00\x80"),
        (0x0102, b"\x01\x02"),
        (0xFF00, b"\x00\xff\x00"),
    ],
)
def test_serial_number_bytes_are_der_integer_contents(issued_chain, serial_number, expected):
    certificate = create_certificate("Serial", issued_chain[1], serial_number=serial_number).certificate

    assert get_serial_number_bytes(certificate) == expected


def test_issuer_serial_match(chain):
    assert is_issuer_serial_match(_issuer_serial(chain[0]), chain[0])


def test_issuer_serial_serial_mismatch(chain):
    assert not is_issuer_serial_match(_issuer_serial(chain[0], serial_number=b"\x01\x02\x03"), chain[0])


def test_issuer_serial_directory_name_mismatch(chain):
    assert not is_issuer_serial_match(_issuer_serial(chain[0], directory_name="CN=Someone Else"), chain[0])


def test_issuer_serial_without_directory_name_compares_serial_only(chain):
    issuer_serial = IssuerSerial(
        general_names=(GeneralName(directory_name=None),),
        serial_number=get_serial_number_bytes(chain[0]),
    )

    assert is_issuer_serial_match(issuer_serial, chain[0])


def test_ess_cert_id_match(chain):
    assert is_ess_cert_id_match(chain[0], _v1(chain[0], _issuer_serial(chain[0])))
    assert not is_ess_cert_id_match(chain[1], _v1(chain[0]))


@pytest.mark.parametrize("chain_value", [None, []])
def test_v1_requires_chain(chain_value, chain):
    with pytest.raises(ChainBuildingFailedError) as exc_info:
        get_signing_certificates_v1(
            chain_value, SigningCertificate((_v1(chain[0]),)), TIMESTAMP_SIGNATURE_ERRORS
        )
    assert exc_info.value.code is SignatureLogCode.NU3028


def test_v1_accepts_rest_of_chain_after_leaf(chain):
    signing_certificate = SigningCertificate((_v1(chain[0]),))

    result = get_signing_certificates_v1(chain, signing_certificate, PRIMARY_SIGNATURE_ERRORS)

    assert result == chain
    assert result is not chain


def test_v1_leaf_mismatch(chain):
    signing_certificate = SigningCertificate((_v1(chain[1]),))

    with pytest.raises(InvalidSignatureError) as exc_info:
        get_signing_certificates_v1(chain, signing_certificate, PRIMARY_SIGNATURE_ERRORS)
    assert exc_info.value.code is SignatureLogCode.NU3011
    assert exc_info.value.message == messages.SIGNING_CERTIFICATE_CERTIFICATE_NOT_FOUND


def test_v1_issuer_serial_mismatch(chain):
    signing_certificate = SigningCertificate(
        (_v1(chain[0], _issuer_serial(chain[0], serial_number=b"\x09")),)
    )

    with pytest.raises(InvalidSignatureError):
        get_signing_certificates_v1(chain, signing_certificate, PRIMARY_SIGNATURE_ERRORS)


def test_v2_single_record_accepts_rest_of_chain(chain):
    signing_certificate_v2 = SigningCertificateV2((_v2(chain[0], oids.SHA384),))

    result = get_signing_certificates_v2(
        chain, signing_certificate_v2, PRIMARY_SIGNATURE_ERRORS, SPECIFICATIONS, False
    )

    assert result == chain


def test_v2_multiple_records_match_in_any_order(chain):
    signing_certificate_v2 = SigningCertificateV2(
        (_v2(chain[0]), _v2(chain[2], oids.SHA512), _v2(chain[1]))
    )

    result = get_signing_certificates_v2(
        chain, signing_certificate_v2, PRIMARY_SIGNATURE_ERRORS, SPECIFICATIONS, False
    )

    assert result == chain


def test_v2_certificate_matching_several_records_is_accepted_once(short_chain):
    signing_certificate_v2 = SigningCertificateV2(
        (_v2(short_chain[0]), _v2(short_chain[1]), _v2(short_chain[1], oids.SHA384))
    )

    result = get_signing_certificates_v2(
        short_chain, signing_certificate_v2, PRIMARY_SIGNATURE_ERRORS, SPECIFICATIONS, False
    )

    assert result == short_chain


def test_v2_unmatched_chain_certificate(short_chain, unrelated_certificate):
    signing_certificate_v2 = SigningCertificateV2(
        (_v2(short_chain[0]), _v2(unrelated_certificate))
    )

    with pytest.raises(InvalidSignatureError) as exc_info:
        get_signing_certificates_v2(
            short_chain, signing_certificate_v2, TIMESTAMP_SIGNATURE_ERRORS, SPECIFICATIONS, False
        )
    assert exc_info.value.code is SignatureLogCode.NU3021
    assert exc_info.value.message == messages.SIGNING_CERTIFICATE_V2_CERTIFICATE_NOT_FOUND


def test_v2_leaf_must_match_first_record(short_chain):
    signing_certificate_v2 = SigningCertificateV2((_v2(short_chain[1]), _v2(short_chain[0])))

    with pytest.raises(InvalidSignatureError) as exc_info:
        get_signing_certificates_v2(
            short_chain, signing_certificate_v2, PRIMARY_SIGNATURE_ERRORS, SPECIFICATIONS, False
        )
    assert exc_info.value.message == messages.SIGNING_CERTIFICATE_CERTIFICATE_NOT_FOUND


@pytest.mark.parametrize("hash_oid", [oids.SHA1, "1.2.840.113549.2.5"])
def test_v2_disallowed_algorithm_is_rejected_before_matching(chain, hash_oid, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("matching must not start")

    monkeypatch.setattr(matcher, "is_ess_cert_id_v2_match", fail)
    signing_certificate_v2 = SigningCertificateV2(
        (_v2(chain[0]), EssCertIdV2(hash_oid, certificate_digest(chain[1], "sha1")))
    )

    with pytest.raises(InvalidSignatureError) as exc_info:
        get_signing_certificates_v2(
            chain, signing_certificate_v2, PRIMARY_SIGNATURE_ERRORS, SPECIFICATIONS, False
        )
    assert exc_info.value.message == messages.SIGNING_CERTIFICATE_V2_UNSUPPORTED_HASH_ALGORITHM


def test_v2_custom_allow_list(chain):
    specifications = SigningSpecifications(allowed_hash_algorithm_oids=(oids.SHA512,))
    signing_certificate_v2 = SigningCertificateV2((_v2(chain[0]),))

    with pytest.raises(InvalidSignatureError):
        get_signing_certificates_v2(
            chain, signing_certificate_v2, PRIMARY_SIGNATURE_ERRORS, specifications, False
        )


@pytest.mark.parametrize("chain_value", [None, []])
def test_v2_requires_chain(chain_value, chain):
    with pytest.raises(ChainBuildingFailedError) as exc_info:
        get_signing_certificates_v2(
            chain_value,
            SigningCertificateV2((_v2(chain[0]),)),
            PRIMARY_SIGNATURE_ERRORS,
            SPECIFICATIONS,
            False,
        )
    assert exc_info.value.code is SignatureLogCode.NU3018


@pytest.mark.parametrize(
    "issuer_serial",
    [None, IssuerSerial(general_names=(), serial_number=b"\x01")],
)
def test_required_issuer_serial_missing_is_a_hard_failure(chain, issuer_serial):
    record = _v2(chain[0], issuer_serial=issuer_serial)

    with pytest.raises(InvalidSignatureError) as exc_info:
        is_ess_cert_id_v2_match(
            chain[0], CertificateHashMemoizer(chain[0]), record, PRIMARY_SIGNATURE_ERRORS, True
        )
    assert exc_info.value.message == messages.INVALID_PRIMARY_SIGNATURE


def test_optional_issuer_serial_mismatch_is_no_match(chain):
    record = _v2(chain[0], issuer_serial=_issuer_serial(chain[0], serial_number=b"\x7f\x7f"))

    assert not is_ess_cert_id_v2_match(
        chain[0], CertificateHashMemoizer(chain[0]), record, PRIMARY_SIGNATURE_ERRORS, False
    )


def test_required_issuer_serial_present_matches(chain):
    record = _v2(chain[0], issuer_serial=_issuer_serial(chain[0]))

    assert is_ess_cert_id_v2_match(
        chain[0], CertificateHashMemoizer(chain[0]), record, PRIMARY_SIGNATURE_ERRORS, True
    )


def test_hash_mismatch_is_no_match(chain):
    record = _v2(chain[0], certificate_hash=b"\x00" * 32)

    assert not is_ess_cert_id_v2_match(
        chain[0], CertificateHashMemoizer(chain[0]), record, PRIMARY_SIGNATURE_ERRORS, False
    )
