import random
from datetime import datetime, timedelta, timezone

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from package_signing.crypto.chain_builder import CertificateChainBuilder, ChainBuilder
from tests.fixtures.certificates import create_certificate, create_name


def test_builder_satisfies_protocol():
    assert isinstance(CertificateChainBuilder(), ChainBuilder)


def test_build_orders_unordered_extra_certificates(chain):
    extras = list(chain)
    random.Random(7).shuffle(extras)

    assert CertificateChainBuilder().build(chain[0], extras) == chain


def test_build_ignores_unrelated_certificates(chain, unrelated_certificate):
    extras = [unrelated_certificate, chain[2], chain[1]]

    assert CertificateChainBuilder().build(chain[0], extras) == chain


def test_missing_intermediate_yields_no_chain(chain):
    assert CertificateChainBuilder().build(chain[0], [chain[2]]) is None


def test_missing_root_yields_no_chain(chain):
    assert CertificateChainBuilder().build(chain[0], [chain[1]]) is None


def test_root_may_come_from_trust_anchors(chain):
    builder = CertificateChainBuilder(trust_anchors=[chain[2]])

    assert builder.build(chain[0], [chain[1]]) == chain


def test_self_signed_certificate_is_a_complete_chain(unrelated_certificate):
    assert CertificateChainBuilder().build(unrelated_certificate, []) == [unrelated_certificate]


def test_issuer_must_verify_signature(issued_chain, chain):
    # Same subject as the real intermediate but a different key
    impostor = create_certificate(
        "Impostor", issued_chain[2], is_ca=True, subject_name=chain[1].subject
    ).certificate

    assert CertificateChainBuilder().build(chain[0], [impostor, chain[2]]) is None
    assert CertificateChainBuilder().build(chain[0], [impostor, chain[1], chain[2]]) == chain


def _rsa_pss_certificate(common_name, private_key, issuer_name=None, issuer_key=None):
    subject = create_name(common_name)
    now = datetime.now(timezone.utc)
    builder = (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer_name or subject)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=30))
    )
    pss = padding.PSS(mgf=padding.MGF1(hashes.SHA256()), salt_length=32)
    return builder.sign(issuer_key or private_key, hashes.SHA256(), rsa_padding=pss)


def test_rsa_pss_signed_chain_is_complete():
    root_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    leaf_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    root = _rsa_pss_certificate("PSS Root CA", root_key)
    leaf = _rsa_pss_certificate("PSS Leaf", leaf_key, root.subject, root_key)

    assert CertificateChainBuilder().build(leaf, [root]) == [leaf, root]


def test_dead_end_cross_certificate_is_backtracked():
    root = create_certificate("Cross Signed CA", is_ca=True)
    other_root = create_certificate("Other Root CA", is_ca=True)
    leaf = create_certificate("Package Author", root).certificate
    now = datetime.now(timezone.utc)
    # Same subject and key as the root, issued by a root that is not available
    cross_certificate = (
        x509.CertificateBuilder()
        .subject_name(root.certificate.subject)
        .issuer_name(other_root.certificate.subject)
        .public_key(root.private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=30))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .sign(other_root.private_key, hashes.SHA256())
    )

    built = CertificateChainBuilder().build(leaf, [cross_certificate, root.certificate])

    assert built == [leaf, root.certificate]
