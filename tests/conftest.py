"""
Test configuration for the package signing test suite.
"""

import os

import pytest

from package_signing.crypto.chain_builder import CertificateChainBuilder
from tests.fixtures.certificates import create_certificate, create_chain


# Test markers
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


def pytest_collection_modifyitems(config, items):
    """Mark tests by the directory they live in."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(scope="session", autouse=True)
def test_environment_setup():
    """Set up test environment."""
    original_env = os.environ.copy()

    os.environ.pop("PACKAGE_SIGNING_CONFIG", None)
    os.environ["PACKAGE_SIGNING_LOG_LEVEL"] = "DEBUG"

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(scope="session")
def issued_chain():
    """Leaf, intermediate and root certificates with their keys."""
    return create_chain(3)


@pytest.fixture(scope="session")
def chain(issued_chain):
    """Leaf-to-root certificate chain of length 3."""
    return [issued.certificate for issued in issued_chain]


@pytest.fixture(scope="session")
def short_chain():
    """Leaf-to-root certificate chain of length 2."""
    return [issued.certificate for issued in create_chain(2)]


@pytest.fixture(scope="session")
def timestamp_issued_chain():
    """Timestamp authority chain, leaf first."""
    return create_chain(2, leaf_name="Test Timestamp Authority")


@pytest.fixture(scope="session")
def unrelated_certificate():
    return create_certificate("Unrelated Signer").certificate


@pytest.fixture
def chain_builder():
    return CertificateChainBuilder()
