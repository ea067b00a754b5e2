# CipherLink test configuration
# Shared fixtures for suite and key pair tests

import pytest

from cipherlink.crypto.suite import SUPPORTED_SUITES, X25519AESGCMSuite


@pytest.fixture
def suite():
    """Default AES-256-GCM cipher suite."""
    return X25519AESGCMSuite()


@pytest.fixture(params=sorted(SUPPORTED_SUITES))
def any_suite(request):
    """Every registered cipher suite."""
    return SUPPORTED_SUITES[request.param]()


@pytest.fixture
def alice(suite):
    return suite.generate_key_pair()


@pytest.fixture
def bob(suite):
    return suite.generate_key_pair()


@pytest.fixture
def shared_secret(suite, alice, bob):
    """Secret shared between alice and bob."""
    return suite.derive_shared_secret(alice.private_key, bob.public_key)
