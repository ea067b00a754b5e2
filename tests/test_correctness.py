"""
Correctness Tests for CipherLink cipher suites.

Tests round-trip encryption/decryption, blob layout, and input validation.
"""

import pytest

from cipherlink.crypto.errors import (
    AuthenticationError,
    CipherInitError,
    KeyAgreementError,
    TruncatedInputError,
)
from cipherlink.crypto.suite import (
    NONCE_SIZE,
    TAG_SIZE,
    X25519AESGCMSuite,
    X25519ChaCha20Poly1305Suite,
    create_cipher_suite,
    decrypt,
    derive_shared_secret,
    encrypt,
    generate_key_pair,
)

ZERO_KEY = bytes(32)
TEST_DATA = b"Test data for encryption"


class TestRoundTrip:
    """Test round-trip encryption and decryption."""

    def test_basic_roundtrip(self, any_suite):
        """Test basic message round-trip."""
        key = any_suite.generate_key_pair()
        secret = any_suite.derive_shared_secret(key.private_key, key.public_key)
        plaintext = b"Hello, CipherLink!"

        blob = any_suite.encrypt(secret, plaintext)

        assert any_suite.decrypt(secret, blob) == plaintext

    def test_empty_message(self, any_suite):
        """Test encryption of empty message."""
        blob = any_suite.encrypt(ZERO_KEY, b"")

        assert len(blob) == NONCE_SIZE + TAG_SIZE
        assert any_suite.decrypt(ZERO_KEY, blob) == b""

    def test_large_message(self, suite, shared_secret):
        """Test encryption of large message."""
        plaintext = b"X" * 100000

        blob = suite.encrypt(shared_secret, plaintext)

        assert suite.decrypt(shared_secret, blob) == plaintext

    def test_unicode_content(self, suite, shared_secret):
        """Test encryption of Unicode content."""
        plaintext = "Hello, 世界! 🌍🔐".encode('utf-8')

        blob = suite.encrypt(shared_secret, plaintext)

        assert suite.decrypt(shared_secret, blob).decode('utf-8') == "Hello, 世界! 🌍🔐"

    def test_all_byte_values(self, suite):
        """Test a payload containing every byte value."""
        plaintext = bytes(range(256)) * 4

        assert suite.decrypt(ZERO_KEY, suite.encrypt(ZERO_KEY, plaintext)) == plaintext

    def test_bytes_like_inputs(self, suite):
        """Test that bytearray and memoryview inputs are accepted."""
        key = bytearray(ZERO_KEY)
        blob = suite.encrypt(key, memoryview(TEST_DATA))

        assert suite.decrypt(memoryview(key), bytearray(blob)) == TEST_DATA

    def test_multiple_messages_same_secret(self, suite, shared_secret):
        """Test many messages under one secret."""
        messages = [b"First message", b"", b"Second message with more content", b"Final"]

        blobs = [suite.encrypt(shared_secret, m) for m in messages]

        assert [suite.decrypt(shared_secret, b) for b in blobs] == messages


class TestReferenceScenario:
    """Zero key with the 25-byte reference message."""

    def test_blob_length(self, suite):
        blob = suite.encrypt(ZERO_KEY, TEST_DATA)
        assert len(blob) == NONCE_SIZE + len(TEST_DATA) + TAG_SIZE

    def test_two_calls_differ(self, suite):
        blob1 = suite.encrypt(ZERO_KEY, TEST_DATA)
        blob2 = suite.encrypt(ZERO_KEY, TEST_DATA)

        assert blob1 != blob2
        assert suite.decrypt(ZERO_KEY, blob1) == TEST_DATA
        assert suite.decrypt(ZERO_KEY, blob2) == TEST_DATA

    def test_nonce_is_prefix(self):
        """Test the blob starts with the nonce drawn for the call."""
        nonce = bytes(range(NONCE_SIZE))
        suite = X25519AESGCMSuite(random_source=lambda n: nonce[:n])

        blob = suite.encrypt(ZERO_KEY, TEST_DATA)

        assert blob[:NONCE_SIZE] == nonce
        assert suite.decrypt(ZERO_KEY, blob) == TEST_DATA


class TestInputValidation:
    """Test typed failures for malformed inputs."""

    @pytest.mark.parametrize("key_size", [0, 16, 24, 31, 33, 64])
    def test_encrypt_wrong_key_size(self, suite, key_size):
        with pytest.raises(CipherInitError):
            suite.encrypt(bytes(key_size), TEST_DATA)

    @pytest.mark.parametrize("key_size", [0, 16, 31, 33])
    def test_decrypt_wrong_key_size(self, suite, key_size):
        with pytest.raises(CipherInitError):
            suite.decrypt(bytes(key_size), bytes(40))

    @pytest.mark.parametrize("length", [0, 1, 11])
    def test_truncated_blob(self, any_suite, length):
        with pytest.raises(TruncatedInputError):
            any_suite.decrypt(ZERO_KEY, bytes(length))

    @pytest.mark.parametrize("length", [12, 20, 27])
    def test_blob_shorter_than_tag(self, suite, length):
        """A nonce without a full tag fails authentication."""
        with pytest.raises(AuthenticationError):
            suite.decrypt(ZERO_KEY, bytes(length))

    def test_cipher_checked_before_length(self, suite):
        with pytest.raises(CipherInitError):
            suite.decrypt(bytes(5), bytes(3))

    @pytest.mark.parametrize("own, peer", [
        (bytes(31), bytes(32)),
        (bytes(32), bytes(31)),
        (bytes(33), bytes(32)),
        (b"", b""),
    ])
    def test_derive_wrong_key_sizes(self, suite, own, peer):
        with pytest.raises(KeyAgreementError):
            suite.derive_shared_secret(own, peer)


class TestSuiteRegistry:
    """Test suite lookup and interchangeability."""

    def test_default_suite(self):
        suite = create_cipher_suite()
        assert isinstance(suite, X25519AESGCMSuite)
        assert suite.name == "X25519-AES256-GCM"

    def test_lookup_is_case_insensitive(self):
        suite = create_cipher_suite("x25519-chacha20-poly1305")
        assert isinstance(suite, X25519ChaCha20Poly1305Suite)

    def test_unknown_suite(self):
        with pytest.raises(ValueError):
            create_cipher_suite("RSA-OAEP")

    def test_suite_constants(self, any_suite):
        assert any_suite.key_size == 32
        assert any_suite.nonce_size == 12
        assert any_suite.tag_size == 16
        assert any_suite.overhead == 28

    def test_suites_do_not_interoperate(self):
        """A blob from one AEAD does not open under another."""
        blob = X25519AESGCMSuite().encrypt(ZERO_KEY, TEST_DATA)

        with pytest.raises(AuthenticationError):
            X25519ChaCha20Poly1305Suite().decrypt(ZERO_KEY, blob)


class TestModuleFunctions:
    """Test the default-suite convenience functions."""

    def test_full_flow(self):
        alice = generate_key_pair()
        bob = generate_key_pair()

        secret_a = derive_shared_secret(alice.private_key, bob.public_key)
        secret_b = derive_shared_secret(bob.private_key, alice.public_key)
        blob = encrypt(secret_a, TEST_DATA)

        assert decrypt(secret_b, blob) == TEST_DATA
