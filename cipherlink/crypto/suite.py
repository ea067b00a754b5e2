"""
Cipher suites for CipherLink.

A cipher suite bundles key generation, X25519 key agreement and single-message
authenticated encryption behind one interface:

- generate_key_pair(): new identity key pair
- derive_shared_secret(own_private, peer_public): 32-byte ECDH secret
- encrypt(shared_secret, plaintext): nonce || ciphertext || tag
- decrypt(shared_secret, blob): plaintext

Suites are stateless. The shared secret is passed on every call, so a single
instance can be used from any number of threads without locking.

Security notes:
- A fresh random 12-byte nonce is drawn for every encryption. With random
  nonces a single key should not seal more than about 2**32 messages.
- No associated data is bound. Callers needing context binding (for example
  the sender identity) must place it inside the plaintext.
- AES-GCM is provided by OpenSSL through the ``cryptography`` package. GHASH
  is constant-time only where OpenSSL uses hardware AES/CLMUL support; on
  platforms without it, X25519ChaCha20Poly1305Suite avoids table-based code.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Type, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.asymmetric import x25519
from cryptography.hazmat.primitives.ciphers.aead import AESGCM, ChaCha20Poly1305

from .errors import (
    AuthenticationError,
    CipherInitError,
    KeyAgreementError,
    RandomSourceError,
    TruncatedInputError,
)
from .keys import KeyPair, PRIVATE_KEY_SIZE, PUBLIC_KEY_SIZE
from .utils import generate_random_bytes, is_all_zero

logger = logging.getLogger(__name__)

KEY_SIZE = 32    # X25519 shared secret and AES-256 key
NONCE_SIZE = 12  # GCM standard nonce
TAG_SIZE = 16

BytesLike = Union[bytes, bytearray, memoryview]
AEAD = Union[AESGCM, ChaCha20Poly1305]


class CipherSuite(ABC):
    """
    Abstract capability set implemented by every cipher suite.

    Implementations must not keep mutable per-call state.
    """

    name: str = ""
    key_size: int = KEY_SIZE
    nonce_size: int = NONCE_SIZE
    tag_size: int = TAG_SIZE

    @property
    def overhead(self) -> int:
        """Bytes added to every plaintext by encrypt()."""
        return self.nonce_size + self.tag_size

    @abstractmethod
    def generate_key_pair(self) -> KeyPair:
        """Generate a new identity key pair."""

    @abstractmethod
    def derive_shared_secret(self, own_private_key: BytesLike, peer_public_key: BytesLike) -> bytes:
        """Derive the shared secret between our private key and a peer public key."""

    @abstractmethod
    def encrypt(self, shared_secret: BytesLike, plaintext: BytesLike) -> bytes:
        """Encrypt and authenticate a single message."""

    @abstractmethod
    def decrypt(self, shared_secret: BytesLike, ciphertext: BytesLike) -> bytes:
        """Authenticate and decrypt a single message."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class X25519CipherSuite(CipherSuite):
    """
    X25519 key agreement combined with an AEAD chosen by subclasses.

    Subclasses only provide _new_aead(); blob layout and error semantics are
    shared.
    """

    def __init__(self, random_source: Callable[[int], bytes] = generate_random_bytes):
        """
        Initialize the suite.

        Args:
            random_source: Callable returning secure random bytes. Defaults to
                the OS CSPRNG.
        """
        self._random_source = random_source

    @abstractmethod
    def _new_aead(self, key: bytes) -> AEAD:
        """Construct the AEAD transform for a key."""

    def _random_bytes(self, length: int) -> bytes:
        try:
            data = self._random_source(length)
        except (OSError, NotImplementedError) as e:
            raise RandomSourceError(f"Secure random source unavailable: {e}") from e
        if len(data) != length:
            raise RandomSourceError(
                f"Secure random source returned {len(data)} of {length} bytes"
            )
        return data

    def _init_cipher(self, shared_secret: BytesLike) -> AEAD:
        key = bytes(shared_secret)
        if len(key) != self.key_size:
            raise CipherInitError(
                f"{self.name} requires a {self.key_size}-byte key, got {len(key)} bytes"
            )
        try:
            return self._new_aead(key)
        except (TypeError, ValueError) as e:
            raise CipherInitError(f"Failed to initialise {self.name}: {e}") from e

    def generate_key_pair(self) -> KeyPair:
        """
        Generate a new identity key pair.

        Returns:
            KeyPair whose private/public keys are a dedicated X25519 pair
            derived from a fresh Ed25519 signing key

        Raises:
            RandomSourceError: If the random source fails
        """
        return KeyPair.generate(self._random_bytes)

    def derive_shared_secret(self, own_private_key: BytesLike, peer_public_key: BytesLike) -> bytes:
        """
        Derive a 32-byte shared secret with X25519.

        Args:
            own_private_key: Our 32-byte X25519 private scalar
            peer_public_key: The peer's 32-byte X25519 public key

        Returns:
            32-byte shared secret, identical on both sides

        Raises:
            KeyAgreementError: If a key has the wrong size or the result is
                the all-zero value produced by low-order peer keys
        """
        private_bytes = bytes(own_private_key)
        public_bytes = bytes(peer_public_key)

        if len(private_bytes) != PRIVATE_KEY_SIZE:
            raise KeyAgreementError(f"Private key must be {PRIVATE_KEY_SIZE} bytes")
        if len(public_bytes) != PUBLIC_KEY_SIZE:
            raise KeyAgreementError(f"Peer public key must be {PUBLIC_KEY_SIZE} bytes")

        try:
            private = x25519.X25519PrivateKey.from_private_bytes(private_bytes)
            public = x25519.X25519PublicKey.from_public_bytes(public_bytes)
            shared_secret = private.exchange(public)
        except ValueError as e:
            # OpenSSL refuses to return the all-zero output of a low-order point
            logger.warning("Rejected peer public key: degenerate key agreement result")
            raise KeyAgreementError("Key agreement produced a degenerate shared secret") from e

        if is_all_zero(shared_secret):
            logger.warning("Rejected peer public key: degenerate key agreement result")
            raise KeyAgreementError("Key agreement produced a degenerate shared secret")

        return shared_secret

    def encrypt(self, shared_secret: BytesLike, plaintext: BytesLike) -> bytes:
        """
        Encrypt a message under the shared secret.

        Args:
            shared_secret: 32-byte key from derive_shared_secret()
            plaintext: Data to encrypt (may be empty)

        Returns:
            nonce (12 bytes) || ciphertext || tag (16 bytes)

        Raises:
            CipherInitError: If the key is not 32 bytes
            RandomSourceError: If no nonce can be drawn
        """
        aead = self._init_cipher(shared_secret)
        nonce = self._random_bytes(self.nonce_size)
        sealed = aead.encrypt(nonce, bytes(plaintext), None)
        return nonce + sealed

    def decrypt(self, shared_secret: BytesLike, ciphertext: BytesLike) -> bytes:
        """
        Decrypt a blob produced by encrypt().

        Args:
            shared_secret: 32-byte key from derive_shared_secret()
            ciphertext: nonce || ciphertext || tag

        Returns:
            Original plaintext

        Raises:
            CipherInitError: If the key is not 32 bytes
            TruncatedInputError: If the blob is shorter than the nonce
            AuthenticationError: If the tag does not verify
        """
        aead = self._init_cipher(shared_secret)

        blob = bytes(ciphertext)
        if len(blob) < self.nonce_size:
            raise TruncatedInputError(
                f"Ciphertext is {len(blob)} bytes, shorter than the {self.nonce_size}-byte nonce"
            )

        nonce, sealed = blob[:self.nonce_size], blob[self.nonce_size:]
        try:
            return aead.decrypt(nonce, sealed, None)
        except InvalidTag as e:
            logger.debug(f"{self.name}: authentication failed for {len(blob)}-byte blob")
            raise AuthenticationError() from e


class X25519AESGCMSuite(X25519CipherSuite):
    """X25519 key agreement with AES-256-GCM."""

    name = "X25519-AES256-GCM"

    def _new_aead(self, key: bytes) -> AESGCM:
        return AESGCM(key)


class X25519ChaCha20Poly1305Suite(X25519CipherSuite):
    """X25519 key agreement with ChaCha20-Poly1305."""

    name = "X25519-CHACHA20-POLY1305"

    def _new_aead(self, key: bytes) -> ChaCha20Poly1305:
        return ChaCha20Poly1305(key)


DEFAULT_SUITE = X25519AESGCMSuite.name

SUPPORTED_SUITES: Dict[str, Type[X25519CipherSuite]] = {
    X25519AESGCMSuite.name: X25519AESGCMSuite,
    X25519ChaCha20Poly1305Suite.name: X25519ChaCha20Poly1305Suite,
}


def create_cipher_suite(name: Optional[str] = None) -> CipherSuite:
    """
    Create a cipher suite instance by name.

    Args:
        name: One of SUPPORTED_SUITES (case-insensitive); None selects the
            default AES-256-GCM suite

    Returns:
        CipherSuite instance

    Raises:
        ValueError: If the name is unknown
    """
    if name is None:
        name = DEFAULT_SUITE

    suite_class = SUPPORTED_SUITES.get(name.upper())
    if suite_class is None:
        supported = ", ".join(sorted(SUPPORTED_SUITES))
        raise ValueError(f"Unknown cipher suite {name!r}; supported: {supported}")
    return suite_class()


_default_suite = X25519AESGCMSuite()


def generate_key_pair() -> KeyPair:
    """Generate a key pair with the default suite."""
    return _default_suite.generate_key_pair()


def derive_shared_secret(own_private_key: BytesLike, peer_public_key: BytesLike) -> bytes:
    """Derive a shared secret with the default suite."""
    return _default_suite.derive_shared_secret(own_private_key, peer_public_key)


def encrypt(shared_secret: BytesLike, plaintext: BytesLike) -> bytes:
    """Encrypt with the default suite."""
    return _default_suite.encrypt(shared_secret, plaintext)


def decrypt(shared_secret: BytesLike, ciphertext: BytesLike) -> bytes:
    """Decrypt with the default suite."""
    return _default_suite.decrypt(shared_secret, ciphertext)
