"""
Identity key pairs for CipherLink.

An identity is a 64-byte Ed25519 signing key pair (32-byte seed followed by
the 32-byte Ed25519 public key). The X25519 key-agreement pair used for ECDH
is derived from the seed with the standard Ed25519-to-Curve25519 transform:
the SHA-512 digest of the seed is truncated to 32 bytes and clamped, exactly
as the Ed25519 signing scalar is formed. The raw seed bytes are never used
directly as a Diffie-Hellman scalar.
"""

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Callable

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519, x25519

from .errors import RandomSourceError
from .utils import generate_random_bytes, constant_time_compare

logger = logging.getLogger(__name__)

SEED_SIZE = 32
PUBLIC_KEY_SIZE = 32
PRIVATE_KEY_SIZE = 32
SIGNING_KEY_SIZE = SEED_SIZE + PUBLIC_KEY_SIZE  # 64


def _clamp(scalar: bytearray) -> bytes:
    scalar[0] &= 248
    scalar[31] &= 127
    scalar[31] |= 64
    return bytes(scalar)


def seed_to_x25519_scalar(seed: bytes) -> bytes:
    """
    Convert an Ed25519 seed into the matching X25519 private scalar.

    Args:
        seed: 32-byte Ed25519 private seed

    Returns:
        32-byte clamped X25519 scalar
    """
    if len(seed) != SEED_SIZE:
        raise ValueError(f"Ed25519 seed must be {SEED_SIZE} bytes")
    digest = bytearray(hashlib.sha512(seed).digest()[:PRIVATE_KEY_SIZE])
    return _clamp(digest)


def x25519_public_from_scalar(scalar: bytes) -> bytes:
    """Compute the 32-byte X25519 public key for a private scalar."""
    private = x25519.X25519PrivateKey.from_private_bytes(scalar)
    return private.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


def ed25519_public_from_seed(seed: bytes) -> bytes:
    """Compute the 32-byte Ed25519 public key for a seed."""
    signing = ed25519.Ed25519PrivateKey.from_private_bytes(seed)
    return signing.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


@dataclass(frozen=True)
class KeyPair:
    """
    Long-term identity key pair.

    Attributes:
        private_key: 32-byte X25519 scalar used for key agreement
        public_key: 32-byte X25519 public key, freely shareable
        signing_key: 64-byte Ed25519 signing key pair (seed || verify key)
    """
    private_key: bytes = field(repr=False)
    public_key: bytes
    signing_key: bytes = field(repr=False)

    @property
    def verify_key(self) -> bytes:
        """The Ed25519 public key (last 32 bytes of the signing key)."""
        return self.signing_key[SEED_SIZE:]

    @classmethod
    def from_signing_key(cls, signing_key: bytes) -> 'KeyPair':
        """
        Rebuild a key pair from a 64-byte Ed25519 signing key pair.

        Args:
            signing_key: 32-byte seed followed by the 32-byte Ed25519 public key

        Returns:
            KeyPair with the derived X25519 key-agreement keys

        Raises:
            ValueError: If the length is wrong or the public half does not
                match the seed
        """
        signing_key = bytes(signing_key)
        if len(signing_key) != SIGNING_KEY_SIZE:
            raise ValueError(f"Signing key must be {SIGNING_KEY_SIZE} bytes")

        seed = signing_key[:SEED_SIZE]
        expected = ed25519_public_from_seed(seed)
        if not constant_time_compare(expected, signing_key[SEED_SIZE:]):
            raise ValueError("Signing key public half does not match its seed")

        scalar = seed_to_x25519_scalar(seed)
        return cls(
            private_key=scalar,
            public_key=x25519_public_from_scalar(scalar),
            signing_key=signing_key,
        )

    @classmethod
    def generate(cls, random_source: Callable[[int], bytes] = generate_random_bytes) -> 'KeyPair':
        """
        Generate a fresh identity key pair.

        Args:
            random_source: Callable returning the requested number of secure
                random bytes

        Returns:
            New KeyPair

        Raises:
            RandomSourceError: If the default source fails or the seed is short;
                errors from a custom random_source propagate unchanged
        """
        seed = random_source(SEED_SIZE)
        if len(seed) != SEED_SIZE:
            raise RandomSourceError("Random source returned a short seed")

        key_pair = cls.from_signing_key(seed + ed25519_public_from_seed(seed))
        logger.debug("Generated identity key pair")
        return key_pair
