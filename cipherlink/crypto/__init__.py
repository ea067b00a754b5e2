"""
Cryptographic primitives for CipherLink.

This module provides:
- Identity key pairs (Ed25519 signing keys with derived X25519 keys)
- X25519 key agreement
- Single-message authenticated encryption (AES-256-GCM, ChaCha20-Poly1305)
"""

from .errors import (
    CipherSuiteError,
    RandomSourceError,
    KeyAgreementError,
    CipherInitError,
    TruncatedInputError,
    AuthenticationError,
)
from .keys import KeyPair
from .suite import (
    CipherSuite,
    X25519CipherSuite,
    X25519AESGCMSuite,
    X25519ChaCha20Poly1305Suite,
    SUPPORTED_SUITES,
    DEFAULT_SUITE,
    create_cipher_suite,
    generate_key_pair,
    derive_shared_secret,
    encrypt,
    decrypt,
)

__all__ = [
    'CipherSuiteError',
    'RandomSourceError',
    'KeyAgreementError',
    'CipherInitError',
    'TruncatedInputError',
    'AuthenticationError',
    'KeyPair',
    'CipherSuite',
    'X25519CipherSuite',
    'X25519AESGCMSuite',
    'X25519ChaCha20Poly1305Suite',
    'SUPPORTED_SUITES',
    'DEFAULT_SUITE',
    'create_cipher_suite',
    'generate_key_pair',
    'derive_shared_secret',
    'encrypt',
    'decrypt',
]
