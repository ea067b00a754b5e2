"""
CipherLink authenticated encryption.

Two parties holding long-term identity key pairs derive a shared X25519
secret and use it to seal and open individual messages with AES-256-GCM.

Key Features:
- Ed25519 identity keys with standard conversion to X25519 key-agreement keys
- Rejection of degenerate (low-order) key agreement results
- Fresh random nonce per message, blob layout nonce || ciphertext || tag
- Stateless, thread-safe cipher suites behind an abstract interface
- Buffer pool, session UUIDs and session-id propagation helpers

Basic Usage:
    >>> from cipherlink import create_cipher_suite
    >>>
    >>> suite = create_cipher_suite()
    >>> alice = suite.generate_key_pair()
    >>> bob = suite.generate_key_pair()
    >>>
    >>> secret = suite.derive_shared_secret(alice.private_key, bob.public_key)
    >>> blob = suite.encrypt(secret, b"Hello, Bob!")
    >>>
    >>> bob_secret = suite.derive_shared_secret(bob.private_key, alice.public_key)
    >>> suite.decrypt(bob_secret, blob)
    b'Hello, Bob!'
"""

import logging

__version__ = "1.0.0"

from .crypto.errors import (
    CipherSuiteError,
    RandomSourceError,
    KeyAgreementError,
    CipherInitError,
    TruncatedInputError,
    AuthenticationError,
)
from .crypto.keys import KeyPair
from .crypto.suite import (
    CipherSuite,
    X25519AESGCMSuite,
    X25519ChaCha20Poly1305Suite,
    SUPPORTED_SUITES,
    create_cipher_suite,
    generate_key_pair,
    derive_shared_secret,
    encrypt,
    decrypt,
)
from .config import CipherLinkConfig, ConfigError, load_config
from .session.identifier import SessionUUID, UUIDFormatError
from .session.context import session_id_from_context, session_scope, run_with_session_id
from .utils.bytespool import BytesPool

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    '__version__',

    # Cipher suites
    'CipherSuite',
    'X25519AESGCMSuite',
    'X25519ChaCha20Poly1305Suite',
    'SUPPORTED_SUITES',
    'create_cipher_suite',
    'generate_key_pair',
    'derive_shared_secret',
    'encrypt',
    'decrypt',
    'KeyPair',

    # Errors
    'CipherSuiteError',
    'RandomSourceError',
    'KeyAgreementError',
    'CipherInitError',
    'TruncatedInputError',
    'AuthenticationError',

    # Configuration
    'CipherLinkConfig',
    'ConfigError',
    'load_config',

    # Session helpers
    'SessionUUID',
    'UUIDFormatError',
    'session_id_from_context',
    'session_scope',
    'run_with_session_id',
    'BytesPool',
]
