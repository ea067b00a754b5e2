"""
Error taxonomy for CipherLink cipher suites.

Every failure of a suite operation is reported as one of these exceptions.
Underlying library errors are chained with ``raise ... from``.
"""


class CipherSuiteError(Exception):
    """Base class for all cipher suite failures."""
    pass


class RandomSourceError(CipherSuiteError):
    """Raised when the secure random source cannot supply bytes."""
    pass


class KeyAgreementError(CipherSuiteError):
    """Raised when shared secret derivation fails or yields a degenerate result."""
    pass


class CipherInitError(CipherSuiteError):
    """Raised when the symmetric cipher cannot be constructed (bad key size)."""
    pass


class TruncatedInputError(CipherSuiteError):
    """Raised when a ciphertext blob is shorter than the nonce."""
    pass


class AuthenticationError(CipherSuiteError):
    """
    Raised when tag verification fails.

    Tampering, corruption and a wrong key all produce this same error
    with the same message.
    """

    def __init__(self, message: str = "Authentication verification failed"):
        super().__init__(message)
