"""
Cryptographic utilities for random number generation and byte comparison.

The process-wide OS CSPRNG is the only shared resource touched by the
cipher suites. It is thread-safe and needs no initialisation.
"""

import os
import secrets
import logging

from .errors import RandomSourceError

logger = logging.getLogger(__name__)


def generate_random_bytes(length: int) -> bytes:
    """
    Generate cryptographically secure random bytes.

    Args:
        length: Number of random bytes to generate

    Returns:
        Cryptographically secure random bytes

    Raises:
        RandomSourceError: If the OS entropy source is unavailable
    """
    if length < 0:
        raise ValueError("Random byte length must be non-negative")

    try:
        data = os.urandom(length)
    except (OSError, NotImplementedError) as e:
        logger.error("Secure random source unavailable")
        raise RandomSourceError(f"Secure random source unavailable: {e}") from e

    if len(data) != length:
        raise RandomSourceError(
            f"Secure random source returned {len(data)} of {length} bytes"
        )
    return data


def constant_time_compare(a: bytes, b: bytes) -> bool:
    """
    Compare two byte sequences in constant time.

    Args:
        a: First byte sequence
        b: Second byte sequence

    Returns:
        True if sequences are equal, False otherwise
    """
    return secrets.compare_digest(a, b)


def is_all_zero(data: bytes) -> bool:
    """Check for an all-zero value without an early exit."""
    return constant_time_compare(data, bytes(len(data)))
