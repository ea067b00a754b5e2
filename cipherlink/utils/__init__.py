"""
Utility functions and helpers for CipherLink.
"""

from .bytespool import BytesPool, SIZE_CLASSES, allocate, free
from .memory import secure_zero

__all__ = [
    'BytesPool',
    'SIZE_CLASSES',
    'allocate',
    'free',
    'secure_zero',
]
