"""
Secure memory operations for CipherLink.

Python cannot guarantee that immutable ``bytes`` are ever wiped, so only
mutable buffers (bytearray, memoryview) can be cleared here.
"""

from typing import Union


def secure_zero(data: Union[bytearray, memoryview]) -> None:
    """
    Overwrite a mutable buffer with zeros in place.

    Args:
        data: Memory to zero (must be mutable)

    Raises:
        TypeError: If the buffer is immutable
    """
    if isinstance(data, memoryview):
        if data.readonly:
            raise TypeError("Cannot zero a read-only memoryview")
        data = data.cast('B')
    elif not isinstance(data, bytearray):
        raise TypeError("Data must be bytearray or memoryview")

    data[:] = bytes(len(data))
