"""
Random (version 4) UUIDs used to mint session identifiers.

Only the canonical 36-character hyphenated form is accepted when parsing:
no braces, no ``urn:uuid:`` prefix and no hyphen-less variants.
"""

import uuid
from typing import Callable, Optional

from ..crypto.utils import generate_random_bytes

UUID_SIZE = 16
UUID_STRING_LENGTH = 36
HYPHEN_POSITIONS = (8, 13, 18, 23)
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class UUIDFormatError(ValueError):
    """Raised when a UUID string or byte sequence is malformed."""
    pass


class SessionUUID:
    """
    Immutable 16-byte random identifier.
    """

    __slots__ = ('_bytes',)

    def __init__(self, data: bytes):
        """
        Wrap 16 raw bytes. Use new(), parse_string() or parse_bytes() instead
        of calling this directly.
        """
        if len(data) != UUID_SIZE:
            raise UUIDFormatError(f"UUID must be {UUID_SIZE} bytes, got {len(data)}")
        self._bytes = bytes(data)

    @classmethod
    def new(cls, random_source: Callable[[int], bytes] = generate_random_bytes) -> 'SessionUUID':
        """
        Generate a random version 4 UUID.

        Args:
            random_source: Callable returning secure random bytes

        Returns:
            New SessionUUID
        """
        raw = random_source(UUID_SIZE)
        # version=4 also forces the RFC 4122 variant bits
        return cls(uuid.UUID(bytes=bytes(raw), version=4).bytes)

    @classmethod
    def parse_string(cls, text: str) -> 'SessionUUID':
        """
        Parse the canonical hyphenated form.

        Args:
            text: String such as ``'1b4e28ba-2fa1-41d2-883f-0016d3cca427'``

        Returns:
            Parsed SessionUUID

        Raises:
            UUIDFormatError: On wrong length, misplaced hyphens or non-hex digits
        """
        if not isinstance(text, str):
            raise UUIDFormatError("UUID string must be str")
        if len(text) != UUID_STRING_LENGTH:
            raise UUIDFormatError(
                f"UUID string must be {UUID_STRING_LENGTH} characters, got {len(text)}"
            )

        for position in HYPHEN_POSITIONS:
            if text[position] != '-':
                raise UUIDFormatError(f"Expected '-' at position {position}")

        digits = text.replace('-', '')
        if len(digits) != UUID_SIZE * 2 or not all(c in _HEX_DIGITS for c in digits):
            raise UUIDFormatError("UUID string contains non-hex characters")

        return cls(uuid.UUID(hex=digits).bytes)

    @classmethod
    def parse_bytes(cls, data: bytes) -> 'SessionUUID':
        """
        Build a UUID from its 16-byte form.

        Raises:
            UUIDFormatError: If data is not 16 bytes
        """
        return cls(bytes(data))

    @property
    def version(self) -> int:
        return self._bytes[6] >> 4

    def __bytes__(self) -> bytes:
        return self._bytes

    def __str__(self) -> str:
        return str(uuid.UUID(bytes=self._bytes))

    def __repr__(self) -> str:
        return f"SessionUUID('{self}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SessionUUID):
            return NotImplemented
        return self._bytes == other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)

    # Defined last: the name shadows the builtin inside the class body.
    def bytes(self) -> bytes:
        """Return the 16-byte form."""
        return self._bytes


def new_uuid() -> SessionUUID:
    """Generate a random version 4 UUID."""
    return SessionUUID.new()


def parse_string(text: str) -> SessionUUID:
    """Parse a canonical UUID string."""
    return SessionUUID.parse_string(text)


def parse_bytes(data: bytes) -> SessionUUID:
    """Parse a 16-byte UUID."""
    return SessionUUID.parse_bytes(data)


def equals(a: Optional[SessionUUID], b: Optional[SessionUUID]) -> bool:
    """Compare two possibly-missing UUIDs; None never equals a UUID."""
    if a is None or b is None:
        return False
    return a == b
