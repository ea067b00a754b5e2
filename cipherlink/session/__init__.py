"""
Session helpers for CipherLink.

- identifier: random version 4 UUIDs for naming sessions
- context: propagation of an integer session id through a unit of work
"""

from .identifier import SessionUUID, UUIDFormatError, new_uuid, parse_string, parse_bytes, equals
from .context import NO_SESSION, session_id_from_context, session_scope, run_with_session_id

__all__ = [
    'SessionUUID',
    'UUIDFormatError',
    'new_uuid',
    'parse_string',
    'parse_bytes',
    'equals',
    'NO_SESSION',
    'session_id_from_context',
    'session_scope',
    'run_with_session_id',
]
