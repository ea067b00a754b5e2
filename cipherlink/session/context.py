"""
Session-id propagation across a unit of work.

A context variable carries the integer session id through call chains,
threads started with a copied context, and asyncio tasks. Lookups outside a
session return NO_SESSION (0).
"""

import contextvars
from contextlib import contextmanager
from typing import Any, Callable, Iterator

NO_SESSION = 0

_session_id: contextvars.ContextVar = contextvars.ContextVar(
    'cipherlink_session_id', default=NO_SESSION
)


def session_id_from_context() -> int:
    """Return the current session id, or 0 when none is bound."""
    return _session_id.get()


@contextmanager
def session_scope(session_id: int) -> Iterator[int]:
    """
    Bind a session id for the duration of a ``with`` block.

    The previous value is restored on exit, so scopes nest.

    Args:
        session_id: Integer identifier for the unit of work (not validated)
    """
    token = _session_id.set(session_id)
    try:
        yield session_id
    finally:
        _session_id.reset(token)


def run_with_session_id(session_id: int, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """
    Run ``func`` in a copy of the current context with ``session_id`` bound.

    The caller's context is left untouched.
    """
    def _run() -> Any:
        with session_scope(session_id):
            return func(*args, **kwargs)

    return contextvars.copy_context().run(_run)
