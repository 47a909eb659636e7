"""Scoped logging context.

Fields pushed here (``run_id``, ``employer``, ``company_name`` ...) are merged
into every record emitted while the scope is active. Backed by contextvars so
the scheduler worker thread gets its own context.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional


LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active context fields."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge new fields into the active context.

    Args:
        **kwargs: Fields to add

    Returns:
        Token to pass to pop_log_context() to restore the previous state
    """
    return LogContextVar.set({**LogContextVar.get(), **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the context captured by ``token``."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop all context fields. Used by tests."""
    LogContextVar.set({})


class log_context:
    """Context manager that pushes fields on entry and restores on exit.

    Example:
        >>> with log_context(run_id="abc123"):
        ...     logger.info("Searching")  # record carries run_id
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
        return False
