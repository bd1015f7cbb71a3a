"""Request context management using contextvars.

Holds the request ID of the HTTP request being served so log lines
emitted deep in the allocator or cache layer can be tied back to it.

Usage:
    token = set_request_id("abc123")
    ...
    reset_request_id(token)
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> Token[str | None]:
    """Bind request_id to the current async task; return a token for reset."""
    return _request_id.set(request_id)


def reset_request_id(token: Token[str | None]) -> None:
    _request_id.reset(token)


def get_request_id() -> str | None:
    """Return the request ID of the current task, or None outside a request."""
    return _request_id.get()
