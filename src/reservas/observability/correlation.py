"""Correlation ID management for request tracing.

Every HTTP request runs inside a correlation scope; log records emitted
while the scope is active carry its ID.
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

# Context variable for correlation ID - accessible across async calls
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

CORRELATION_ID_HEADER = "X-Correlation-ID"

# Incoming IDs longer than this are replaced rather than echoed back.
MAX_CORRELATION_ID_LENGTH = 128


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


def resolve_correlation_id(incoming: str | None) -> str:
    """Reuse a caller-supplied correlation ID when usable, else generate one."""
    if incoming:
        candidate = incoming.strip()
        if (
            candidate
            and len(candidate) <= MAX_CORRELATION_ID_LENGTH
            and candidate.isprintable()
        ):
            return candidate
    return generate_correlation_id()


def get_correlation_id() -> str:
    """Get current correlation ID from context."""
    return correlation_id_var.get()


@contextmanager
def correlation_scope(cid: str) -> Iterator[str]:
    """Bind cid as the current correlation ID until the block exits."""
    token = correlation_id_var.set(cid)
    try:
        yield cid
    finally:
        correlation_id_var.reset(token)
