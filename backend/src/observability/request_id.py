"""Request ID management for log correlation.

HTTP requests, SMTP deliveries and Celery tasks each run under their own
request ID so every log line of one unit of work can be correlated.
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def generate_request_id() -> str:
    """Generate a new UUID4 request ID."""
    return str(uuid.uuid4())


def get_request_id() -> str:
    """Current request ID, or "no-request-id" outside of any request."""
    return request_id_var.get() or "no-request-id"


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


@contextmanager
def request_id_scope(request_id: Optional[str] = None) -> Iterator[str]:
    """Run a block under a request ID, restoring the previous one afterwards.

    Used by entry points that are not HTTP requests (SMTP, Celery tasks).
    """
    token = request_id_var.set(request_id or generate_request_id())
    try:
        yield request_id_var.get()
    finally:
        request_id_var.reset(token)
