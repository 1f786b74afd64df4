"""Per-request context for log correlation.

Holds the request ID and the acting username in context variables so every
log line emitted while serving a request can be tied back to it.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
actor_var: ContextVar[Optional[str]] = ContextVar("actor", default=None)


def generate_request_id() -> str:
    return str(uuid.uuid4())


def get_request_id() -> str:
    return request_id_var.get() or "no-request-id"


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def get_actor() -> Optional[str]:
    """Username of the identity acting in this request, if resolved yet."""
    return actor_var.get()


def set_actor(username: Optional[str]) -> None:
    actor_var.set(username)
