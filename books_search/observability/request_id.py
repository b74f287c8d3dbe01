from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from uuid import uuid4


_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


@contextmanager
def request_scope(request_id: str | None = None) -> Iterator[str]:
    """Bind a request id for the duration of one library call.

    An id already bound by the caller is reused so their logs and ours
    correlate; otherwise a fresh UUID is generated.
    """
    active = request_id or get_request_id() or str(uuid4())
    token = _request_id_ctx.set(active)
    try:
        yield active
    finally:
        _request_id_ctx.reset(token)
