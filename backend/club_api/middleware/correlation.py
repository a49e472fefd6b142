"""Request correlation ids.

Every response carries an X-Request-ID header: the client's value is echoed
back when present, otherwise a fresh UUID is generated. The same id is
attached to log entries by ``club_api.core.logging.add_correlation_id``.
"""

import uuid

from asgi_correlation_id import CorrelationIdMiddleware
from asgi_correlation_id.context import correlation_id
from fastapi import FastAPI

REQUEST_ID_HEADER = "X-Request-ID"


def setup_correlation_middleware(app: FastAPI) -> None:
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name=REQUEST_ID_HEADER,
        generator=lambda: str(uuid.uuid4()),
        validator=None,  # accept any client-supplied format
        transformer=lambda a: a,
    )


def get_correlation_id() -> str | None:
    """Correlation id of the current request, or None outside a request."""
    try:
        return correlation_id.get()
    except LookupError:
        return None


__all__ = ["setup_correlation_middleware", "get_correlation_id", "REQUEST_ID_HEADER"]
