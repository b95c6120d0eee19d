# src/sinkadmin/clients/error_mapping.py
"""Single normalization point for transport and server failures.

Two inputs, one output type:

- map_response(): a response with status outside [200, 300) -> ServerError
  (or its status-specific subclass)
- map_exception(): an exception raised instead of a response -> TransportError
  (RequestTimeoutError for timeouts); already-mapped SinkAdminErrors pass
  through untouched

Validation failures never come through here; they are raised before a
request exists.
"""

from __future__ import annotations

import json
from json import JSONDecodeError

import httpx

from sinkadmin.contracts.errors import (
    ConflictError,
    NotAuthorizedError,
    NotFoundError,
    PreconditionFailedError,
    RequestTimeoutError,
    ServerError,
    ServiceUnavailableError,
    SinkAdminError,
    TransportError,
)

_SERVER_ERRORS_BY_STATUS: dict[int, type[ServerError]] = {
    401: NotAuthorizedError,
    403: NotAuthorizedError,
    404: NotFoundError,
    409: ConflictError,
    412: PreconditionFailedError,
    503: ServiceUnavailableError,
}

# Longest body excerpt used as a message when the body is not structured.
_MAX_MESSAGE_CHARS = 2_000


def extract_message(status_code: int, body: str) -> str:
    """Human-readable message for an error response.

    The service reports failures as ``{"reason": "..."}``. Falls back to the
    raw body text, then to ``HTTP <status>`` for an empty body.
    """
    text = body.strip()
    if not text:
        return f"HTTP {status_code}"
    try:
        parsed = json.loads(text)
    except JSONDecodeError:
        return text[:_MAX_MESSAGE_CHARS]
    if isinstance(parsed, dict):
        reason = parsed.get("reason")
        if isinstance(reason, str) and reason:
            return reason
    return text[:_MAX_MESSAGE_CHARS]


def map_response(response: httpx.Response) -> ServerError:
    """Wrap a non-2xx response."""
    status_code = response.status_code
    body = response.text
    error_type = _SERVER_ERRORS_BY_STATUS.get(status_code, ServerError)
    return error_type(extract_message(status_code, body), status_code=status_code, body=body)


def map_exception(exc: BaseException) -> SinkAdminError:
    """Wrap an exception raised in place of a response.

    The original exception is kept as ``__cause__``.
    """
    if isinstance(exc, SinkAdminError):
        return exc
    message = str(exc) or type(exc).__name__
    mapped: TransportError
    if isinstance(exc, httpx.TimeoutException | TimeoutError):
        mapped = RequestTimeoutError(f"request timed out: {message}")
    else:
        mapped = TransportError(message)
    mapped.__cause__ = exc
    return mapped
