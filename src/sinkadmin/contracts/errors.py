# src/sinkadmin/contracts/errors.py
"""Error taxonomy for admin calls.

Every failure a caller can observe is a SinkAdminError. The ``kind``
attribute discriminates the four sources:

    SinkAdminError
    ├── ValidationError          (raised before any request is built)
    ├── SerializationError       (request encoding / response decoding)
    └── AdminError               (status_code + message)
        ├── TransportError       (no response; status_code == NO_STATUS_CODE)
        │   └── RequestTimeoutError
        └── ServerError          (non-2xx response; carries the body)
            ├── NotAuthorizedError       401 / 403
            ├── NotFoundError            404
            ├── ConflictError            409
            ├── PreconditionFailedError  412
            └── ServiceUnavailableError  503

Synchronous callers get these raised. Asynchronous callers get a future
whose ``exception()`` is the same object.
"""

from typing import ClassVar

from sinkadmin.contracts.enums import ErrorKind

# Status code carried by errors raised before any response was received.
NO_STATUS_CODE = -1


class SinkAdminError(Exception):
    """Base class for every error surfaced by the admin client."""

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(SinkAdminError):
    """A required routing identifier (tenant, namespace, sink name) is blank.

    Raised before dispatch. Never retried.
    """

    kind = ErrorKind.VALIDATION


class SerializationError(SinkAdminError):
    """A request part could not be encoded or a response could not be decoded."""

    kind = ErrorKind.SERIALIZATION


class AdminError(SinkAdminError):
    """Failure reported by, or on the way to, the admin service.

    Transport and server failures share this type so that callers never
    need to branch on the HTTP implementation underneath.

    Attributes:
        status_code: HTTP status, or NO_STATUS_CODE when no response arrived
        message: Human-readable description (server reason or exception text)
    """

    def __init__(self, message: str, *, status_code: int = NO_STATUS_CODE) -> None:
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        if self.status_code == NO_STATUS_CODE:
            return self.message
        return f"HTTP {self.status_code}: {self.message}"


class TransportError(AdminError):
    """No response was received: connection refused, reset, protocol error."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=NO_STATUS_CODE)


class RequestTimeoutError(TransportError):
    """The request, or the blocking wait for it, ran out of time."""


class ServerError(AdminError):
    """The service answered with a status outside [200, 300).

    Attributes:
        status_code: HTTP status of the response
        body: Raw response body text (may be empty)
    """

    kind = ErrorKind.SERVER

    def __init__(self, message: str, *, status_code: int, body: str = "") -> None:
        self.body = body
        super().__init__(message, status_code=status_code)


class NotAuthorizedError(ServerError):
    """401 or 403: the caller lacks permission for the operation."""


class NotFoundError(ServerError):
    """404: tenant, namespace or sink does not exist."""


class ConflictError(ServerError):
    """409: the sink already exists, or a concurrent change won."""


class PreconditionFailedError(ServerError):
    """412: the service rejected the request's preconditions."""


class ServiceUnavailableError(ServerError):
    """503: the service (or the worker owning the sink) is unavailable."""
