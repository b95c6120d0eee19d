# src/sinkadmin/contracts/enums.py
"""Kinds and actions shared across module boundaries."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Discriminator for the four failure sources a call can end in.

    Values:
        VALIDATION: A routing identifier was blank; nothing was sent
        SERIALIZATION: A request part could not be encoded, or a response
            body could not be decoded into the declared type
        TRANSPORT: No response was received (connect, timeout, protocol)
        SERVER: A response arrived with a status outside [200, 300)
    """

    VALIDATION = "validation"
    SERIALIZATION = "serialization"
    TRANSPORT = "transport"
    SERVER = "server"


class SinkAction(StrEnum):
    """Trailing path segment for sink-scoped sub-resources."""

    STATUS = "status"
    RESTART = "restart"
    STOP = "stop"
    START = "start"


class HttpMethod(StrEnum):
    """HTTP verbs used by the admin API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
