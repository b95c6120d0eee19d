"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE: it depends on pydantic only, never on
sinkadmin.core or sinkadmin.clients.

Import patterns:
    from sinkadmin.contracts import SinkDescriptor, LocalFile, NotFoundError
"""

from sinkadmin.contracts.artifacts import (
    BUILTIN_SCHEME,
    ArtifactSource,
    Builtin,
    LocalFile,
    RemoteUrl,
    artifact_from_path,
    artifact_from_url,
    is_builtin,
)
from sinkadmin.contracts.connectors import ConnectorDefinition
from sinkadmin.contracts.enums import ErrorKind, HttpMethod, SinkAction
from sinkadmin.contracts.errors import (
    NO_STATUS_CODE,
    AdminError,
    ConflictError,
    NotAuthorizedError,
    NotFoundError,
    PreconditionFailedError,
    RequestTimeoutError,
    SerializationError,
    ServerError,
    ServiceUnavailableError,
    SinkAdminError,
    TransportError,
    ValidationError,
)
from sinkadmin.contracts.sink import SinkDescriptor, UpdateOptions
from sinkadmin.contracts.status import (
    ExceptionInformation,
    SinkInstanceStatus,
    SinkInstanceStatusData,
    SinkStatus,
)

__all__ = [
    "BUILTIN_SCHEME",
    "NO_STATUS_CODE",
    "AdminError",
    "ArtifactSource",
    "Builtin",
    "ConflictError",
    "ConnectorDefinition",
    "ErrorKind",
    "ExceptionInformation",
    "HttpMethod",
    "LocalFile",
    "NotAuthorizedError",
    "NotFoundError",
    "PreconditionFailedError",
    "RemoteUrl",
    "RequestTimeoutError",
    "SerializationError",
    "ServerError",
    "ServiceUnavailableError",
    "SinkAction",
    "SinkAdminError",
    "SinkDescriptor",
    "SinkInstanceStatus",
    "SinkInstanceStatusData",
    "SinkStatus",
    "TransportError",
    "UpdateOptions",
    "ValidationError",
    "artifact_from_path",
    "artifact_from_url",
    "is_builtin",
]
