"""
sinkadmin: management-plane client for stream-processing sinks.

Create, update, inspect, control and delete sinks on a cluster's admin
service, with every operation available as a blocking call and as a
non-blocking call returning a concurrent.futures.Future.
"""

from sinkadmin.admin import SinkAdmin
from sinkadmin.contracts import (
    AdminError,
    Builtin,
    LocalFile,
    RemoteUrl,
    SinkAdminError,
    SinkDescriptor,
    UpdateOptions,
)

__version__ = "0.1.0"

__all__ = [
    "AdminError",
    "Builtin",
    "LocalFile",
    "RemoteUrl",
    "SinkAdmin",
    "SinkAdminError",
    "SinkDescriptor",
    "UpdateOptions",
    "__version__",
]
