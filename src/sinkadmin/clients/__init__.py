"""Admin-service clients.

Layering, leaf to root:

    validation / paths / payload      pure request construction
    engine                            httpx.AsyncClient on a private loop thread
    error_mapping                     transport + non-2xx -> SinkAdminError
    resource                          dispatch (futures) + sync bridge
    sinks                             the sink operation surface

Example:
    from sinkadmin.clients import HttpEngine, ResourceClient, SinksClient

    engine = HttpEngine("http://localhost:8080")
    sinks = SinksClient(ResourceClient(engine, read_timeout=60.0))
    print(sinks.list_sinks("public", "default"))

Most callers should use sinkadmin.SinkAdmin, which wires these together
from settings.
"""

from sinkadmin.clients.engine import EngineClosedError, HttpEngine
from sinkadmin.clients.error_mapping import map_exception, map_response
from sinkadmin.clients.resource import ResourceClient, decode_as, decode_nothing
from sinkadmin.clients.sinks import SinksClient

__all__ = [
    "EngineClosedError",
    "HttpEngine",
    "ResourceClient",
    "SinksClient",
    "decode_as",
    "decode_nothing",
    "map_exception",
    "map_response",
]
