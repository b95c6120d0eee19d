# src/sinkadmin/clients/paths.py
"""Resource path construction.

Segments are joined in a fixed order:

    {root}/{tenant}/{namespace}[/{sink}][/{instance_id}][/{action}]

Each caller-supplied segment is percent-encoded, so a name containing "/"
stays one segment.
"""

from __future__ import annotations

from urllib.parse import quote

from sinkadmin.contracts.enums import SinkAction

SINK_ROOT = "/admin/v3/sink"
BUILTIN_SINKS_SEGMENT = "builtinsinks"
RELOAD_BUILTIN_SINKS_SEGMENT = "reloadBuiltInSinks"


def _segment(value: str | int) -> str:
    return quote(str(value), safe="")


def join_path(root: str, *segments: str | int) -> str:
    """Append encoded segments to an already-encoded root."""
    base = root.rstrip("/")
    if not segments:
        return base
    return base + "/" + "/".join(_segment(s) for s in segments)


def sink_path(
    root: str,
    tenant: str,
    namespace: str,
    sink_name: str | None = None,
    instance_id: int | None = None,
    action: SinkAction | None = None,
) -> str:
    """Build the path for a namespace- or sink-scoped operation.

    Args:
        root: Resource root, normally SINK_ROOT
        tenant: Tenant segment
        namespace: Namespace segment
        sink_name: Sink segment (omitted for namespace listings)
        instance_id: Instance index, rendered as a decimal string
        action: Trailing sub-resource (status/restart/stop/start)

    Raises:
        ValueError: instance_id given without sink_name
    """
    if instance_id is not None and sink_name is None:
        raise ValueError("instance_id requires sink_name")
    segments: list[str | int] = [tenant, namespace]
    if sink_name is not None:
        segments.append(sink_name)
    if instance_id is not None:
        segments.append(int(instance_id))
    if action is not None:
        segments.append(action.value)
    return join_path(root, *segments)


def builtin_sinks_path(root: str = SINK_ROOT) -> str:
    return join_path(root, BUILTIN_SINKS_SEGMENT)


def reload_builtin_sinks_path(root: str = SINK_ROOT) -> str:
    return join_path(root, RELOAD_BUILTIN_SINKS_SEGMENT)
