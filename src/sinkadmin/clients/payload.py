# src/sinkadmin/clients/payload.py
"""Request body construction for create and update.

Create and update send ``multipart/form-data`` with named parts in this order:

1. ``sinkConfig``    application/json, always
2. ``data``          application/octet-stream, LocalFile only
   or ``url``        text/plain, RemoteUrl only
3. ``updateOptions`` application/json, update only and only when supplied

Builtin packages and a None artifact add no part 2: the service keeps (or
resolves) the package itself. At most one of ``data``/``url`` is ever present.

Parts are returned in httpx's ``files`` shape so the engine can build the
request with the boundary and per-part headers httpx generates.
"""

from __future__ import annotations

import json
from typing import Any

from sinkadmin.contracts.artifacts import ArtifactSource, Builtin, LocalFile, RemoteUrl
from sinkadmin.contracts.errors import SerializationError
from sinkadmin.contracts.sink import SinkDescriptor, UpdateOptions

JSON_MEDIA_TYPE = "application/json"
OCTET_STREAM_MEDIA_TYPE = "application/octet-stream"
TEXT_MEDIA_TYPE = "text/plain"

SINK_CONFIG_PART = "sinkConfig"
DATA_PART = "data"
URL_PART = "url"
UPDATE_OPTIONS_PART = "updateOptions"

# One multipart part as httpx expects it: (name, (filename, content, content_type)).
# A None filename renders a plain form field with an explicit Content-Type.
MultipartPart = tuple[str, tuple[str | None, bytes, str]]

# Key in the sink config that names the package for built-in connectors.
_ARCHIVE_KEY = "archive"


def _dumps(value: Any, what: str) -> bytes:
    """JSON-encode strictly: NaN/Infinity and non-JSON types are rejected."""
    try:
        return json.dumps(value, allow_nan=False, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"cannot serialize {what}: {e}") from e


def encode_sink_config(descriptor: SinkDescriptor) -> bytes:
    """Serialize the descriptor's wire mapping as the ``sinkConfig`` part."""
    wire = descriptor.to_wire()
    artifact = descriptor.artifact
    if isinstance(artifact, Builtin) and _ARCHIVE_KEY not in wire:
        # The service resolves the package from the config, not from a part
        wire[_ARCHIVE_KEY] = artifact.reference
    return _dumps(wire, "sink config")


def encode_update_options(options: UpdateOptions) -> bytes:
    """Serialize update options with their camelCase wire names."""
    return _dumps(options.model_dump(mode="json", by_alias=True), "update options")


def encode_artifact(artifact: ArtifactSource | None) -> MultipartPart | None:
    """The ``data`` or ``url`` part for an artifact, or None when nothing is sent."""
    if artifact is None or isinstance(artifact, Builtin):
        return None
    if isinstance(artifact, LocalFile):
        try:
            content = artifact.path.read_bytes()
        except OSError as e:
            raise SerializationError(f"cannot read package file {artifact.path}: {e}") from e
        return (DATA_PART, (artifact.filename, content, OCTET_STREAM_MEDIA_TYPE))
    if isinstance(artifact, RemoteUrl):
        return (URL_PART, (None, artifact.url.encode("utf-8"), TEXT_MEDIA_TYPE))
    raise SerializationError(f"unsupported artifact source: {type(artifact).__name__}")


def build_multipart(
    descriptor: SinkDescriptor,
    *,
    options: UpdateOptions | None = None,
) -> list[MultipartPart]:
    """Build the ordered multipart parts for a create or update request.

    The package comes from ``descriptor.artifact``.

    Raises:
        SerializationError: config or options are not JSON-serializable,
            or a LocalFile cannot be read
    """
    parts: list[MultipartPart] = [
        (SINK_CONFIG_PART, (None, encode_sink_config(descriptor), JSON_MEDIA_TYPE)),
    ]
    artifact_part = encode_artifact(descriptor.artifact)
    if artifact_part is not None:
        parts.append(artifact_part)
    if options is not None:
        parts.append((UPDATE_OPTIONS_PART, (None, encode_update_options(options), JSON_MEDIA_TYPE)))
    return parts


def part_names(parts: list[MultipartPart]) -> list[str]:
    """Names of the parts, in order. Used for logging."""
    return [name for name, _ in parts]
