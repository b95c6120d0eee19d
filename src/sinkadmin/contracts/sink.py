# src/sinkadmin/contracts/sink.py
"""Request-side sink types: the descriptor and update options."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from sinkadmin.contracts.artifacts import ArtifactSource


@dataclass(frozen=True)
class SinkDescriptor:
    """Identity, configuration and package of a sink, for one create/update call.

    The routing triple is validated at call time, not here, so that a blank
    identifier surfaces as sinkadmin's ValidationError through the normal
    sync/async error channels.

    ``config`` is opaque to the client: its schema belongs to the service.
    The serialized ``sinkConfig`` part is ``config`` with tenant, namespace
    and name written over it.

    Example:
        descriptor = SinkDescriptor(
            tenant="public",
            namespace="default",
            name="mysink",
            config={"inputs": ["persistent://public/default/in"], "parallelism": 2},
            artifact=LocalFile(Path("/tmp/sink.jar")),
        )
    """

    tenant: str
    namespace: str
    name: str
    config: dict[str, Any] = field(default_factory=dict)
    artifact: ArtifactSource | None = None

    def with_artifact(self, artifact: ArtifactSource | None) -> SinkDescriptor:
        """Return a copy using a different package source."""
        return replace(self, artifact=artifact)

    def to_wire(self) -> dict[str, Any]:
        """Mapping sent as the ``sinkConfig`` part (before JSON encoding)."""
        return {
            **self.config,
            "tenant": self.tenant,
            "namespace": self.namespace,
            "name": self.name,
        }


class UpdateOptions(BaseModel):
    """Flags modifying update semantics.

    Omitting options entirely means "use service defaults"; this model is
    only sent when the caller passes one.
    """

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}

    update_auth_data: bool = Field(
        default=False,
        description="Replace previously stored auth data instead of keeping it",
    )
