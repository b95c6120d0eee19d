# src/sinkadmin/contracts/status.py
"""Read-only status snapshots returned by the service.

These are decoded from the service's camelCase JSON. Unknown fields are
ignored so a newer service does not break an older client.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_WIRE_MODEL_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
    extra="ignore",
)


class ExceptionInformation(BaseModel):
    """One recent exception reported by a sink instance."""

    model_config = _WIRE_MODEL_CONFIG

    exception_string: str = ""
    timestamp_ms: int = 0


class SinkInstanceStatusData(BaseModel):
    """Status of a single sink instance."""

    model_config = _WIRE_MODEL_CONFIG

    running: bool = False
    error: str | None = None
    num_restarts: int = 0
    num_read_from_pulsar: int = 0
    num_system_exceptions: int = 0
    latest_system_exceptions: list[ExceptionInformation] = Field(default_factory=list)
    num_sink_exceptions: int = 0
    latest_sink_exceptions: list[ExceptionInformation] = Field(default_factory=list)
    num_written_to_sink: int = 0
    last_received_time: int = 0
    worker_id: str | None = None


class SinkInstanceStatus(BaseModel):
    """Status entry for one instance inside an aggregate SinkStatus."""

    model_config = _WIRE_MODEL_CONFIG

    instance_id: int
    status: SinkInstanceStatusData = Field(default_factory=SinkInstanceStatusData)


class SinkStatus(BaseModel):
    """Aggregate status over all instances of a sink."""

    model_config = _WIRE_MODEL_CONFIG

    num_instances: int = 0
    num_running: int = 0
    instances: list[SinkInstanceStatus] = Field(default_factory=list)

    def instance(self, instance_id: int) -> SinkInstanceStatusData | None:
        """Status of one instance, or None if the snapshot does not include it."""
        for entry in self.instances:
            if entry.instance_id == instance_id:
                return entry.status
        return None
