# src/sinkadmin/contracts/connectors.py
"""Built-in connector definitions."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from sinkadmin.contracts.artifacts import BUILTIN_SCHEME


class ConnectorDefinition(BaseModel):
    """A connector package pre-registered on the service.

    A package may provide a source, a sink, or both; the class fields for the
    side it does not implement are None.
    """

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel, "extra": "ignore"}

    name: str
    description: str | None = None
    source_class: str | None = None
    sink_class: str | None = None
    source_config_class: str | None = None
    sink_config_class: str | None = None

    @property
    def builtin_reference(self) -> str:
        """Reference usable as a create/update package, e.g. ``builtin://cassandra``."""
        return f"{BUILTIN_SCHEME}{self.name}"
