# src/sinkadmin/clients/validation.py
"""Presence checks on routing identifiers.

Pure functions with no shared state. Every public operation calls one of
these before building a request, so a blank identifier never reaches the
network.
"""

from __future__ import annotations

from sinkadmin.contracts.errors import ValidationError


def is_blank(value: str | None) -> bool:
    """True for None, the empty string, or whitespace only."""
    return value is None or not value.strip()


def validate_namespace(tenant: str | None, namespace: str | None) -> None:
    """Require non-blank tenant and namespace.

    Raises:
        ValidationError: "tenant is required" or "namespace is required"
    """
    if is_blank(tenant):
        raise ValidationError("tenant is required")
    if is_blank(namespace):
        raise ValidationError("namespace is required")


def validate_sink_name(tenant: str | None, namespace: str | None, sink_name: str | None) -> None:
    """Require non-blank tenant, namespace and sink name (checked in that order).

    Raises:
        ValidationError: "tenant is required", "namespace is required"
            or "sink name is required"
    """
    validate_namespace(tenant, namespace)
    if is_blank(sink_name):
        raise ValidationError("sink name is required")
