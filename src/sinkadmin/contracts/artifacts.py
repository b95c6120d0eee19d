# src/sinkadmin/contracts/artifacts.py
"""Artifact sources for create/update calls.

A sink's code package reaches the service in one of three ways:

- LocalFile: the client uploads the file as the ``data`` multipart part
- RemoteUrl: the client sends the URL as the ``url`` part; the service fetches it
- Builtin: the package is already registered on the service; nothing is sent

The ``builtin://`` prefix is a contract shared with the service. It is matched
as an exact, case-sensitive prefix on whatever path or URL the caller supplies,
and it suppresses both the ``data`` and ``url`` parts.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

BUILTIN_SCHEME = "builtin://"


@dataclass(frozen=True)
class LocalFile:
    """Package on the local filesystem, uploaded with the request."""

    path: Path

    @property
    def filename(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class RemoteUrl:
    """Package the service downloads itself (http, https, file, ...)."""

    url: str


@dataclass(frozen=True)
class Builtin:
    """Package pre-registered on the service, e.g. ``builtin://cassandra``."""

    reference: str

    def __post_init__(self) -> None:
        if not is_builtin(self.reference):
            raise ValueError(f"Builtin reference must start with {BUILTIN_SCHEME!r}, got {self.reference!r}")

    @property
    def connector_name(self) -> str:
        return self.reference[len(BUILTIN_SCHEME) :]


ArtifactSource = LocalFile | RemoteUrl | Builtin


def is_builtin(value: str | os.PathLike[str] | None) -> bool:
    """Whether a path or URL string names a built-in package."""
    if value is None:
        return False
    return os.fspath(value).startswith(BUILTIN_SCHEME)


def artifact_from_path(value: str | os.PathLike[str] | None) -> ArtifactSource | None:
    """Classify a caller-supplied file path.

    Returns None for None (the service keeps whatever package it already has),
    Builtin for ``builtin://`` references, LocalFile otherwise.
    """
    if value is None:
        return None
    raw = os.fspath(value)
    if is_builtin(raw):
        return Builtin(raw)
    return LocalFile(Path(raw))


def artifact_from_url(value: str | None) -> ArtifactSource | None:
    """Classify a caller-supplied package URL.

    Returns None for None, Builtin for ``builtin://`` references, RemoteUrl otherwise.
    """
    if value is None:
        return None
    if is_builtin(value):
        return Builtin(value)
    return RemoteUrl(value)
