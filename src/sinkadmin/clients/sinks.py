# src/sinkadmin/clients/sinks.py
"""Sink operations on the admin service.

Every operation has two forms with identical validation, path, payload and
error rules:

- ``name_async(...)`` returns a concurrent.futures.Future immediately. A
  blank identifier or an encoding problem yields an already-failed future;
  nothing is sent.
- ``name(...)`` blocks on the async form through ResourceClient.sync() and
  raises the same SinkAdminError the future would carry.

Request shapes:

    list                GET    {root}/{tenant}/{namespace}
    get                 GET    .../{sink}
    status              GET    .../{sink}[/{instance}]/status
    create              POST   .../{sink}          multipart
    update              PUT    .../{sink}          multipart
    delete              DELETE .../{sink}
    restart/stop/start  POST   .../{sink}[/{instance}]/{action}   empty JSON
    built-in list       GET    {root}/builtinsinks
    built-in reload     POST   {root}/reloadBuiltInSinks          empty JSON
"""

from __future__ import annotations

import os
from concurrent.futures import Future
from typing import Any, overload

from sinkadmin.clients.payload import build_multipart, part_names
from sinkadmin.clients.paths import (
    SINK_ROOT,
    builtin_sinks_path,
    reload_builtin_sinks_path,
    sink_path,
)
from sinkadmin.clients.resource import ResourceClient, decode_as
from sinkadmin.clients.validation import validate_namespace, validate_sink_name
from sinkadmin.contracts.artifacts import artifact_from_path, artifact_from_url
from sinkadmin.contracts.connectors import ConnectorDefinition
from sinkadmin.contracts.enums import SinkAction
from sinkadmin.contracts.errors import SinkAdminError
from sinkadmin.contracts.sink import SinkDescriptor, UpdateOptions
from sinkadmin.contracts.status import SinkInstanceStatusData, SinkStatus
from sinkadmin.core.logging import get_logger

logger = get_logger(__name__)

_decode_names = decode_as(list[str])
_decode_config = decode_as(dict[str, Any])
_decode_status = decode_as(SinkStatus)
_decode_instance_status = decode_as(SinkInstanceStatusData)
_decode_connectors = decode_as(list[ConnectorDefinition])


class SinksClient:
    """Create, update, inspect, control and delete sinks.

    Holds a ResourceClient; owns no state of its own, so one instance can
    serve any number of threads.

    Futures returned by the ``*_async`` methods settle, and run their
    done-callbacks, on the engine thread. Chain further work from a
    callback with another ``*_async`` call. A blocking method called
    there raises TransportError instead of waiting on itself.

    Example:
        sinks = SinksClient(ResourceClient(engine, read_timeout=60.0))
        sinks.create_sink(
            SinkDescriptor("public", "default", "es-out", config={"inputs": ["in"]}),
            file_name="/tmp/elastic-sink.nar",
        )
        status = sinks.get_sink_status("public", "default", "es-out")
    """

    def __init__(self, resource: ResourceClient, *, root: str = SINK_ROOT) -> None:
        self._resource = resource
        self._root = root

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_sinks_async(self, tenant: str, namespace: str) -> Future[list[str]]:
        try:
            validate_namespace(tenant, namespace)
        except SinkAdminError as e:
            return self._resource.failed(e)
        return self._resource.get(sink_path(self._root, tenant, namespace), _decode_names)

    def list_sinks(self, tenant: str, namespace: str) -> list[str]:
        """Names of the sinks registered in a namespace."""
        return self._resource.sync(self.list_sinks_async(tenant, namespace))

    def get_sink_async(self, tenant: str, namespace: str, sink_name: str) -> Future[dict[str, Any]]:
        try:
            validate_sink_name(tenant, namespace, sink_name)
        except SinkAdminError as e:
            return self._resource.failed(e)
        return self._resource.get(sink_path(self._root, tenant, namespace, sink_name), _decode_config)

    def get_sink(self, tenant: str, namespace: str, sink_name: str) -> dict[str, Any]:
        """Stored configuration of a sink, as the service returns it."""
        return self._resource.sync(self.get_sink_async(tenant, namespace, sink_name))

    @overload
    def get_sink_status_async(self, tenant: str, namespace: str, sink_name: str) -> Future[SinkStatus]: ...

    @overload
    def get_sink_status_async(
        self, tenant: str, namespace: str, sink_name: str, instance_id: int
    ) -> Future[SinkInstanceStatusData]: ...

    def get_sink_status_async(
        self,
        tenant: str,
        namespace: str,
        sink_name: str,
        instance_id: int | None = None,
    ) -> Future[SinkStatus] | Future[SinkInstanceStatusData]:
        try:
            validate_sink_name(tenant, namespace, sink_name)
        except SinkAdminError as e:
            return self._resource.failed(e)
        path = sink_path(self._root, tenant, namespace, sink_name, instance_id, SinkAction.STATUS)
        if instance_id is None:
            return self._resource.get(path, _decode_status)
        return self._resource.get(path, _decode_instance_status)

    @overload
    def get_sink_status(self, tenant: str, namespace: str, sink_name: str) -> SinkStatus: ...

    @overload
    def get_sink_status(self, tenant: str, namespace: str, sink_name: str, instance_id: int) -> SinkInstanceStatusData: ...

    def get_sink_status(
        self,
        tenant: str,
        namespace: str,
        sink_name: str,
        instance_id: int | None = None,
    ) -> SinkStatus | SinkInstanceStatusData:
        """Aggregate status of all instances, or of one instance when ``instance_id`` is given."""
        if instance_id is None:
            return self._resource.sync(self.get_sink_status_async(tenant, namespace, sink_name))
        return self._resource.sync(self.get_sink_status_async(tenant, namespace, sink_name, instance_id))

    # -------------------------------------------------------------------------
    # Create / update / delete
    # -------------------------------------------------------------------------

    def _submit(
        self,
        descriptor: SinkDescriptor,
        *,
        update: bool,
        options: UpdateOptions | None = None,
    ) -> Future[None]:
        try:
            validate_sink_name(descriptor.tenant, descriptor.namespace, descriptor.name)
            parts = build_multipart(descriptor, options=options)
        except SinkAdminError as e:
            return self._resource.failed(e)
        path = sink_path(self._root, descriptor.tenant, descriptor.namespace, descriptor.name)
        logger.debug(
            "sink_submit",
            operation="update" if update else "create",
            path=path,
            parts=part_names(parts),
        )
        if update:
            return self._resource.put(path, files=parts)
        return self._resource.post(path, files=parts)

    def create_sink_async(
        self,
        descriptor: SinkDescriptor,
        file_name: str | os.PathLike[str] | None = None,
    ) -> Future[None]:
        if file_name is not None:
            descriptor = descriptor.with_artifact(artifact_from_path(file_name))
        return self._submit(descriptor, update=False)

    def create_sink(
        self,
        descriptor: SinkDescriptor,
        file_name: str | os.PathLike[str] | None = None,
    ) -> None:
        """Register a new sink.

        Args:
            descriptor: Sink identity, config and (optionally) package
            file_name: Local package path, or ``builtin://<name>``. Overrides
                ``descriptor.artifact`` when given.
        """
        self._resource.sync(self.create_sink_async(descriptor, file_name))

    def create_sink_with_url_async(self, descriptor: SinkDescriptor, pkg_url: str | None) -> Future[None]:
        return self._submit(descriptor.with_artifact(artifact_from_url(pkg_url)), update=False)

    def create_sink_with_url(self, descriptor: SinkDescriptor, pkg_url: str | None) -> None:
        """Register a new sink whose package the service downloads from ``pkg_url``."""
        self._resource.sync(self.create_sink_with_url_async(descriptor, pkg_url))

    def update_sink_async(
        self,
        descriptor: SinkDescriptor,
        file_name: str | os.PathLike[str] | None = None,
        options: UpdateOptions | None = None,
    ) -> Future[None]:
        if file_name is not None:
            descriptor = descriptor.with_artifact(artifact_from_path(file_name))
        return self._submit(descriptor, update=True, options=options)

    def update_sink(
        self,
        descriptor: SinkDescriptor,
        file_name: str | os.PathLike[str] | None = None,
        options: UpdateOptions | None = None,
    ) -> None:
        """Replace a sink's configuration, and its package when one is supplied.

        With no package (``descriptor.artifact`` None and no ``file_name``)
        the service keeps the package it already has.
        """
        self._resource.sync(self.update_sink_async(descriptor, file_name, options))

    def update_sink_with_url_async(
        self,
        descriptor: SinkDescriptor,
        pkg_url: str | None,
        options: UpdateOptions | None = None,
    ) -> Future[None]:
        return self._submit(descriptor.with_artifact(artifact_from_url(pkg_url)), update=True, options=options)

    def update_sink_with_url(
        self,
        descriptor: SinkDescriptor,
        pkg_url: str | None,
        options: UpdateOptions | None = None,
    ) -> None:
        self._resource.sync(self.update_sink_with_url_async(descriptor, pkg_url, options))

    def delete_sink_async(self, tenant: str, namespace: str, sink_name: str) -> Future[None]:
        try:
            validate_sink_name(tenant, namespace, sink_name)
        except SinkAdminError as e:
            return self._resource.failed(e)
        return self._resource.delete(sink_path(self._root, tenant, namespace, sink_name))

    def delete_sink(self, tenant: str, namespace: str, sink_name: str) -> None:
        self._resource.sync(self.delete_sink_async(tenant, namespace, sink_name))

    # -------------------------------------------------------------------------
    # Control
    # -------------------------------------------------------------------------

    def _control(
        self,
        action: SinkAction,
        tenant: str,
        namespace: str,
        sink_name: str,
        instance_id: int | None,
    ) -> Future[None]:
        try:
            validate_sink_name(tenant, namespace, sink_name)
        except SinkAdminError as e:
            return self._resource.failed(e)
        return self._resource.post(sink_path(self._root, tenant, namespace, sink_name, instance_id, action))

    def restart_sink_async(
        self, tenant: str, namespace: str, sink_name: str, instance_id: int | None = None
    ) -> Future[None]:
        return self._control(SinkAction.RESTART, tenant, namespace, sink_name, instance_id)

    def restart_sink(self, tenant: str, namespace: str, sink_name: str, instance_id: int | None = None) -> None:
        """Restart all instances, or one instance when ``instance_id`` is given."""
        self._resource.sync(self.restart_sink_async(tenant, namespace, sink_name, instance_id))

    def stop_sink_async(self, tenant: str, namespace: str, sink_name: str, instance_id: int | None = None) -> Future[None]:
        return self._control(SinkAction.STOP, tenant, namespace, sink_name, instance_id)

    def stop_sink(self, tenant: str, namespace: str, sink_name: str, instance_id: int | None = None) -> None:
        """Stop all instances, or one instance when ``instance_id`` is given."""
        self._resource.sync(self.stop_sink_async(tenant, namespace, sink_name, instance_id))

    def start_sink_async(self, tenant: str, namespace: str, sink_name: str, instance_id: int | None = None) -> Future[None]:
        return self._control(SinkAction.START, tenant, namespace, sink_name, instance_id)

    def start_sink(self, tenant: str, namespace: str, sink_name: str, instance_id: int | None = None) -> None:
        """Start all instances, or one instance when ``instance_id`` is given."""
        self._resource.sync(self.start_sink_async(tenant, namespace, sink_name, instance_id))

    # -------------------------------------------------------------------------
    # Built-in connectors
    # -------------------------------------------------------------------------

    def get_builtin_sinks_async(self) -> Future[list[ConnectorDefinition]]:
        return self._resource.get(builtin_sinks_path(self._root), _decode_connectors)

    def get_builtin_sinks(self) -> list[ConnectorDefinition]:
        """Connector packages the service has pre-registered."""
        return self._resource.sync(self.get_builtin_sinks_async())

    def reload_builtin_sinks_async(self) -> Future[None]:
        return self._resource.post(reload_builtin_sinks_path(self._root))

    def reload_builtin_sinks(self) -> None:
        """Ask the service to rescan its built-in connector directory."""
        self._resource.sync(self.reload_builtin_sinks_async())
