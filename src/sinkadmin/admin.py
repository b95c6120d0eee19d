# src/sinkadmin/admin.py
"""Entry point wiring settings, engine and resource clients together."""

from __future__ import annotations

import ssl
from pathlib import Path

import httpx

from sinkadmin.clients.engine import HttpEngine
from sinkadmin.clients.resource import ResourceClient
from sinkadmin.clients.sinks import SinksClient
from sinkadmin.core.auth import Authentication, authentication_from_token
from sinkadmin.core.config import AdminSettings, load_settings
from sinkadmin.core.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _tls_verify(settings: AdminSettings) -> bool | ssl.SSLContext:
    if not settings.tls.verify:
        return False
    if settings.tls.trust_certs_file_path is not None:
        return ssl.create_default_context(cafile=settings.tls.trust_certs_file_path)
    return True


class SinkAdmin:
    """Client for the sink admin API.

    Owns one HttpEngine (and therefore one connection pool). Close it when
    done, or use it as a context manager:

        with SinkAdmin.from_config_file(Path("sinkadmin.yaml")) as admin:
            for name in admin.sinks.list_sinks("public", "default"):
                print(name, admin.sinks.get_sink_status("public", "default", name).num_running)
    """

    def __init__(self, engine: HttpEngine, *, read_timeout: float = 60.0) -> None:
        self._engine = engine
        self._resource = ResourceClient(engine, read_timeout=read_timeout)
        self._sinks = SinksClient(self._resource)

    @classmethod
    def from_settings(
        cls,
        settings: AdminSettings,
        *,
        authentication: Authentication | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> SinkAdmin:
        """Build a client from validated settings.

        Args:
            settings: Client configuration
            authentication: Overrides the provider derived from ``settings.auth_token``
            transport: Custom httpx transport (tests, proxies)
        """
        if settings.logging.configure:
            configure_logging(json_output=settings.logging.json_output, level=settings.logging.level)
        timeout = httpx.Timeout(
            settings.request_timeout_seconds,
            connect=settings.connect_timeout_seconds,
            read=settings.read_timeout_seconds,
        )
        engine = HttpEngine(
            settings.service_url,
            authentication=authentication or authentication_from_token(settings.auth_token),
            timeout=timeout,
            verify=_tls_verify(settings),
            transport=transport,
        )
        logger.debug("sink_admin_created", service_url=settings.service_url)
        return cls(engine, read_timeout=settings.read_timeout_seconds)

    @classmethod
    def from_config_file(cls, config_path: Path) -> SinkAdmin:
        """Build a client from a YAML file (with SINKADMIN_* env overrides)."""
        return cls.from_settings(load_settings(config_path))

    @property
    def sinks(self) -> SinksClient:
        return self._sinks

    @property
    def engine(self) -> HttpEngine:
        return self._engine

    def close(self) -> None:
        """Release the connection pool. Idempotent."""
        self._engine.close()

    def __enter__(self) -> SinkAdmin:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
