# src/sinkadmin/clients/engine.py
"""HTTP execution engine: builds requests and executes them without blocking.

Wraps an httpx.AsyncClient running on a private event loop thread. Callers
on any thread get a concurrent.futures.Future for each request, so both the
blocking and the non-blocking admin surfaces sit on one code path:

    engine = HttpEngine("http://localhost:8080")
    request = engine.build_request("GET", "/admin/v3/sink/public/default")
    future = engine.execute(request)      # returns immediately
    response = future.result(timeout=30)  # or add_done_callback(...)

asyncio callers can await the same future with ``asyncio.wrap_future``.

The engine owns the connection pool. It is thread-safe; close() it once
when done. Closing cancels whatever is still in flight.
"""

from __future__ import annotations

import asyncio
import ssl
import threading
from concurrent.futures import Future
from typing import Any

import httpx

from sinkadmin.core.auth import Authentication, NoAuthentication
from sinkadmin.core.logging import get_logger

logger = get_logger(__name__)


class EngineClosedError(RuntimeError):
    """Raised when a request is executed on a closed engine."""


class HttpEngine:
    """Non-blocking HTTP executor with connection pooling and auth injection.

    Example:
        engine = HttpEngine(
            "https://admin.example.com:8443",
            authentication=TokenAuthentication("file:/run/secrets/token"),
            timeout=httpx.Timeout(300.0, connect=60.0, read=60.0),
            verify=ssl.create_default_context(cafile="/etc/ssl/cluster-ca.pem"),
        )
    """

    def __init__(
        self,
        service_url: str,
        *,
        authentication: Authentication | None = None,
        timeout: httpx.Timeout | float = 60.0,
        verify: bool | ssl.SSLContext = True,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the engine and start its event loop thread.

        Args:
            service_url: Base URL every request path is resolved against
            authentication: Provider asked for headers on every request
            timeout: httpx timeout (seconds or a full httpx.Timeout)
            verify: TLS verification flag, or an SSL context with custom trust
            headers: Default headers for all requests
            transport: Custom httpx transport (tests, proxies)
        """
        self._service_url = service_url.rstrip("/")
        self._authentication = authentication or NoAuthentication()
        self._closed = False
        self._close_lock = threading.Lock()

        # httpx binds the pool to the loop lazily, on first send.
        self._client = httpx.AsyncClient(
            base_url=self._service_url,
            timeout=timeout,
            verify=verify,
            headers={"Accept": "application/json", **(headers or {})},
            transport=transport,
            follow_redirects=True,
        )
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._run_loop,
            name="sinkadmin-http-engine",
            daemon=True,
        )
        self._thread.start()

    def _run_loop(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    @property
    def service_url(self) -> str:
        return self._service_url

    @property
    def closed(self) -> bool:
        return self._closed

    def build_request(
        self,
        method: str,
        path: str,
        *,
        files: list[Any] | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Request:
        """Build a request against the service URL.

        The body is read eagerly so that multipart encoding problems surface
        here rather than on the engine thread.
        """
        request = self._client.build_request(
            method,
            path,
            files=files,
            content=content,
            headers=headers,
        )
        request.read()
        return request

    def on_engine_thread(self) -> bool:
        """True when called from the engine's own loop thread.

        Future callbacks run there, so a blocking wait made from one can
        never be satisfied.
        """
        return threading.current_thread() is self._thread

    def execute(self, request: httpx.Request) -> Future[httpx.Response]:
        """Send a built request on the engine loop.

        Returns:
            Future resolving to the raw response (any status code), or
            failing with the httpx exception that prevented one. Requests
            still in flight when the engine is closed end up cancelled.

        Raises:
            EngineClosedError: The engine has been closed
        """
        if self._closed:
            raise EngineClosedError("HTTP engine is closed")
        request.headers.update(self._authentication.auth_headers())
        # Scheduling under the lock orders every send ahead of close()'s shutdown
        with self._close_lock:
            if self._closed:
                raise EngineClosedError("HTTP engine is closed")
            return asyncio.run_coroutine_threadsafe(self._client.send(request), self._loop)

    async def _shutdown(self) -> int:
        current = asyncio.current_task()
        in_flight = [task for task in asyncio.all_tasks() if task is not current]
        for task in in_flight:
            task.cancel()
        await asyncio.gather(*in_flight, return_exceptions=True)
        await self._client.aclose()
        return len(in_flight)

    def close(self) -> None:
        """Cancel in-flight requests, close the pool and stop the loop thread.

        Futures of cancelled requests are settled before this returns.
        Idempotent.
        """
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        try:
            cancelled = asyncio.run_coroutine_threadsafe(self._shutdown(), self._loop).result(timeout=10.0)
            if cancelled:
                logger.info("http_engine_requests_cancelled", count=cancelled, service_url=self._service_url)
        except Exception as e:
            logger.warning("http_engine_close_failed", error=str(e), error_type=type(e).__name__)
        finally:
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join(timeout=10.0)
            if not self._thread.is_alive():
                self._loop.close()
        logger.debug("http_engine_closed", service_url=self._service_url)

    def __enter__(self) -> HttpEngine:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
