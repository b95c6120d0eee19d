# src/sinkadmin/clients/resource.py
"""Reusable resource client: dispatch, classification and the sync bridge.

A ResourceClient is held by each resource-specific client (see
sinkadmin.clients.sinks). It contributes everything that is not specific
to the resource:

- dispatch(): build a request, hand it to the engine, and chain a
  continuation that classifies the outcome into a decoded value or a
  SinkAdminError. Returns a concurrent.futures.Future immediately.
- failed(): an already-failed future, used when validation or encoding
  fails before dispatch.
- sync(): the blocking bridge. Waits on a future for at most the read
  timeout and unwraps it. It refuses to wait on the engine thread,
  where done-callbacks run. Blocking operations call this on the result of
  their async counterpart and do nothing else.

The client holds no mutable state; concurrent calls are independent.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from sinkadmin.clients.engine import HttpEngine
from sinkadmin.clients.error_mapping import map_exception, map_response
from sinkadmin.clients.payload import JSON_MEDIA_TYPE, MultipartPart
from sinkadmin.contracts.enums import HttpMethod
from sinkadmin.contracts.errors import (
    RequestTimeoutError,
    SerializationError,
    SinkAdminError,
    TransportError,
    ValidationError,
)
from sinkadmin.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# Turns a successful (2xx) response into the operation's return value.
Decoder = Callable[[httpx.Response], T]


def decode_nothing(response: httpx.Response) -> None:
    """Decoder for operations that return no value; the body is ignored."""
    return None


def decode_as(type_: Any) -> Decoder[Any]:
    """Decoder that validates the JSON body against ``type_``.

    Raises SerializationError (via the dispatcher) on malformed JSON or a
    body that does not match the declared type.
    """
    adapter: TypeAdapter[Any] = TypeAdapter(type_)
    type_name = type_.__name__ if isinstance(type_, type) else repr(type_)

    def _decode(response: httpx.Response) -> Any:
        try:
            return adapter.validate_json(response.content)
        except PydanticValidationError as e:
            raise SerializationError(f"cannot decode response as {type_name}: {e}") from e

    return _decode


class ResourceClient:
    """Dispatch and sync-bridge capability bound to one engine.

    Args:
        engine: HTTP engine that executes requests
        read_timeout: Upper bound, in seconds, for blocking waits in sync()
    """

    def __init__(self, engine: HttpEngine, *, read_timeout: float) -> None:
        self._engine = engine
        self._read_timeout = read_timeout

    @property
    def read_timeout(self) -> float:
        return self._read_timeout

    # -------------------------------------------------------------------------
    # Async dispatch
    # -------------------------------------------------------------------------

    def failed(self, error: BaseException) -> Future[Any]:
        """Future that has already failed with the mapped error."""
        mapped = map_exception(error)
        if isinstance(mapped, ValidationError):
            logger.debug("sink_admin_request_rejected", reason=mapped.message)
        future: Future[Any] = Future()
        future.set_exception(mapped)
        return future

    def dispatch(
        self,
        method: HttpMethod,
        path: str,
        decode: Decoder[T],
        *,
        files: list[MultipartPart] | None = None,
        json_body: bool = False,
    ) -> Future[T]:
        """Send one request and return a future of its decoded result.

        Args:
            method: HTTP verb
            path: Resource path (already encoded)
            decode: Converts a 2xx response into the return value
            files: Multipart parts (create/update)
            json_body: Send an empty body labelled application/json
                (control actions and reloads)

        Returns:
            Future resolving to ``decode(response)``, or failing with a
            SinkAdminError. Never raises.
        """
        content: bytes | None = None
        headers: dict[str, str] | None = None
        if json_body:
            content = b""
            headers = {"Content-Type": JSON_MEDIA_TYPE}

        try:
            request = self._engine.build_request(method.value, path, files=files, content=content, headers=headers)
        except Exception as e:
            return self.failed(SerializationError(f"cannot encode request: {e}"))

        try:
            raw = self._engine.execute(request)
        except Exception as e:
            mapped = map_exception(e)
            self._log_failure(method, path, mapped, start=None)
            return self.failed(mapped)

        logger.debug("sink_admin_request", method=method.value, path=path)
        start = time.perf_counter()
        result: Future[T] = Future()

        def _propagate_cancel(fut: Future[T]) -> None:
            if fut.cancelled():
                raw.cancel()

        def _on_response(fut: Future[httpx.Response]) -> None:
            if not result.set_running_or_notify_cancel():
                return
            if fut.cancelled():
                error: SinkAdminError = TransportError("request was cancelled before a response arrived")
                self._log_failure(method, path, error, start=start)
                result.set_exception(error)
                return
            exc = fut.exception()
            if exc is not None:
                error = map_exception(exc)
                self._log_failure(method, path, error, start=start)
                result.set_exception(error)
                return
            response = fut.result()
            if not 200 <= response.status_code < 300:
                error = map_response(response)
                self._log_failure(method, path, error, start=start)
                result.set_exception(error)
                return
            try:
                value = decode(response)
            except Exception as e:
                error = e if isinstance(e, SerializationError) else SerializationError(f"cannot decode response: {e}")
                self._log_failure(method, path, error, start=start)
                result.set_exception(error)
                return
            logger.debug(
                "sink_admin_response",
                method=method.value,
                path=path,
                status_code=response.status_code,
                latency_ms=(time.perf_counter() - start) * 1000,
            )
            result.set_result(value)

        result.add_done_callback(_propagate_cancel)
        raw.add_done_callback(_on_response)
        return result

    def get(self, path: str, decode: Decoder[T]) -> Future[T]:
        return self.dispatch(HttpMethod.GET, path, decode)

    def post(self, path: str, *, files: list[MultipartPart] | None = None) -> Future[None]:
        """POST a multipart body, or an empty JSON body when ``files`` is None."""
        return self.dispatch(HttpMethod.POST, path, decode_nothing, files=files, json_body=files is None)

    def put(self, path: str, *, files: list[MultipartPart]) -> Future[None]:
        return self.dispatch(HttpMethod.PUT, path, decode_nothing, files=files)

    def delete(self, path: str) -> Future[None]:
        return self.dispatch(HttpMethod.DELETE, path, decode_nothing)

    # -------------------------------------------------------------------------
    # Sync bridge
    # -------------------------------------------------------------------------

    def sync(self, future: Future[T]) -> T:
        """Block until ``future`` settles, for at most the read timeout.

        Returns:
            The future's value

        Raises:
            SinkAdminError: The error the future failed with
            RequestTimeoutError: The wait exceeded the read timeout (the
                future is cancelled; the server may still act on the request)
            TransportError: Called on the engine thread (from a future's
                done-callback) while the future is still pending. The
                response could only arrive on that same thread, so the
                wait would always time out. The future is left running.
        """
        if not future.done() and self._engine.on_engine_thread():
            logger.warning("sink_admin_blocking_call_on_engine_thread")
            raise TransportError("blocking call made from the HTTP engine thread; use the async form inside future callbacks")
        try:
            return future.result(timeout=self._read_timeout)
        except FutureTimeoutError:
            if future.cancel():
                logger.warning("sink_admin_request_timed_out", timeout_seconds=self._read_timeout)
                raise RequestTimeoutError(f"no response within {self._read_timeout}s") from None
        # Settled between the timeout and the cancel attempt
        return future.result()

    def _log_failure(
        self,
        method: HttpMethod,
        path: str,
        error: SinkAdminError,
        *,
        start: float | None,
    ) -> None:
        fields: dict[str, Any] = {
            "method": method.value,
            "path": path,
            "error": str(error),
            "error_type": type(error).__name__,
            "error_kind": error.kind.value,
        }
        status_code = getattr(error, "status_code", None)
        if status_code is not None:
            fields["status_code"] = status_code
        if start is not None:
            fields["latency_ms"] = (time.perf_counter() - start) * 1000
        logger.warning("sink_admin_request_failed", **fields)
