# tests/integration/test_sync_async_parity.py
"""Blocking and non-blocking forms must agree.

Each operation is called both ways against the same mocked service; the
blocking form must return the future's value, or raise the very error type
and message the future fails with.
"""

from collections.abc import Callable
from concurrent.futures import Future, wait
from pathlib import Path
from typing import Any

import httpx
import pytest
import respx

from sinkadmin import SinkAdmin
from sinkadmin.contracts import SinkAdminError, SinkDescriptor, UpdateOptions

SINK = "/admin/v3/sink/public/default/mysink"


def outcome_of_future(future: Future[Any]) -> tuple[str, Any]:
    error = future.exception(timeout=5)
    if error is not None:
        return ("error", (type(error), str(error)))
    return ("value", future.result())


def outcome_of_call(call: Callable[[], Any]) -> tuple[str, Any]:
    try:
        return ("value", call())
    except SinkAdminError as e:
        return ("error", (type(e), str(e)))


@pytest.fixture
def service(mock_service: respx.MockRouter) -> respx.MockRouter:
    mock_service.get("/admin/v3/sink/public/default").mock(return_value=httpx.Response(200, json=["mysink"]))
    mock_service.get(SINK).mock(return_value=httpx.Response(200, json={"name": "mysink", "parallelism": 1}))
    mock_service.get(f"{SINK}/status").mock(
        return_value=httpx.Response(200, json={"numInstances": 1, "numRunning": 1, "instances": []})
    )
    mock_service.get(f"{SINK}/1/status").mock(return_value=httpx.Response(404, json={"reason": "Instance 1 not found"}))
    mock_service.post(SINK).mock(return_value=httpx.Response(409, json={"reason": "Sink mysink already exists"}))
    mock_service.put(SINK).mock(return_value=httpx.Response(200))
    mock_service.delete(SINK).mock(side_effect=httpx.ConnectError("connection refused"))
    mock_service.post(f"{SINK}/restart").mock(return_value=httpx.Response(204))
    mock_service.post(f"{SINK}/0/stop").mock(return_value=httpx.Response(503, text="worker unavailable"))
    mock_service.post(f"{SINK}/start").mock(return_value=httpx.Response(204))
    mock_service.get("/admin/v3/sink/builtinsinks").mock(return_value=httpx.Response(200, json=[{"name": "cassandra"}]))
    mock_service.post("/admin/v3/sink/reloadBuiltInSinks").mock(return_value=httpx.Response(500, text=""))
    return mock_service


def operations(sink_jar: Path) -> list[tuple[str, Callable[[Any], Any], Callable[[Any], Future[Any]]]]:
    descriptor = SinkDescriptor("public", "default", "mysink", config={"parallelism": 1})
    return [
        ("list", lambda s: s.list_sinks("public", "default"), lambda s: s.list_sinks_async("public", "default")),
        ("get", lambda s: s.get_sink("public", "default", "mysink"), lambda s: s.get_sink_async("public", "default", "mysink")),
        (
            "status",
            lambda s: s.get_sink_status("public", "default", "mysink"),
            lambda s: s.get_sink_status_async("public", "default", "mysink"),
        ),
        (
            "instance-status",
            lambda s: s.get_sink_status("public", "default", "mysink", 1),
            lambda s: s.get_sink_status_async("public", "default", "mysink", 1),
        ),
        ("create", lambda s: s.create_sink(descriptor, sink_jar), lambda s: s.create_sink_async(descriptor, sink_jar)),
        (
            "create-url",
            lambda s: s.create_sink_with_url(descriptor, "http://repo/x.nar"),
            lambda s: s.create_sink_with_url_async(descriptor, "http://repo/x.nar"),
        ),
        (
            "update",
            lambda s: s.update_sink(descriptor, None, UpdateOptions()),
            lambda s: s.update_sink_async(descriptor, None, UpdateOptions()),
        ),
        (
            "update-url",
            lambda s: s.update_sink_with_url(descriptor, "builtin://cassandra"),
            lambda s: s.update_sink_with_url_async(descriptor, "builtin://cassandra"),
        ),
        ("delete", lambda s: s.delete_sink("public", "default", "mysink"), lambda s: s.delete_sink_async("public", "default", "mysink")),
        (
            "restart",
            lambda s: s.restart_sink("public", "default", "mysink"),
            lambda s: s.restart_sink_async("public", "default", "mysink"),
        ),
        ("stop", lambda s: s.stop_sink("public", "default", "mysink", 0), lambda s: s.stop_sink_async("public", "default", "mysink", 0)),
        ("start", lambda s: s.start_sink("public", "default", "mysink"), lambda s: s.start_sink_async("public", "default", "mysink")),
        ("builtins", lambda s: s.get_builtin_sinks(), lambda s: s.get_builtin_sinks_async()),
        ("reload", lambda s: s.reload_builtin_sinks(), lambda s: s.reload_builtin_sinks_async()),
        ("blank", lambda s: s.delete_sink("public", "", "mysink"), lambda s: s.delete_sink_async("public", "", "mysink")),
    ]


def test_sync_matches_async(admin: SinkAdmin, service: respx.MockRouter, sink_jar: Path) -> None:
    for label, sync_call, async_call in operations(sink_jar):
        sync_outcome = outcome_of_call(lambda: sync_call(admin.sinks))
        async_outcome = outcome_of_future(async_call(admin.sinks))

        assert sync_outcome == async_outcome, label


def test_service_yields_values_and_errors(admin: SinkAdmin, service: respx.MockRouter, sink_jar: Path) -> None:
    kinds = {
        label: outcome_of_call(lambda: sync_call(admin.sinks))[0] for label, sync_call, _ in operations(sink_jar)
    }

    assert kinds["list"] == "value"
    assert kinds["create"] == "error"
    assert kinds["delete"] == "error"
    assert kinds["blank"] == "error"


def test_concurrent_calls_are_independent(admin: SinkAdmin, service: respx.MockRouter) -> None:
    futures = [admin.sinks.list_sinks_async("public", "default") for _ in range(20)]
    futures += [admin.sinks.get_sink_status_async("public", "default", "mysink", 1) for _ in range(20)]

    _, not_done = wait(futures, timeout=10)

    assert not not_done
    assert all(f.result() == ["mysink"] for f in futures[:20])
    assert all(f.exception() is not None for f in futures[20:])
    assert service.calls.call_count == 40
