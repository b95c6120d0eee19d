# tests/conftest.py
"""Shared test fixtures and configuration."""

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import Mock

import pytest
import respx
from hypothesis import Phase, Verbosity, settings

from sinkadmin.admin import SinkAdmin
from sinkadmin.clients.engine import HttpEngine
from sinkadmin.clients.resource import ResourceClient
from sinkadmin.clients.sinks import SinksClient
from sinkadmin.contracts import SinkDescriptor

# =============================================================================
# Hypothesis Configuration
# =============================================================================
# Register profiles for different test environments.
# Use HYPOTHESIS_PROFILE env var to select: ci (default), nightly, debug

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Admin service fixtures
# =============================================================================

SERVICE_URL = "http://admin.test"

# Short enough that a hung test fails fast, long enough for a loaded CI box.
TEST_READ_TIMEOUT = 5.0


@pytest.fixture
def mock_service() -> Iterator[respx.MockRouter]:
    """respx router standing in for the admin service.

    Routes are relative to SERVICE_URL. The router patches httpcore
    globally, so it also intercepts requests sent from the engine thread.
    """
    with respx.mock(base_url=SERVICE_URL, assert_all_called=False) as router:
        yield router


@pytest.fixture
def engine() -> Iterator[HttpEngine]:
    """Real engine pointed at SERVICE_URL; closed at teardown."""
    http_engine = HttpEngine(SERVICE_URL, timeout=TEST_READ_TIMEOUT)
    yield http_engine
    http_engine.close()


@pytest.fixture
def sinks(engine: HttpEngine) -> SinksClient:
    return SinksClient(ResourceClient(engine, read_timeout=TEST_READ_TIMEOUT))


@pytest.fixture
def admin(engine: HttpEngine) -> SinkAdmin:
    return SinkAdmin(engine, read_timeout=TEST_READ_TIMEOUT)


@pytest.fixture
def spy_engine() -> Mock:
    """Engine double for asserting that nothing was dispatched."""
    return Mock(spec=HttpEngine)


@pytest.fixture
def spy_sinks(spy_engine: Mock) -> SinksClient:
    return SinksClient(ResourceClient(spy_engine, read_timeout=TEST_READ_TIMEOUT))


@pytest.fixture
def sink_jar(tmp_path: Path) -> Path:
    """Small package file to upload."""
    path = tmp_path / "sink.jar"
    path.write_bytes(b"PK\x03\x04fake-jar-contents")
    return path


@pytest.fixture
def descriptor() -> SinkDescriptor:
    return SinkDescriptor(
        tenant="public",
        namespace="default",
        name="mysink",
        config={"inputs": ["persistent://public/default/in"], "parallelism": 1},
    )
