"""Tests for the error taxonomy."""

import pytest

from sinkadmin.contracts import (
    NO_STATUS_CODE,
    AdminError,
    ConflictError,
    ErrorKind,
    NotAuthorizedError,
    NotFoundError,
    PreconditionFailedError,
    RequestTimeoutError,
    SerializationError,
    ServerError,
    ServiceUnavailableError,
    SinkAdminError,
    TransportError,
    ValidationError,
)


@pytest.mark.parametrize(
    ("error", "kind"),
    [
        (ValidationError("tenant is required"), ErrorKind.VALIDATION),
        (SerializationError("bad"), ErrorKind.SERIALIZATION),
        (TransportError("refused"), ErrorKind.TRANSPORT),
        (RequestTimeoutError("slow"), ErrorKind.TRANSPORT),
        (ServerError("boom", status_code=500), ErrorKind.SERVER),
        (NotFoundError("gone", status_code=404), ErrorKind.SERVER),
    ],
)
def test_every_error_has_a_kind(error: SinkAdminError, kind: ErrorKind) -> None:
    assert error.kind is kind
    assert isinstance(error, SinkAdminError)


class TestAdminError:
    def test_transport_has_no_status(self) -> None:
        error = TransportError("connection refused")

        assert error.status_code == NO_STATUS_CODE == -1
        assert str(error) == "connection refused"

    def test_server_str_includes_status(self) -> None:
        error = ServerError("Sink already exists", status_code=400, body='{"reason": "Sink already exists"}')

        assert str(error) == "HTTP 400: Sink already exists"
        assert error.body == '{"reason": "Sink already exists"}'

    @pytest.mark.parametrize(
        "error_type",
        [NotAuthorizedError, NotFoundError, ConflictError, PreconditionFailedError, ServiceUnavailableError],
    )
    def test_status_subclasses_are_server_errors(self, error_type: type[ServerError]) -> None:
        error = error_type("x", status_code=418)

        assert isinstance(error, ServerError)
        assert isinstance(error, AdminError)

    def test_validation_and_serialization_are_not_admin_errors(self) -> None:
        assert not isinstance(ValidationError("x"), AdminError)
        assert not isinstance(SerializationError("x"), AdminError)
