"""Tests for exception classes."""

import pytest

from kong_client.exceptions import (
    KongClientError,
    InvalidArgumentError,
    DecodeError,
    AuthenticationError,
    AuthorizationError,
    ValidationError,
    NotFoundError,
    ConflictError,
    RateLimitError,
    ServerError,
    ServiceUnavailableError,
    NetworkError,
    TimeoutError,
    exception_from_response,
    is_not_found,
)


class TestKongClientError:
    """Tests for the base KongClientError class."""

    def test_basic_creation(self):
        """Test creating a basic exception."""
        error = KongClientError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.status_code is None
        assert error.error_code is None
        assert error.details == {}

    def test_with_status_and_error_code(self):
        """Test that status and Kong error name are rendered."""
        error = KongClientError("name already exists", status_code=409, error_code="unique constraint violation")
        assert str(error) == "[unique constraint violation] name already exists (HTTP 409)"

    def test_repr(self):
        """Test exception repr."""
        error = KongClientError("Error", status_code=400, error_code="schema violation")
        repr_str = repr(error)
        assert "KongClientError" in repr_str
        assert "400" in repr_str
        assert "schema violation" in repr_str


class TestClientSideErrors:
    """Tests for errors raised before or after a request."""

    def test_invalid_argument_is_value_error(self):
        """Test InvalidArgumentError can be caught as ValueError."""
        error = InvalidArgumentError("name_or_id cannot be empty for get operation", argument="name_or_id")
        assert isinstance(error, ValueError)
        assert isinstance(error, KongClientError)
        assert error.argument == "name_or_id"
        assert error.details == {"argument": "name_or_id"}
        assert error.status_code is None

    def test_decode_error(self):
        """Test DecodeError defaults."""
        error = DecodeError()
        assert "decode" in error.message.lower()


class TestHttpErrors:
    """Tests for status-code specific exceptions."""

    def test_validation_error_field_errors(self):
        """Test that field errors land in details."""
        error = ValidationError("schema violation (name: required field missing)", field_errors={"name": "required field missing"})
        assert error.status_code == 400
        assert error.field_errors == {"name": "required field missing"}
        assert error.details["field_errors"] == {"name": "required field missing"}

    def test_rate_limit_retry_after(self):
        """Test rate limit error carries retry_after."""
        error = RateLimitError(retry_after=30)
        assert error.status_code == 429
        assert error.retry_after == 30

    def test_service_unavailable_is_server_error(self):
        """Test 503 errors are server errors."""
        error = ServiceUnavailableError()
        assert isinstance(error, ServerError)
        assert error.status_code == 503

    def test_defaults(self):
        """Test default status codes."""
        assert AuthenticationError().status_code == 401
        assert AuthorizationError().status_code == 403
        assert NotFoundError().status_code == 404
        assert ConflictError().status_code == 409


class TestNetworkErrors:
    """Tests for network-level exceptions."""

    def test_network_error(self):
        """Test basic network error."""
        error = NetworkError("Connection refused")
        assert error.status_code is None
        assert error.error_code is None

    def test_timeout_error(self):
        """Test timeout error."""
        error = TimeoutError()
        assert isinstance(error, NetworkError)
        assert "timed out" in error.message.lower()


class TestExceptionFromResponse:
    """Tests for the exception_from_response utility."""

    @pytest.mark.parametrize(
        "status_code,expected_class",
        [
            (400, ValidationError),
            (401, AuthenticationError),
            (403, AuthorizationError),
            (404, NotFoundError),
            (409, ConflictError),
            (429, RateLimitError),
            (500, ServerError),
            (502, ServerError),
            (503, ServiceUnavailableError),
            (504, ServerError),
            (507, ServerError),
        ],
    )
    def test_exception_mapping(self, status_code, expected_class):
        """Test that status codes map to correct exception classes."""
        error = exception_from_response(status_code, "Test error")
        assert isinstance(error, expected_class)
        assert error.status_code == status_code

    def test_unknown_status_code(self):
        """Test handling of unknown status codes."""
        error = exception_from_response(418, "I'm a teapot")
        assert type(error) is KongClientError
        assert error.status_code == 418


class TestIsNotFound:
    """Tests for the is_not_found helper."""

    def test_not_found(self):
        assert is_not_found(NotFoundError())

    def test_other_status(self):
        assert not is_not_found(ConflictError())

    def test_unrelated_exception(self):
        assert not is_not_found(KeyError("id"))
