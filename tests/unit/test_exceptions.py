"""Unit tests for the exception hierarchy."""

from src.core import ApplicationException, DatabaseConnectionException, ListenerException

# pylint: disable=magic-value-comparison


def test_from_error_keeps_kind_and_message():
    """Test a driver error becomes a structured connection error."""
    error = DatabaseConnectionException.from_error(ConnectionRefusedError("ECONNREFUSED"))
    assert error.kind == "ConnectionRefusedError"
    assert error.message == "ECONNREFUSED"
    assert str(error) == "ConnectionRefusedError: ECONNREFUSED"
    assert isinstance(error, ApplicationException)


def test_from_error_uses_repr_for_empty_message():
    """Test errors without text still carry something readable."""
    error = DatabaseConnectionException.from_error(TimeoutError())
    assert error.kind == "TimeoutError"
    assert error.message == "TimeoutError()"


def test_from_error_returns_connection_errors_unchanged():
    """Test an existing connection error is not wrapped twice."""
    original = DatabaseConnectionException("OperationalError", "no such host")
    assert DatabaseConnectionException.from_error(original) is original


def test_listener_exception_mentions_port():
    """Test the port is part of the listener error message."""
    error = ListenerException(4000, "address already in use")
    assert error.port == 4000
    assert str(error) == "port 4000: address already in use"
