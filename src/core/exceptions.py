"""
Core Exceptions
================

Custom exceptions for the application.

These exceptions are raised by infrastructure code and caught at the
application boundaries (the bootstrap sequence and the HTTP layer).
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""


class DatabaseConnectionException(ApplicationException):
    """
    Raised or returned when the database cannot be reached.

    ``kind`` names the underlying failure (usually the driver exception
    class), ``message`` carries its text.
    """

    def __init__(
        self,
        kind: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.kind = kind
        super().__init__(message, details)

    @classmethod
    def from_error(cls, error: BaseException, details: Optional[dict] = None) -> "DatabaseConnectionException":
        if isinstance(error, DatabaseConnectionException):
            return error
        return cls(type(error).__name__, str(error) or repr(error), details)

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class ListenerException(ApplicationException):
    """Exception when the network listener cannot start."""

    def __init__(self, port: int, message: str, details: Optional[dict] = None):
        self.port = port
        super().__init__(f"port {port}: {message}", details)
