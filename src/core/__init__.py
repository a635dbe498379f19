"""
Core Module
============

Framework-agnostic building blocks shared across the application:
the exception hierarchy and the connect result types.
"""

from src.core.exceptions import (
    ApplicationException,
    ConfigurationException,
    DatabaseConnectionException,
    ListenerException,
)
from src.core.results import Connected, ConnectionFailed, ConnectResult

__all__ = [
    "ApplicationException",
    "ConfigurationException",
    "DatabaseConnectionException",
    "ListenerException",
    "Connected",
    "ConnectionFailed",
    "ConnectResult",
]
