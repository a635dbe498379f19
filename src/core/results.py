"""
Connection Results
==================

Outcome of a database connect attempt.

A connector never raises for an unreachable database; it returns one of
the two variants below and the caller branches on the type.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from src.core.exceptions import DatabaseConnectionException

if TYPE_CHECKING:
    from src.infrastructure.database import DatabaseHandle


@dataclass(frozen=True)
class Connected:
    """The database answered; ``handle`` owns the live engine."""

    handle: "DatabaseHandle"


@dataclass(frozen=True)
class ConnectionFailed:
    """The database could not be reached."""

    error: DatabaseConnectionException


ConnectResult = Union[Connected, ConnectionFailed]
