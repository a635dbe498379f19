"""
Bootstrap Sequence
==================

Startup contract of the service:

1. Await the database connector once
2. Connected: start the listener on ``settings.port`` and log readiness
3. Failed: log the error, never start the listener

There is no retry and no explicit exit; a supervisor is expected to
restart the process.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from src.config import Settings
from src.core import Connected, ConnectionFailed, ConnectResult, DatabaseConnectionException
from src.infrastructure.database import Connector, DatabaseHandle
from src.infrastructure.server import Listener
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

READY_MESSAGE = "⚙️ Server is running at port : %s"
FAILURE_MESSAGE = "MONGO db connection failed !!! %s"


@dataclass(frozen=True)
class BootstrapOutcome:
    """Which branch the bootstrap took."""

    started: bool
    port: int
    error: Optional[DatabaseConnectionException] = None


async def _connect(connector: Connector) -> ConnectResult:
    try:
        return await connector()
    except Exception as e:
        return ConnectionFailed(DatabaseConnectionException.from_error(e))


async def start(
    settings: Settings,
    connector: Connector,
    listener: Listener,
    on_connected: Optional[Callable[[DatabaseHandle], None]] = None,
) -> BootstrapOutcome:
    """
    Run the bootstrap sequence.

    Args:
        settings: Loaded configuration; only ``port`` is read here
        connector: Zero-argument async database connector
        listener: Binds the port once the database is up
        on_connected: Receives the handle before the listener starts

    Returns:
        BootstrapOutcome: ``started`` is True only if the listener ran

    Raises:
        Whatever the listener raises (e.g. ListenerException on bind errors)
    """
    port = settings.port
    result = await _connect(connector)

    if isinstance(result, ConnectionFailed):
        logger.error(
            FAILURE_MESSAGE,
            result.error,
            extra={"error_kind": result.error.kind, "error_details": result.error.details},
        )
        return BootstrapOutcome(started=False, port=port, error=result.error)

    if not isinstance(result, Connected):
        raise TypeError(f"connector returned {type(result).__name__}, expected a ConnectResult")

    handle = result.handle

    def on_ready() -> None:
        logger.info(READY_MESSAGE, port, extra={"port": port})

    try:
        if on_connected is not None:
            on_connected(handle)
        await listener.listen(port, on_ready)
    finally:
        await handle.close()

    return BootstrapOutcome(started=True, port=port)


__all__ = ["BootstrapOutcome", "start", "READY_MESSAGE", "FAILURE_MESSAGE"]
