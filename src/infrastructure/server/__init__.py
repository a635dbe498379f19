"""
Network Listener
================

Binds the HTTP application to a port.

``UvicornListener.listen`` calls ``on_ready`` once uvicorn reports its
sockets are bound, then serves until the server is asked to exit.
"""

import asyncio
from typing import Any, Callable, Optional, Protocol

import uvicorn

from src.core import ListenerException
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

STARTUP_POLL_INTERVAL = 0.05


class Listener(Protocol):
    """Anything that can bind a port and report readiness."""

    async def listen(self, port: int, on_ready: Callable[[], None]) -> None:
        ...


class UvicornListener:
    """Serves an ASGI app with uvicorn."""

    def __init__(self, app: Any, host: str = "0.0.0.0", log_level: str = "info"):
        self.app = app
        self.host = host
        self.log_level = log_level.lower()
        self.server: Optional[uvicorn.Server] = None

    async def listen(self, port: int, on_ready: Callable[[], None]) -> None:
        config = uvicorn.Config(
            self.app,
            host=self.host,
            port=port,
            log_level=self.log_level,
            log_config=None,  # keep the JSON root handler
        )
        server = uvicorn.Server(config)
        self.server = server

        serve_task = asyncio.create_task(self._serve(server, port))
        while not server.started and not serve_task.done():
            await asyncio.sleep(STARTUP_POLL_INTERVAL)

        if not server.started:
            await serve_task
            raise ListenerException(port, "server stopped before binding")

        on_ready()
        await serve_task

    def stop(self) -> None:
        """Ask a running server to shut down gracefully."""
        if self.server is not None:
            self.server.should_exit = True

    @staticmethod
    async def _serve(server: uvicorn.Server, port: int) -> None:
        # uvicorn calls sys.exit(1) when it cannot bind
        try:
            await server.serve()
        except SystemExit as e:
            raise ListenerException(port, f"server exited with status {e.code}") from e


__all__ = ["Listener", "UvicornListener", "STARTUP_POLL_INTERVAL"]
