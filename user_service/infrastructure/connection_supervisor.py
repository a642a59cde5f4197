"""Connection Supervisor: background liveness probe and reconnect loop for the shared store.

Invariants:
    - At most one loop task per supervisor; start() is a no-op while it runs
    - Consecutive reopen failures are counted; a successful reopen resets the counter
    - Once the counter exceeds the attempt budget the loop ends and state is FAILED
    - The loop never touches in-flight requests; it only publishes `state`

Design Decisions:
    - Health published as a state enum rather than an event: handlers and the
      readiness probe read it on demand
    - stop() cancels the task so shutdown never waits out a poll interval
"""

import asyncio
import logging
from typing import Protocol

from user_service.config import ConnectionConfig
from user_service.core.domain_types import ConnectionState
from user_service.core.errors import StorageFailureError

logger = logging.getLogger(__name__)


class SupervisedConnection(Protocol):
    """What the supervisor needs from DatabaseSessionManager."""
    async def health_check(self) -> bool: ...
    async def close(self) -> None: ...
    async def reopen(self) -> None: ...


class ConnectionSupervisor:
    """Keeps the shared connection alive and reports whether it is usable."""

    def __init__(self, connection: SupervisedConnection, config: ConnectionConfig):
        self._connection = connection
        self._config = config
        self._state = ConnectionState.HEALTHY
        self._failures = 0
        self._task: asyncio.Task | None = None

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_healthy(self) -> bool:
        return self._state is ConnectionState.HEALTHY

    @property
    def failures(self) -> int:
        return self._failures

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Spawn the loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self.run(), name="connection-supervisor")

    async def stop(self) -> None:
        """Cancel the loop and wait for it to unwind."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        if self._state is not ConnectionState.FAILED:
            self._state = ConnectionState.STOPPED

    async def run(self) -> None:
        """Probe, reconnect, give up after the budget. Returns only on FAILED."""
        logger.info("Connection check started")
        while True:
            await asyncio.sleep(self._config.reconnect_interval)
            if await self._connection.health_check():
                self._state = ConnectionState.HEALTHY
                continue

            logger.warning("Lost connection to database, attempting to reconnect")
            self._state = ConnectionState.RECONNECTING
            try:
                await self._connection.close()
            except StorageFailureError as e:
                logger.warning(f"Error while disconnecting: {e.message}")
                continue

            if self._failures > self._config.reconnect_attempts:
                self._state = ConnectionState.FAILED
                logger.error(
                    "Reconnect budget exhausted, connection check stopped",
                    extra={"attempt": self._failures},
                )
                return

            try:
                await self._connection.reopen()
            except StorageFailureError as e:
                self._failures += 1
                logger.warning(
                    f"Failed to reconnect: {e.message}",
                    extra={"attempt": self._failures},
                )
                continue

            self._failures = 0
            self._state = ConnectionState.HEALTHY
            logger.info("Reconnected to database")
