"""Registry of chat clients with inactivity timeouts."""

from __future__ import annotations

import asyncio
import threading
import time
from dataclasses import dataclass, field
from datetime import timedelta

_CLEANUP_INTERVAL = 1.0


class ClientNotFoundError(LookupError):
    """No client is registered under the given user name."""

    def __init__(self, user_name: str) -> None:
        super().__init__(f"Client '{user_name}' not found")
        self.user_name = user_name


@dataclass
class ClientInfo:
    """What the server knows about one client."""

    user_name: str
    socket_addr: tuple[str, int]
    last_message_time: float = field(default_factory=time.monotonic)


class ClientManager:
    """Thread-safe table of clients keyed by user name.

    Times are monotonic seconds; a client whose last message is
    timeout_duration seconds old or older counts as inactive.
    """

    def __init__(self, timeout_duration: float | timedelta) -> None:
        if isinstance(timeout_duration, timedelta):
            timeout_duration = timeout_duration.total_seconds()
        self.clients_table: dict[str, ClientInfo] = {}
        self.timeout_duration = timeout_duration
        self._lock = threading.Lock()
        self._cleanup_task: asyncio.Task | None = None

    @classmethod
    def with_background_cleanup(cls, timeout_duration: float | timedelta) -> ClientManager:
        """Create a manager that drops inactive clients every second.

        Must be called while an asyncio event loop is running.
        """
        manager = cls(timeout_duration)
        loop = asyncio.get_running_loop()
        manager._cleanup_task = loop.create_task(manager._cleanup_loop())
        return manager

    async def _cleanup_loop(self) -> None:
        while True:
            self.cleanup_inactive_clients()
            await asyncio.sleep(_CLEANUP_INTERVAL)

    def stop_background_cleanup(self) -> None:
        """Cancel the background cleanup task, if one is running."""
        if self._cleanup_task is not None:
            self._cleanup_task.cancel()
            self._cleanup_task = None

    def upsert_client(self, client: ClientInfo) -> None:
        """Add a client, replacing any entry with the same user name."""
        with self._lock:
            self.clients_table[client.user_name] = client

    def active_client_count(self) -> int:
        with self._lock:
            return len(self.clients_table)

    def cleanup_inactive_clients(self) -> None:
        """Remove every client that has been silent for the timeout or longer."""
        now = time.monotonic()
        with self._lock:
            self.clients_table = {
                name: client
                for name, client in self.clients_table.items()
                if now - client.last_message_time < self.timeout_duration
            }

    def update_client_activity(self, user_name: str) -> None:
        """Mark a client as active now; raise ClientNotFoundError if unknown."""
        with self._lock:
            client = self.clients_table.get(user_name)
            if client is None:
                raise ClientNotFoundError(user_name)
            client.last_message_time = time.monotonic()