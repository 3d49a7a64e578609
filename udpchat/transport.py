"""A small awaitable UDP socket built on asyncio datagram endpoints."""

from __future__ import annotations

import asyncio
from typing import Any

Address = tuple[str, int]

_CLOSED = object()


class _DatagramQueue(asyncio.DatagramProtocol):
    """Collects incoming datagrams and errors into a queue."""

    def __init__(self) -> None:
        self.queue: asyncio.Queue[Any] = asyncio.Queue()

    def datagram_received(self, data: bytes, addr: Any) -> None:
        self.queue.put_nowait((data, addr))

    def error_received(self, exc: Exception) -> None:
        self.queue.put_nowait(exc)

    def connection_lost(self, exc: Exception | None) -> None:
        self.queue.put_nowait(_CLOSED)


class UdpSocket:
    """A bound UDP socket with awaitable send and receive."""

    def __init__(self, transport: asyncio.DatagramTransport, protocol: _DatagramQueue) -> None:
        self._transport = transport
        self._protocol = protocol

    @classmethod
    async def bind(cls, host: str, port: int) -> UdpSocket:
        """Bind a new socket to host and port (port 0 picks a free one)."""
        loop = asyncio.get_running_loop()
        transport, protocol = await loop.create_datagram_endpoint(
            _DatagramQueue, local_addr=(host, port)
        )
        return cls(transport, protocol)

    def local_address(self) -> Address:
        """The (host, port) the socket is bound to."""
        sockname = self._transport.get_extra_info("sockname")
        return sockname[0], sockname[1]

    async def recv_from(self, bufsize: int) -> tuple[bytes, Address]:
        """Wait for one datagram; data beyond bufsize bytes is discarded."""
        if bufsize <= 0:
            raise ValueError("bufsize must be positive")
        queue = self._protocol.queue
        if self._transport.is_closing() and queue.empty():
            raise OSError("socket is closed")
        item = await queue.get()
        if item is _CLOSED:
            queue.put_nowait(_CLOSED)
            raise OSError("socket is closed")
        if isinstance(item, Exception):
            raise item
        data, addr = item
        return data[:bufsize], (addr[0], addr[1])

    async def send_to(self, data: bytes, addr: Address) -> int:
        """Send one datagram to addr and return the number of bytes sent."""
        if self._transport.is_closing():
            raise OSError("socket is closed")
        payload = bytes(data)
        self._transport.sendto(payload, addr)
        return len(payload)

    def close(self) -> None:
        """Close the socket; pending and later receives raise OSError."""
        self._transport.close()

    async def __aenter__(self) -> UdpSocket:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()