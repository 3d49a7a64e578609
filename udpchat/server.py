"""UDP echo server that keeps track of the clients it hears from."""

from __future__ import annotations

import argparse
import asyncio
from datetime import timedelta

from .client_manager import ClientInfo, ClientManager
from .protocol import MessageProtocol, ProtocolError
from .transport import Address, UdpSocket

SERVER_ADDRESS = "0.0.0.0"
SERVER_PORT = 9001
BUFFER_SIZE = 1024
DEFAULT_TIMEOUT = 30.0
ANONYMOUS = "anonymous"
SEPARATOR = "-" * 32


async def set_up_server(host: str = SERVER_ADDRESS, port: int = SERVER_PORT) -> UdpSocket:
    """Bind the server socket and announce the port it listens on."""
    sock = await UdpSocket.bind(host, port)
    print(f"Server is running on port {sock.local_address()[1]}")
    return sock


async def _receive(sock: UdpSocket) -> tuple[bytes, Address, str]:
    print("\nWaiting for a message…")
    data, addr = await sock.recv_from(BUFFER_SIZE)
    print(f"\n{len(data)} bytes received from {addr}")
    message = data.decode("utf-8", errors="replace")
    print(f"\nReceived message: {message}")
    return data, addr, message


async def _echo(sock: UdpSocket, message: str, addr: Address) -> None:
    sent = await sock.send_to(message.encode("utf-8"), addr)
    print(f"sent {sent} bytes to {addr}")


def _user_name_of(data: bytes, message: str) -> str:
    """Take the user name from a protocol frame, else the first word of the text."""
    try:
        return MessageProtocol.deserialize(data).user_name
    except ProtocolError:
        words = message.split()
        return words[0] if words else ANONYMOUS


async def handle_client(sock: UdpSocket) -> str:
    """Receive one datagram, echo it back unless empty, and return its text."""
    _, addr, message = await _receive(sock)
    if message:
        await _echo(sock, message, addr)
    return message


async def handle_client_with_manager(sock: UdpSocket, client_manager: ClientManager) -> str:
    """Receive one datagram, record its sender, echo it back and return its text."""
    data, addr, message = await _receive(sock)
    if message:
        user_name = _user_name_of(data, message)
        client_manager.upsert_client(ClientInfo(user_name=user_name, socket_addr=addr))
        print(f"Updated client info for user: {user_name}")
        await _echo(sock, message, addr)
    return message


async def run_forever(host: str = SERVER_ADDRESS, port: int = SERVER_PORT) -> None:
    """Echo datagrams until cancelled."""
    sock = await set_up_server(host, port)
    try:
        while True:
            await handle_client(sock)
            print(SEPARATOR)
    finally:
        sock.close()


async def serve_with_manager(
    host: str = SERVER_ADDRESS,
    port: int = SERVER_PORT,
    timeout_duration: float | timedelta = DEFAULT_TIMEOUT,
) -> None:
    """Echo datagrams and track clients, dropping idle ones, until cancelled."""
    sock = await set_up_server(host, port)
    manager = ClientManager.with_background_cleanup(timeout_duration)
    print(
        f"Client manager initialized with {manager.timeout_duration:g}s timeout "
        "and background cleanup"
    )
    try:
        while True:
            await handle_client_with_manager(sock, manager)
            print(f"Active clients: {manager.active_client_count()}")
            print(SEPARATOR)
    finally:
        manager.stop_background_cleanup()
        sock.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="udpchat-server", description="Run the UDP chat echo server."
    )
    parser.add_argument("--host", default=SERVER_ADDRESS, help="address to bind")
    parser.add_argument("--port", type=int, default=SERVER_PORT, help="port to bind")
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="seconds of silence before a client is dropped",
    )
    args = parser.parse_args(argv)
    try:
        asyncio.run(serve_with_manager(args.host, args.port, args.timeout))
    except KeyboardInterrupt:
        pass
    return 0