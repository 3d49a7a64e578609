"""Interactive client that sends one message and prints the echo."""

from __future__ import annotations

import argparse
import asyncio
from typing import Callable

from .transport import UdpSocket

SERVER_PORT = 9001
CLIENT_PORT = 9050
BUFFER_SIZE = 1024


async def set_up_client(
    input_func: Callable[[], str] = input, client_port: int = CLIENT_PORT
) -> tuple[UdpSocket, str, str]:
    """Ask for the server address and message, then bind the client socket.

    Returns the socket, the message and the server address.
    """
    print("\nType the server's address to connect to: ")
    server_address = input_func().strip()

    print("\nType message to send to server: ")
    message = input_func().strip()

    sock = await UdpSocket.bind(server_address, client_port)

    print(f"\nClient is running on port {sock.local_address()[1]}")
    print(f"\nServer is running on port {SERVER_PORT}")
    return sock, message, server_address


async def send_message(
    sock: UdpSocket, message: str, server_address: str, server_port: int = SERVER_PORT
) -> int:
    """Send message to the server and return the number of bytes sent."""
    print("\nSending message to server…")
    sent = await sock.send_to(message.encode("utf-8"), (server_address, server_port))
    print(f"sent {sent} bytes to {server_address}")
    return sent


async def receive_message(sock: UdpSocket) -> str:
    """Wait for the echoed message, print it and return it."""
    data, addr = await sock.recv_from(BUFFER_SIZE)
    print(f"\n{len(data)} bytes received from {addr}")
    message = data.decode("utf-8", errors="replace")
    print(f"\nReceived message: {message}")
    return message


async def run_once(input_func: Callable[[], str] = input) -> str:
    """Perform one round trip with the server and return the echoed text."""
    sock, message, server_address = await set_up_client(input_func)
    async with sock:
        await send_message(sock, message, server_address)
        received = await receive_message(sock)
        print("closing socket…")
    return received


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="udpchat-client",
        description="Send one message to the UDP chat server and print the echo.",
    )
    parser.parse_args(argv)
    try:
        asyncio.run(run_once())
    except KeyboardInterrupt:
        pass
    return 0