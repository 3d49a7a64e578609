import asyncio

import pytest

from udpchat.transport import UdpSocket

HOST = "127.0.0.1"


async def _recv(sock, bufsize=1024):
    return await asyncio.wait_for(sock.recv_from(bufsize), timeout=2)


@pytest.mark.asyncio
async def test_bind_picks_free_port():
    async with await UdpSocket.bind(HOST, 0) as sock:
        host, port = sock.local_address()
        assert host == HOST
        assert port > 0


@pytest.mark.asyncio
async def test_send_and_receive_roundtrip():
    async with await UdpSocket.bind(HOST, 0) as a, await UdpSocket.bind(HOST, 0) as b:
        sent = await a.send_to(b"hello tokio", b.local_address())
        assert sent == len(b"hello tokio")
        data, addr = await _recv(b)
        assert data == b"hello tokio"
        assert addr == a.local_address()


@pytest.mark.asyncio
async def test_reply_reaches_sender():
    async with await UdpSocket.bind(HOST, 0) as a, await UdpSocket.bind(HOST, 0) as b:
        await a.send_to(b"ping", b.local_address())
        data, addr = await _recv(b)
        await b.send_to(data, addr)
        echoed, _ = await _recv(a)
        assert echoed == b"ping"


@pytest.mark.asyncio
async def test_receive_truncates_to_bufsize():
    async with await UdpSocket.bind(HOST, 0) as a, await UdpSocket.bind(HOST, 0) as b:
        await a.send_to(b"hello world", b.local_address())
        data, _ = await _recv(b, bufsize=5)
        assert data == b"hello world"[:5]


@pytest.mark.asyncio
async def test_datagrams_arrive_separately():
    async with await UdpSocket.bind(HOST, 0) as a, await UdpSocket.bind(HOST, 0) as b:
        await a.send_to(b"one", b.local_address())
        await a.send_to(b"two", b.local_address())
        first, _ = await _recv(b)
        second, _ = await _recv(b)
        assert {first, second} == {b"one", b"two"}


@pytest.mark.asyncio
async def test_send_after_close_raises():
    sock = await UdpSocket.bind(HOST, 0)
    target = sock.local_address()
    sock.close()
    with pytest.raises(OSError):
        await sock.send_to(b"x", target)


@pytest.mark.asyncio
async def test_recv_after_close_raises():
    sock = await UdpSocket.bind(HOST, 0)
    sock.close()
    with pytest.raises(OSError):
        await asyncio.wait_for(sock.recv_from(1024), timeout=2)


@pytest.mark.asyncio
async def test_context_manager_closes_socket():
    async with await UdpSocket.bind(HOST, 0) as sock:
        target = sock.local_address()
    with pytest.raises(OSError):
        await sock.send_to(b"x", target)


@pytest.mark.asyncio
async def test_non_positive_bufsize_rejected():
    async with await UdpSocket.bind(HOST, 0) as sock:
        with pytest.raises(ValueError):
            await sock.recv_from(0)