import asyncio
import io

import pytest

from asionet.echo_server import DEFAULT_PORT, EchoServer

HOST = "127.0.0.1"


def _server(out=None):
    return EchoServer(0, HOST, io.StringIO() if out is None else out)


async def _open(server):
    return await asyncio.open_connection(HOST, server.bound_port)


async def _echo(reader, writer, message):
    writer.write(message)
    await writer.drain()
    return await reader.readexactly(len(message))


async def _wait_for(predicate, timeout=2.0):
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate() and loop.time() <= deadline:
        await asyncio.sleep(0.01)
    return predicate()


def test_default_port_matches_source():
    assert EchoServer().port == DEFAULT_PORT == 10086


@pytest.mark.asyncio
async def test_echoes_and_logs():
    out = io.StringIO()
    async with _server(out) as server:
        reader, writer = await _open(server)
        assert await _echo(reader, writer, b"hello") == b"hello"
        writer.close()
    assert "sever receive data is: hello\n\n" in out.getvalue()


@pytest.mark.asyncio
async def test_several_round_trips_on_one_connection():
    async with _server() as server:
        reader, writer = await _open(server)
        replies = [await _echo(reader, writer, m) for m in (b"one", b"two", b"three")]
        writer.close()
    assert replies == [b"one", b"two", b"three"]


@pytest.mark.asyncio
async def test_clients_are_independent():
    async with _server() as server:
        (r1, w1), (r2, w2) = [await _open(server) for _ in range(2)]
        w1.write(b"from-a")
        w2.write(b"from-b")
        await w1.drain()
        await w2.drain()
        assert await r2.readexactly(6) == b"from-b"
        assert await r1.readexactly(6) == b"from-a"
        w1.close()
        w2.close()


@pytest.mark.asyncio
async def test_client_disconnect_is_reported():
    out = io.StringIO()
    async with _server(out) as server:
        _, writer = await _open(server)
        writer.close()
        reported = await _wait_for(lambda: "error code is:" in out.getvalue())
    assert reported


@pytest.mark.asyncio
async def test_closed_server_refuses_connections():
    server = _server()
    await server.start()
    port = server.bound_port
    assert 0 < port < 65536
    await server.close()
    with pytest.raises(OSError):
        await asyncio.open_connection(HOST, port)


@pytest.mark.asyncio
async def test_bound_port_before_start_raises():
    server = _server()
    with pytest.raises(RuntimeError):
        _ = server.bound_port
    await server.start()
    try:
        assert 0 < server.bound_port < 65536
    finally:
        await server.close()


@pytest.mark.asyncio
async def test_serve_forever_echoes_until_cancelled():
    server = _server()
    await server.start()
    task = asyncio.ensure_future(server.serve_forever())
    reader, writer = await _open(server)
    assert await _echo(reader, writer, b"abc") == b"abc"
    writer.close()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    await server.close()