"""An asynchronous TCP server that echoes every message back to its sender."""

from __future__ import annotations

import asyncio
import contextlib
import sys
from typing import TextIO

from asionet.msgnode import RECVSIZE

DEFAULT_PORT = 10086


class EchoServer:
    """Accepts any number of clients and echoes what each one sends."""

    def __init__(self, port: int = DEFAULT_PORT, host: str = "0.0.0.0",
                 out: TextIO | None = None) -> None:
        self.port = port
        self.host = host
        self._out = sys.stdout if out is None else out
        self._server: asyncio.base_events.Server | None = None
        self._clients: set[asyncio.StreamWriter] = set()

    @property
    def bound_port(self) -> int:
        """The port actually listened on; useful when started with port 0."""
        if self._server is None:
            raise RuntimeError("server is not started")
        return self._server.sockets[0].getsockname()[1]

    async def start(self) -> None:
        """Bind and begin accepting connections."""
        if self._server is None:
            self._server = await asyncio.start_server(
                self._handle, self.host, self.port
            )

    async def serve_forever(self) -> None:
        """Start if needed and serve until cancelled."""
        await self.start()
        await self._server.serve_forever()

    async def close(self) -> None:
        """Stop accepting and drop every connected client."""
        if self._server is None:
            return
        self._server.close()
        for writer in list(self._clients):
            writer.close()
        await self._server.wait_closed()
        self._server = None

    async def __aenter__(self) -> "EchoServer":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _handle(self, reader: asyncio.StreamReader,
                      writer: asyncio.StreamWriter) -> None:
        self._clients.add(writer)
        try:
            while True:
                data = await reader.read(RECVSIZE)
                if not data:
                    self._out.write("error code is: eof\n\n")
                    break
                text = data.decode("utf-8", errors="replace")
                self._out.write(f"sever receive data is: {text}\n\n")
                writer.write(data)
                await writer.drain()
        except ConnectionError as exc:
            self._out.write(f"error code is: {exc}\n\n")
        finally:
            self._clients.discard(writer)
            writer.close()
            with contextlib.suppress(ConnectionError):
                await writer.wait_closed()


def run_echo_server(port: int = DEFAULT_PORT, out: TextIO | None = None) -> None:
    """Run an echo server on all interfaces until interrupted."""
    try:
        asyncio.run(EchoServer(port, out=out).serve_forever())
    except OSError as exc:
        sys.stderr.write(f"{exc}\n")