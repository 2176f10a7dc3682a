"""An asynchronous TCP session with queued, ordered sends and buffered reads."""

from __future__ import annotations

import asyncio
import contextlib
from collections import deque

from asionet.msgnode import RECVSIZE, MsgNode

_WRITE_SOME_LIMIT = RECVSIZE
"""Largest piece handed to the transport in one step by :meth:`Session.write`."""


class Session:
    """Wraps a connected stream pair and sends and receives through MsgNodes.

    Writes never block: they are scheduled on the running event loop.
    Messages passed to :meth:`write` and :meth:`write_all` share one queue,
    so they go out in the order they were given. :meth:`write_unordered`
    bypasses the queue and gives no ordering guarantee. Any failure of a
    scheduled send is raised by the next call to :meth:`drain`.
    """

    def __init__(self, reader: asyncio.StreamReader,
                 writer: asyncio.StreamWriter) -> None:
        self._reader = reader
        self._writer = writer
        self._send_queue: deque[tuple[MsgNode, int | None]] = deque()
        self._send_task: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()
        self._error: BaseException | None = None
        self._read_pending = False

    @classmethod
    async def connect(cls, host: str, port: int) -> "Session":
        """Open a TCP connection to ``host``:``port`` and wrap it."""
        reader, writer = await asyncio.open_connection(host, port)
        return cls(reader, writer)

    @property
    def send_pending(self) -> bool:
        """Whether queued messages are still being sent."""
        return self._send_task is not None

    @property
    def read_pending(self) -> bool:
        """Whether a read is in progress."""
        return self._read_pending

    def _track(self, task: asyncio.Task) -> None:
        self._tasks.add(task)
        task.add_done_callback(self._finished)

    def _finished(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None and self._error is None:
            self._error = exc

    async def _send_node(self, node: MsgNode, chunk: int | None) -> None:
        while not node.is_complete():
            piece = node.remaining()
            if chunk is not None:
                piece = piece[:chunk]
            self._writer.write(bytes(piece))
            node.append_data_offset(len(piece))
            await self._writer.drain()

    async def _pump(self) -> None:
        try:
            while self._send_queue:
                node, chunk = self._send_queue[0]
                await self._send_node(node, chunk)
                self._send_queue.popleft()
        except BaseException:
            self._send_queue.clear()
            raise
        finally:
            self._send_task = None

    def _enqueue(self, data: bytes | str, chunk: int | None) -> None:
        self._send_queue.append((MsgNode(data), chunk))
        if self._send_task is None:
            task = asyncio.get_running_loop().create_task(self._pump())
            self._send_task = task
            self._track(task)

    def write_unordered(self, data: bytes | str) -> None:
        """Send ``data`` at once, outside the queue, in order with nothing."""
        node = MsgNode(data)
        task = asyncio.get_running_loop().create_task(
            self._send_node(node, _WRITE_SOME_LIMIT)
        )
        self._track(task)

    def write(self, data: bytes | str) -> None:
        """Queue ``data``; it is sent piece by piece after earlier messages."""
        self._enqueue(data, _WRITE_SOME_LIMIT)

    def write_all(self, data: bytes | str) -> None:
        """Queue ``data``; it is handed over whole after earlier messages."""
        self._enqueue(data, None)

    def _begin_read(self) -> None:
        if self._read_pending:
            raise RuntimeError("a read is already pending on this session")
        self._read_pending = True

    async def read(self) -> bytes:
        """Read until a full receive buffer of RECVSIZE bytes has arrived.

        Raises asyncio.IncompleteReadError if the peer closes first.
        """
        self._begin_read()
        try:
            node = MsgNode(total=RECVSIZE)
            while not node.is_complete():
                chunk = await self._reader.read(len(node.remaining()))
                if not chunk:
                    raise asyncio.IncompleteReadError(node.filled, node.total)
                node.remaining()[: len(chunk)] = chunk
                node.append_data_offset(len(chunk))
            return bytes(node.msg)
        finally:
            self._read_pending = False

    async def read_all(self) -> bytes:
        """Receive whatever arrives next, at most RECVSIZE bytes.

        Raises EOFError if the peer has closed the connection.
        """
        self._begin_read()
        try:
            node = MsgNode(total=RECVSIZE)
            chunk = await self._reader.read(node.total)
            if not chunk:
                raise EOFError("connection closed by peer")
            node.remaining()[: len(chunk)] = chunk
            node.append_data_offset(len(chunk))
            return node.filled
        finally:
            self._read_pending = False

    async def drain(self) -> None:
        """Wait until every scheduled send is done; raise the first failure."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        if self._error is not None:
            error, self._error = self._error, None
            raise error
        await self._writer.drain()

    async def close(self) -> None:
        """Close the connection."""
        for task in list(self._tasks):
            task.cancel()
        self._writer.close()
        with contextlib.suppress(ConnectionError):
            await self._writer.wait_closed()

    async def __aenter__(self) -> "Session":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()