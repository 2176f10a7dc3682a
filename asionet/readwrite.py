"""Blocking helpers that move one chunk of data over a connected socket."""

from __future__ import annotations

import socket
import sys
from typing import TextIO

from asionet.msgnode import RECVSIZE


def read_data(sock: socket.socket, out: TextIO | None = None) -> bytes:
    """Receive at most one buffer's worth of data from ``sock``.

    Reports the number of bytes read on ``out`` and returns them.
    Raises EOFError if the peer has closed the connection.
    """
    out = sys.stdout if out is None else out
    data = sock.recv(RECVSIZE)
    if not data:
        raise EOFError("connection closed by peer")
    out.write(f"read length:{len(data)}\n")
    return data


def write_data(data: bytes | str, sock: socket.socket) -> bool:
    """Write all of ``data`` to ``sock``; return True once every byte is sent."""
    payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    view = memoryview(payload)
    sent = 0
    while sent < len(payload):
        sent += sock.send(view[sent:])
    return sent == len(payload)