"""Blocking connect-and-disconnect client and an accept-only server."""

from __future__ import annotations

import itertools
import socket
import sys
from typing import Callable, TextIO

from asionet.prompts import parse_ipv4

_ANY_ADDRESS = "0.0.0.0"


def _stream(out: TextIO | None) -> TextIO:
    return sys.stdout if out is None else out


def _check_port(port: int | str) -> int:
    value = int(port)
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"port out of range: {value}")
    return value


def _reported(action: Callable[[], None], out: TextIO) -> int:
    """Run ``action``; an OSError is logged and turned into its error number."""
    try:
        action()
    except OSError as exc:
        out.write(f"ErrorLog: {exc}\n")
        return exc.errno or -1
    return 0


def connect_once(ip: str, port: int | str, out: TextIO | None = None) -> int:
    """Connect to ``ip``:``port``, then disconnect at once.

    Returns 0 on success or the system error number on failure.
    An invalid address or port raises ValueError.
    """
    stream = _stream(out)
    target = (str(parse_ipv4(ip)), _check_port(port))

    def attempt() -> None:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            stream.write("连接服务器\n")
            sock.connect(target)
        stream.write("断开连接服务器\n")

    return _reported(attempt, stream)


def accept_loop(port: int | str, out: TextIO | None = None,
                limit: int | None = None) -> int:
    """Listen on all interfaces and report the address of each peer.

    Runs forever unless ``limit`` connections have been accepted.
    Returns 0, or the system error number if listening fails.
    """
    stream = _stream(out)
    address = (_ANY_ADDRESS, _check_port(port))

    def serve() -> None:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.bind(address)
            listener.listen()
            rounds = itertools.count() if limit is None else range(limit)
            for _ in rounds:
                conn, peer = listener.accept()
                with conn:
                    stream.write(f"对方的ip地址:{peer[0]}\n")

    return _reported(serve, stream)