"""Blocking echo chat: a threaded server and a line-by-line client."""

from __future__ import annotations

import socket
import sys
import threading
from typing import Callable, TextIO

from asionet.msgnode import RECVSIZE
from asionet.prompts import parse_ipv4
from asionet.readwrite import read_data, write_data

_QUIT = "q"


def _check_port(port: int | str) -> int:
    port = int(port)
    if not 0 <= port <= 0xFFFF:
        raise ValueError(f"port out of range: {port}")
    return port


def _peer_ip(sock: socket.socket) -> str:
    peer = sock.getpeername()
    return peer[0] if isinstance(peer, tuple) else str(peer)


def serve_connection(sock: socket.socket, out: TextIO | None = None) -> None:
    """Echo everything received on ``sock`` until the peer disconnects.

    The socket is closed when the peer is gone or a transfer fails.
    """
    out = sys.stdout if out is None else out
    with sock:
        try:
            while True:
                data = sock.recv(RECVSIZE)
                if not data:
                    out.write("connect end\n")
                    break
                out.write(f"data size:{len(data)}\n")
                out.write(f"receive form:{_peer_ip(sock)}\n")
                out.write(f"receive data:{data.decode('utf-8', errors='replace')}")
                write_data(data, sock)
        except OSError as exc:
            sys.stderr.write(f"{exc}\n")


def run_server(port: int | str, out: TextIO | None = None,
               limit: int | None = None) -> None:
    """Listen on all interfaces and serve each client on its own thread.

    Runs forever unless ``limit`` connections have been accepted; in that
    case it waits for their threads to finish before returning.
    """
    out = sys.stdout if out is None else out
    port = _check_port(port)
    workers: list[threading.Thread] = []
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.bind(("0.0.0.0", port))
            listener.listen()
            while limit is None or len(workers) < limit:
                conn, _ = listener.accept()
                worker = threading.Thread(
                    target=serve_connection, args=(conn, out), daemon=True
                )
                worker.start()
                workers.append(worker)
    except OSError as exc:
        out.write(f"ErrorLog: {exc}\n")
    for worker in workers:
        worker.join()


def _next_line(read_line: Callable[[], str | None]) -> str | None:
    try:
        line = read_line()
    except EOFError:
        return None
    return None if line is None else line.rstrip("\r\n")


def run_client(ip: str, port: int | str,
               read_line: Callable[[], str | None] = input,
               out: TextIO | None = None) -> None:
    """Send each entered line to the server and print its reply.

    Entering "q" (or reaching the end of input) disconnects.
    An invalid address or port raises ValueError.
    """
    out = sys.stdout if out is None else out
    address = str(parse_ipv4(ip))
    port = _check_port(port)
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            out.write("连接服务器\n")
            sock.connect((address, port))
            out.write("请输入发送的数据(q退出):")
            while True:
                out.flush()
                line = _next_line(read_line)
                if line is None or line == _QUIT:
                    out.write("断开连接服务器\n")
                    break
                if not line:
                    continue
                write_data(line, sock)
                reply = read_data(sock, out)
                out.write(reply.decode("utf-8", errors="replace") + "\n")
    except (OSError, EOFError) as exc:
        out.write(f"ErrorLog: {exc}\n")