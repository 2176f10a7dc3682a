import io
import socket

import pytest

from asionet.msgnode import RECVSIZE
from asionet.readwrite import read_data, write_data


@pytest.fixture
def pair():
    a, b = socket.socketpair()
    yield a, b
    a.close()
    b.close()


def test_round_trip_bytes(pair):
    a, b = pair
    payload = b"hello"
    assert write_data(payload, a) is True
    out = io.StringIO()
    assert read_data(b, out) == payload
    assert out.getvalue() == f"read length:{len(payload)}\n"


def test_round_trip_str_is_utf8(pair):
    a, b = pair
    text = "你好"
    assert write_data(text, a) is True
    assert read_data(b, io.StringIO()) == text.encode("utf-8")


def test_read_is_bounded_by_buffer_size(pair):
    a, b = pair
    payload = b"x" * (RECVSIZE * 3)
    a.setblocking(True)
    assert write_data(payload, a) is True
    received = b""
    while len(received) < len(payload):
        chunk = read_data(b, io.StringIO())
        assert 0 < len(chunk) <= RECVSIZE
        received += chunk
    assert received == payload


def test_read_after_peer_close_raises_eof(pair):
    a, b = pair
    a.shutdown(socket.SHUT_WR)
    out = io.StringIO()
    with pytest.raises(EOFError):
        read_data(b, out)
    assert out.getvalue() == ""


def test_empty_write_succeeds(pair):
    a, _ = pair
    assert write_data(b"", a) is True