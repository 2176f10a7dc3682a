import io
import socket
import threading

import pytest

from asionet.chat import serve_connection
from asionet.cli import interactive, main


def _run(variant, lines):
    it = iter(lines)
    out = io.StringIO()
    result = interactive(variant, lambda: next(it, None), out)
    return result, out.getvalue()


def _main_with_stdin(monkeypatch, variant, text):
    monkeypatch.setattr("sys.stdin", io.StringIO(text))
    return main([variant])


@pytest.fixture
def listener():
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    sock.listen()
    yield sock
    sock.close()


def _port(sock):
    return sock.getsockname()[1]


@pytest.mark.parametrize("mode_lines", [["1"], ["2", "1"]], ids=["direct", "retry"])
def test_interactive_connect_client_succeeds(listener, mode_lines):
    result, text = _run("connect", [*mode_lines, "127.0.0.1", str(_port(listener))])
    assert result == 0
    assert "连接服务器\n" in text
    assert text.endswith("断开连接服务器\n")
    retried = "输入错误，选择要运行的模式(0:服务器/1:客户端):" in text
    assert retried == (len(mode_lines) > 1)


def test_interactive_chat_client_round_trip(listener):
    def serve():
        conn, _ = listener.accept()
        serve_connection(conn, io.StringIO())

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    lines = ["1", "0.0.0.0", "127.0.0.1", str(_port(listener)), "hello", "q"]
    result, text = _run("chat", lines)
    thread.join(timeout=5)
    assert result == 0
    assert "请输入一个合法的ipv4地址\n" in text
    assert "hello\n" in text
    assert text.endswith("断开连接服务器\n")


@pytest.mark.parametrize("variant", ["echo", "bogus"])
def test_interactive_rejects_variant(variant):
    with pytest.raises(ValueError):
        _run(variant, [])


def test_interactive_end_of_input_raises():
    with pytest.raises(EOFError):
        _run("connect", [])


def test_main_unknown_variant_exits():
    with pytest.raises(SystemExit) as info:
        main(["bogus"])
    assert info.value.code == 2


def test_main_connect_client(listener, monkeypatch, capsys):
    stdin = f"1\n127.0.0.1\n{_port(listener)}\n"
    assert _main_with_stdin(monkeypatch, "connect", stdin) == 0
    assert "连接服务器\n" in capsys.readouterr().out


@pytest.mark.parametrize(
    "variant, stdin, message",
    [
        ("connect", "1\n127.0.0.1\n70000\n", "port out of range"),
        ("chat", "", "no more input"),
    ],
    ids=["port-range", "end-of-input"],
)
def test_main_reports_failure(monkeypatch, capsys, variant, stdin, message):
    assert _main_with_stdin(monkeypatch, variant, stdin) == 1
    assert message in capsys.readouterr().err