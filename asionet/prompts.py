"""Interactive prompts for choosing a mode, a port and an IPv4 address."""

from __future__ import annotations

import enum
import ipaddress
import re
import sys
from typing import Callable, TextIO

_MAX_PORT_VALUE = 0xFFFFFFFF
_PORT_PATTERN = re.compile(r"\s*\+?\d+")

_MODE_PROMPT = "请选择要运行的模式(0:服务器/1:客户端):"
_MODE_RETRY = "输入错误，选择要运行的模式(0:服务器/1:客户端):"
_PORT_PROMPT = "请输入端口号:"
_PORT_RETRY = "输入错误\n"
_IP_PROMPT = "请输入ip地址:"
_IP_RETRY = "请输入一个合法的ipv4地址\n"


class Mode(enum.Enum):
    """Which side of the connection to run."""

    SERVER = "0"
    CLIENT = "1"


def parse_port(text: str) -> int:
    """Parse a port number given as decimal text.

    Leading whitespace and a plus sign are allowed; anything after the digits
    is not. Values above the 32-bit unsigned range raise ValueError.
    """
    if not _PORT_PATTERN.fullmatch(text):
        raise ValueError(f"not a port number: {text!r}")
    value = int(text)
    if value > _MAX_PORT_VALUE:
        raise ValueError(f"port number out of range: {text!r}")
    return value


def parse_ipv4(text: str, reject_unspecified: bool = False) -> ipaddress.IPv4Address:
    """Parse a dotted-quad IPv4 address.

    With ``reject_unspecified`` the address 0.0.0.0 is refused too.
    """
    try:
        address = ipaddress.IPv4Address(text)
    except ipaddress.AddressValueError as exc:
        raise ValueError(f"not an IPv4 address: {text!r}") from exc
    if reject_unspecified and address.is_unspecified:
        raise ValueError(f"unspecified address not allowed: {text!r}")
    return address


def _read(read_line: Callable[[], str | None], out: TextIO) -> str:
    out.flush()
    line = read_line()
    if line is None:
        raise EOFError("no more input")
    return line.rstrip("\r\n")


def ask_port(read_line: Callable[[], str | None] = input,
             out: TextIO | None = None) -> int:
    """Prompt until a valid port number is entered and return it."""
    out = sys.stdout if out is None else out
    while True:
        out.write(_PORT_PROMPT)
        try:
            return parse_port(_read(read_line, out))
        except ValueError:
            out.write(_PORT_RETRY)


def ask_ipv4(read_line: Callable[[], str | None] = input,
             out: TextIO | None = None,
             reject_unspecified: bool = False) -> ipaddress.IPv4Address:
    """Prompt until a valid IPv4 address is entered and return it."""
    out = sys.stdout if out is None else out
    while True:
        out.write(_IP_PROMPT)
        try:
            return parse_ipv4(_read(read_line, out), reject_unspecified)
        except ValueError:
            out.write(_IP_RETRY)


def ask_mode(read_line: Callable[[], str | None] = input,
             out: TextIO | None = None) -> Mode:
    """Prompt until "0" (server) or "1" (client) is entered."""
    out = sys.stdout if out is None else out
    out.write(_MODE_PROMPT)
    while True:
        line = _read(read_line, out)
        try:
            return Mode(line)
        except ValueError:
            out.write(_MODE_RETRY)