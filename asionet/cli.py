"""Command-line entry point choosing which networking program to run."""

from __future__ import annotations

import argparse
import enum
import sys
from typing import Callable, TextIO

from asionet.chat import run_client, run_server
from asionet.connect import accept_loop, connect_once
from asionet.echo_server import DEFAULT_PORT, run_echo_server
from asionet.prompts import Mode, ask_ipv4, ask_mode, ask_port


class Variant(str, enum.Enum):
    """The programs that can be started."""

    ECHO = "echo"
    CONNECT = "connect"
    CHAT = "chat"


def interactive(variant: Variant | str,
                read_line: Callable[[], str | None] = input,
                out: TextIO | None = None) -> int:
    """Ask for mode, address and port, then run the chosen side of ``variant``.

    Returns 0, or the system error number reported by the connect variant.
    """
    out = sys.stdout if out is None else out
    variant = Variant(variant)
    if variant is Variant.ECHO:
        raise ValueError("the echo server takes no interactive setup")
    mode = ask_mode(read_line, out)
    if mode is Mode.SERVER:
        port = ask_port(read_line, out)
        if variant is Variant.CONNECT:
            return accept_loop(port, out)
        run_server(port, out)
        return 0
    ip = str(ask_ipv4(read_line, out, reject_unspecified=variant is Variant.CHAT))
    port = ask_port(read_line, out)
    if variant is Variant.CONNECT:
        return connect_once(ip, port, out)
    run_client(ip, port, read_line, out)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the program named on the command line; the echo server by default."""
    parser = argparse.ArgumentParser(
        prog="asionet", description="Small TCP client and server programs."
    )
    parser.add_argument(
        "variant", nargs="?", default=Variant.ECHO.value,
        choices=[variant.value for variant in Variant],
        help="program to run",
    )
    parser.add_argument(
        "--port", type=int, default=DEFAULT_PORT,
        help="port the echo server listens on",
    )
    args = parser.parse_args(argv)
    variant = Variant(args.variant)
    try:
        if variant is Variant.ECHO:
            run_echo_server(args.port)
            return 0
        return interactive(variant)
    except EOFError:
        sys.stderr.write("no more input\n")
        return 1
    except ValueError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())