# asionet

Small TCP building blocks and three ready-made console programs: an
asynchronous echo server, a connect/accept probe and a line-based echo chat.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## The `asionet` command

```
asionet [echo|connect|chat] [--port PORT]
```

- `asionet` or `asionet echo` runs the echo server on all interfaces. It listens
  on port 10086 unless `--port` gives another port. Every client is served at
  the same time. Each message is printed as `sever receive data is: ...` and
  then sent back unchanged. The server runs until it is interrupted.
- `asionet connect` and `asionet chat` are interactive. They first ask for the
  mode: `0` runs the server and `1` runs the client. A server then asks for the
  port. A client asks for an IPv4 address and then for the port. Any invalid
  answer is asked again.
  - `connect` as a server accepts connections and prints the address of each
    peer. As a client it connects once and disconnects at once.
  - `chat` as a server echoes back what each client sends. Every client is
    served on its own thread. As a client it sends each line typed and prints
    the reply. The client refuses the address `0.0.0.0`, skips empty lines, and
    disconnects on `q` or at the end of input.

`--port` applies only to the echo server. The command exits with status 1 when
input ends early or a value is invalid, and with status 130 when interrupted.
The `connect` client exits with the system error number if the connection fails.

## Library overview

- `asionet.msgnode`
  - `MsgNode` is a fixed-size byte buffer with a transfer cursor. It has
    `append_data_offset`, `remaining`, `is_complete` and `filled`.
  - `RECVSIZE` (1024) is the default buffer size.
- `asionet.readwrite` works on a connected blocking socket.
  - `read_data` receives at most `RECVSIZE` bytes and raises `EOFError` when the
    peer has closed.
  - `write_data` sends every byte of its data.
- `asionet.prompts` checks console input.
  - `parse_port` and `parse_ipv4` validate values.
  - `ask_port`, `ask_ipv4` and `ask_mode` ask again until the answer is valid.
  - `Mode` is the server/client choice.
- `asionet.session.Session` wraps an asyncio stream pair.
  - `Session.connect` opens a new connection.
  - `write` and `write_all` share one queue, so messages go out in the order
    given. `write` hands data over in pieces of up to 1024 bytes. `write_all`
    hands each message over whole.
  - `write_unordered` sends outside the queue and keeps no order.
  - `drain` waits for all scheduled sends and raises the first failure.
  - `read` waits for a full 1024-byte buffer. `read_all` returns whatever
    arrives next.
  - `close` cancels pending sends and closes the connection. A session can be
    used with `async with`.
- `asionet.echo_server`
  - `EchoServer` has `start`, `serve_forever` and `close`. Its `bound_port`
    property gives the port actually used, which helps after starting with
    port 0. It can be used with `async with`.
  - `run_echo_server` runs the server on all interfaces.
- `asionet.connect`
  - `connect_once` connects and then disconnects. It returns 0 or the system
    error number.
  - `accept_loop` accepts connections and reports each peer's address. It
    accepts `limit` connections, or runs forever without a limit.
- `asionet.chat`
  - `serve_connection` echoes everything on one socket.
  - `run_server` serves each connection on a thread. It accepts `limit`
    connections if one is given.
  - `run_client` is the line-by-line client.
- `asionet.cli` has `interactive` and `main`, which run the `asionet` command.

## What it does not do

- The servers always listen on all interfaces. The command has no option to
  choose the address.
- The `connect` and `chat` programs take their address and port only
  interactively, not from the command line.
- `Session` only moves bytes. It has no message framing and does not process
  what it receives.
- There is no encryption and no authentication.