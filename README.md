# tpsockets

A small TCP client and server that talk over a simple binary protocol.

## The protocol

Every frame on the wire is an operation code and a payload size, followed by
the payload:

| field   | size         | meaning                                   |
|---------|--------------|-------------------------------------------|
| op code | 4 bytes      | `OpCode.MESSAGE` (0) or `OpCode.PACKET` (1) |
| size    | 4 bytes      | length of the payload in bytes            |
| payload | `size` bytes | a message, or a run of values             |

Both integers are 32-bit signed and little-endian. A message payload is a
UTF-8 string ending in a NUL byte. A packet payload is a run of values, each
with its own 4-byte little-endian length before it. Text values are sent
UTF-8 encoded and NUL-terminated; byte values are sent as they are.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running

Start the server first:

```
tpsockets-server [--host HOST] [--port PORT] [--log-file FILE]
```

By default it listens on all IPv4 addresses, port 4444, and logs to `log.log`
and to standard output. It accepts one client and handles its frames: for a
message it logs the text, for a packet it logs each value, and for an unknown
operation code it logs a warning. When the client disconnects the server logs
an error and exits with status 1.

Then start the client:

```
tpsockets-client [--config FILE]
```

The configuration file defaults to `./../client/cliente.config`. It holds
`KEY=VALUE` lines; lines starting with `#` and lines without `=` are ignored,
and keys and values are taken exactly as written, without trimming spaces:

```
IP=127.0.0.1
PUERTO=4444
LOG_PATH_FILE_NAME=client.log
LOG_IN_CONSOLE=1
LOG_PROCESS_NAME=client
```

`IP` and `PUERTO` are required; without them the client logs an error and
exits with status 1. The `LOG_*` keys are optional: the log file defaults to
`./../client/logs/bocajrs.log` (its directory must exist), console logging
defaults to on (`LOG_IN_CONSOLE=0` turns it off), and the logger name defaults
to `someProcessName`.

The client then reads lines from the console, shown with a `> ` prompt, and
logs each one until it gets an empty or blank line (or end of input). After
that it connects to the server, reads a second run of lines the same way, and
sends them to the server as one packet, one value per line.

## Using the library

```python
from tpsockets.protocol import OpCode, Packet, decode_message, decode_values, message_packet

packet = Packet()
packet.add("hello")
packet.add(b"raw bytes")
frame = packet.serialize()

values = decode_values(packet.payload)   # [b"hello\0", b"raw bytes"]
text = decode_message(values[0])         # "hello"

assert message_packet("hi").op_code is OpCode.MESSAGE
```

`decode_values` raises `ValueError` when a payload is truncated or carries a
negative length.

`tpsockets.config.Config` reads configuration files (`Config.load`,
`Config.parse`) and answers `has`, `get_string` and `get_int`.

`tpsockets.client` provides `create_connection`, `send_message`,
`send_packet`, `build_packet`, `read_console`, `init_config`, `init_logger`
and `is_blank`.

`tpsockets.server` provides `start_server`, `wait_client`,
`receive_operation`, `receive_buffer`, `receive_message`, `receive_packet`
and `serve_client` for reading frames from a connected socket.

## What it does not do

The server handles a single client and stops once that client disconnects;
it does not serve several clients or keep running between connections. The
client command only sends packets; messages can be sent with `send_message`
from code. Nothing is sent back from the server to the client.