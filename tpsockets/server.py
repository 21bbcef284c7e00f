"""Server: accepts one client and logs the messages and packets it sends."""
from __future__ import annotations

import argparse
import logging
import socket
import sys

from tpsockets.protocol import INT_CODEC, OpCode, decode_message, decode_values

PORT = "4444"

_log = logging.getLogger("Servidor")


def start_server(host: str | None = None, port: str | int = PORT) -> socket.socket:
    """Create a listening IPv4 TCP socket."""
    family, socktype, proto, _, address = socket.getaddrinfo(
        host, port, socket.AF_INET, socket.SOCK_STREAM, 0, socket.AI_PASSIVE
    )[0]
    server = socket.socket(family, socktype, proto)
    try:
        server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        server.bind(address)
        server.listen()
    except OSError:
        server.close()
        raise
    _log.debug("Listo para escuchar a mi cliente")
    return server


def wait_client(server_sock: socket.socket) -> socket.socket:
    """Accept the next client connection."""
    client, _ = server_sock.accept()
    _log.info("Se conecto un cliente!")
    return client


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    data = bytearray()
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            raise ConnectionError(f"connection closed after {len(data)} of {size} bytes")
        data += chunk
    return bytes(data)


def receive_operation(sock: socket.socket) -> OpCode | int | None:
    """Read an operation code; close the socket and return None if the peer left."""
    try:
        data = _recv_exact(sock, INT_CODEC.size)
    except OSError:
        sock.close()
        return None
    (code,) = INT_CODEC.unpack(data)
    try:
        return OpCode(code)
    except ValueError:
        return code


def receive_buffer(sock: socket.socket) -> bytes:
    """Read a size-prefixed payload."""
    (size,) = INT_CODEC.unpack(_recv_exact(sock, INT_CODEC.size))
    if size < 0:
        raise ValueError(f"negative payload size {size}")
    return _recv_exact(sock, size)


def receive_message(sock: socket.socket) -> str:
    """Read and log a text message."""
    message = decode_message(receive_buffer(sock))
    _log.info("Me llego el mensaje %s", message)
    return message


def receive_packet(sock: socket.socket) -> list[str]:
    """Read a packet and return its values as text."""
    return [decode_message(value) for value in decode_values(receive_buffer(sock))]


def serve_client(sock: socket.socket, logger: logging.Logger | None = None) -> None:
    """Handle frames from a client until it disconnects."""
    log = logger if logger is not None else _log
    while True:
        op = receive_operation(sock)
        if op is None:
            log.error("el cliente se desconecto. Terminando servidor")
            return
        if op == OpCode.MESSAGE:
            receive_message(sock)
        elif op == OpCode.PACKET:
            values = receive_packet(sock)
            log.info("Me llegaron los siguientes valores:\n")
            for value in values:
                log.info("%s", value)
        else:
            log.warning("Operacion desconocida. No quieras meter la pata")


def _configure_logging(log_file: str) -> None:
    _log.setLevel(logging.DEBUG)
    _log.propagate = False
    formatter = logging.Formatter(
        "[%(levelname)s] %(asctime)s %(name)s/(%(process)d:%(thread)d): %(message)s",
        "%H:%M:%S",
    )
    for handler in (logging.FileHandler(log_file, encoding="utf-8"), logging.StreamHandler(sys.stdout)):
        handler.setFormatter(formatter)
        _log.addHandler(handler)


def main(argv: list[str] | None = None) -> int:
    """Serve one client; exit with failure status once it disconnects."""
    parser = argparse.ArgumentParser(prog="tpsockets-server")
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", default=PORT)
    parser.add_argument("--log-file", default="log.log")
    args = parser.parse_args(argv)

    _configure_logging(args.log_file)
    with start_server(args.host, args.port) as server:
        _log.info("Servidor listo para recibir al cliente")
        with wait_client(server) as client:
            serve_client(client, _log)
    return 1


if __name__ == "__main__":
    sys.exit(main())